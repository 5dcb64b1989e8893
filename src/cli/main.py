"""
SeeBiNum CLI — просмотр чисел в бинарных кодировках и арифметика над ними

Ведущие опции (--log-level, --log-format, --json) разбирает argparse;
остальные аргументы — токены, читаемые слева направо:
- число или список через запятую: добавляется в последовательность
  в текущей кодировке
- ключевое слово кодировки (float16, uint32, ...): меняет кодировку
  последующих чисел
- операция (add, sub, mul, div, dot, nop): открывает новую операцию
- raw/num, showbinary/showhex, showhexfloat/showdecfloat: режимы

Вывод:
- есть операции: блоки "Operands to X:" и "Result from X:"
- ровно одно число: "To binary:" и "From binary:" по всем кодировкам
- несколько чисел: все числа
"""

import argparse
import dataclasses
import json
import logging
import os
import re
import sys
from typing import Any, Final, Optional, Sequence

from src.cli.config import (
    DEFAULT_LOG_LEVEL,
    DISPLAY_ORDER,
    ELEMENT_TYPE_KEYWORDS,
    FLOAT_FORMAT_KEYWORDS,
    LOG_FORMATS,
    LOG_LEVEL_ENV_VAR,
    LOG_LEVELS,
    OPERATION_KEYWORDS,
    PARSE_MODE_KEYWORDS,
    RAW_BITS_FORMAT_KEYWORDS,
    SessionConfig,
)
from src.cli.formatting import render, render_record
from src.cli.observability import setup_logging
from src.cli.parsing import parse_number
from src.cli.sequence import OperationSequence, OperationSequenceBuilder
from src.core.domain.element_type import ElementType, display_name
from src.core.domain.numeric_value import NumericValue
from src.core.math.conversion import read_to_double, read_to_int64, write_from_double
from src.performer.performer import OperationOutcome, perform_operation_sequence

logger = logging.getLogger(__name__)

USAGE: Final[str] = """\
Usage:
   seebinum 3.14159
   seebinum -13
   seebinum showbinary -13
   seebinum showhex -13
   seebinum 0x4240
   seebinum 0b1101
   seebinum float16 3.14
   seebinum float16 raw 0x4240
   seebinum uint32 mul 3 2 add 3 2 subtract 3 2 dot 1 2 3 4
   seebinum float32 0x2.4p0
   seebinum fixed12_12 sub 3 2

Options:
   showbinary showhex - display raw bits as binary or hex (default)
   showhexfloat showdecfloat - display float as hex or decimal (default)
   raw num - treat input as raw bit data or as number (default)
   add subtract multiply divide dot - apply operation to following numbers
   float16 bfloat16 float32 float64 - set floating point data type
   uint8 uint16 uint32 uint64 int8 int16 int32 int64 - set integer data type
   fixed12_12 fixed16_16 fixed8_24 - set fixed precision data type"""

_NUMBER_TOKEN_RE: Final[re.Pattern] = re.compile(r"-?[0-9]")

# Опции, за которыми следует отдельный аргумент-значение
_VALUE_OPTIONS: Final[frozenset[str]] = frozenset({"--log-level", "--log-format"})

_TO_BINARY_FLANKS: Final[tuple[str, str]] = (" -> ", "")
_FROM_BINARY_FLANKS: Final[tuple[str, str]] = (" <- ", "")


class UnknownTokenError(ValueError):
    """Токен не является ни числом, ни ключевым словом."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f'Unknown parameter: "{token}"')


# =============================================================================
# TOKENS
# =============================================================================


def is_number_token(token: str) -> bool:
    """Токен начинается с цифры или с '-' и цифры."""
    return _NUMBER_TOKEN_RE.match(token) is not None


def split_number_list(token: str) -> list[str]:
    """
    Разбиение списка чисел через запятую.

    Завершающая запятая не порождает лишнего числа.

    Examples:
        >>> split_number_list("1,2,3,")
        ['1', '2', '3']
    """
    pieces = token.split(",")
    if len(pieces) > 1 and pieces[-1] == "":
        pieces.pop()
    return pieces


def interpret_tokens(
    tokens: Sequence[str], config: Optional[SessionConfig] = None
) -> tuple[SessionConfig, OperationSequence]:
    """
    Чтение токенов слева направо.

    Args:
        tokens: Токены командной строки
        config: Начальное состояние (по умолчанию SessionConfig())

    Returns:
        (итоговое состояние, последовательность значений и операций)

    Raises:
        UnknownTokenError: Нераспознанный токен
    """
    config = config or SessionConfig()
    builder = OperationSequenceBuilder()

    for token in tokens:
        if is_number_token(token):
            for piece in split_number_list(token):
                builder.add_value(
                    parse_number(piece, config.preferred_type, config.parse_as_raw)
                )
        elif token in OPERATION_KEYWORDS:
            builder.add_operation(OPERATION_KEYWORDS[token])
        elif token in PARSE_MODE_KEYWORDS:
            config = dataclasses.replace(config, parse_as_raw=PARSE_MODE_KEYWORDS[token])
        elif token in ELEMENT_TYPE_KEYWORDS:
            config = dataclasses.replace(config, preferred_type=ELEMENT_TYPE_KEYWORDS[token])
        elif token in RAW_BITS_FORMAT_KEYWORDS:
            render_mode = dataclasses.replace(
                config.render_mode, raw_bits_format=RAW_BITS_FORMAT_KEYWORDS[token]
            )
            config = dataclasses.replace(config, render_mode=render_mode)
        elif token in FLOAT_FORMAT_KEYWORDS:
            render_mode = dataclasses.replace(
                config.render_mode, float_format=FLOAT_FORMAT_KEYWORDS[token]
            )
            config = dataclasses.replace(config, render_mode=render_mode)
        else:
            raise UnknownTokenError(token)

    sequence = builder.build()
    logger.debug(
        "interpreted %d token(s): %d value(s), %d operation(s)",
        len(tokens),
        len(sequence.values),
        len(sequence.ranges),
    )
    return config, sequence


# =============================================================================
# TEXT OUTPUT
# =============================================================================


def _print_numbers(values: Sequence[NumericValue], config: SessionConfig) -> None:
    for value in values:
        if value.element_type != ElementType.UNDEFINED:
            print("    " + render(value, config.render_mode))


def _print_all_types(
    values: Sequence[NumericValue], config: SessionConfig, flanks: tuple[str, str]
) -> None:
    for value in values:
        marker = "   *" if value.element_type == config.preferred_type else "    "
        print(marker + render(value, config.render_mode, *flanks))


def _to_binary_values(value_float: float) -> list[NumericValue]:
    return [
        NumericValue(element_type=tag, data=write_from_double(tag, value_float))
        for tag in DISPLAY_ORDER
    ]


def _from_binary_values(value_int: int) -> list[NumericValue]:
    return [NumericValue.from_raw_bits(tag, value_int) for tag in DISPLAY_ORDER]


def _print_outcomes(outcomes: Sequence[OperationOutcome], config: SessionConfig) -> None:
    for outcome in outcomes:
        name = outcome.operation_range.operation.value
        print(f"Operands to {name}:")
        _print_numbers(outcome.operands, config)
        print(f"Result from {name}:")
        _print_numbers([outcome.result], config)
        print()


def _print_single(value: NumericValue, config: SessionConfig) -> None:
    value_float = read_to_double(value.element_type, value.payload)
    value_int = read_to_int64(value.element_type, value.payload)

    print("To binary:")
    _print_all_types(_to_binary_values(value_float), config, _TO_BINARY_FLANKS)
    print()
    print("From binary:")
    _print_all_types(_from_binary_values(value_int), config, _FROM_BINARY_FLANKS)


# =============================================================================
# JSON OUTPUT
# =============================================================================


def _records(values: Sequence[NumericValue]) -> list[dict[str, Any]]:
    return [
        render_record(value)
        for value in values
        if value.element_type != ElementType.UNDEFINED
    ]


def build_json_report(
    config: SessionConfig,
    sequence: OperationSequence,
    outcomes: Sequence[OperationOutcome],
) -> dict[str, Any]:
    """Машиночитаемый отчёт с той же структурой, что и текстовый вывод."""
    report: dict[str, Any] = {"preferred_type": display_name(config.preferred_type)}

    if outcomes:
        report["operations"] = [
            {
                "operation": outcome.operation_range.operation.value,
                "operands": _records(outcome.operands),
                "result": render_record(outcome.result),
            }
            for outcome in outcomes
        ]
    elif len(sequence.values) == 1:
        value = sequence.values[0]
        report["to_binary"] = _records(
            _to_binary_values(read_to_double(value.element_type, value.payload))
        )
        report["from_binary"] = _records(
            _from_binary_values(read_to_int64(value.element_type, value.payload))
        )
    elif sequence.values:
        report["numbers"] = _records(sequence.values)

    return report


# =============================================================================
# ENTRY POINT
# =============================================================================


def _split_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Разделение на ведущие опции (--...) и токены."""
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            return list(argv[:i]), list(argv[i + 1 :])
        if not (arg.startswith("--") or arg in ("-h",)):
            break
        i += 2 if arg in _VALUE_OPTIONS else 1
    return list(argv[:i]), list(argv[i:])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seebinum",
        description="Show numbers in binary encodings and apply arithmetic to them.",
        epilog=USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper(),
        choices=LOG_LEVELS,
        help=f"logging level (default: ${LOG_LEVEL_ENV_VAR} or {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument(
        "--log-format",
        default="text",
        choices=LOG_FORMATS,
        help="log record format on stderr",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print a JSON report instead of text",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Точка входа CLI.

    Returns:
        Код выхода: 0 — успех, 1 — нет токенов, неизвестный токен или
        деление на ноль
    """
    if argv is None:
        argv = sys.argv[1:]

    option_args, tokens = _split_argv(argv)
    args = build_parser().parse_args(option_args)
    setup_logging(args.log_level, args.log_format)

    if not tokens:
        print(USAGE)
        return 1

    try:
        config, sequence = interpret_tokens(tokens)
    except UnknownTokenError as e:
        logger.debug("rejected token", extra={"token": e.token})
        print(e)
        print(USAGE)
        return 1

    try:
        outcomes = perform_operation_sequence(sequence.ranges, sequence.values)
    except ZeroDivisionError as e:
        logger.debug("operation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(build_json_report(config, sequence, outcomes), indent=2))
    elif outcomes:
        _print_outcomes(outcomes, config)
    elif len(sequence.values) == 1:
        _print_single(sequence.values[0], config)
    elif sequence.values:
        _print_numbers(sequence.values, config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
