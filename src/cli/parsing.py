"""
Number Parsing — текст → tagged value

Разбор по префиксу, как atof/strtol: читается самый длинный корректный
префикс, остаток строки игнорируется. Нераспознанный текст даёт ноль
(разрешающий fallback, не ошибка).

Формы ввода:
- десятичные: 13, -13, 3.14, 1e-3
- hex целые и hex float: 0x4240, 0x2.4p0
- восьмеричные (ведущий 0): 017
- двоичные: 0b1101
- inf, nan
"""

import logging
import math
import re
from typing import Final

from src.core.domain.element_type import (
    ElementType,
    is_fractional,
    resolve_element_type,
)
from src.core.domain.numeric_value import NumericValue
from src.core.math.conversion import write_from_double, write_from_int64
from src.core.math.numerical_safeguards import INT64_MAX, INT64_MIN, clamp_int

logger = logging.getLogger(__name__)

_C_WHITESPACE: Final[str] = " \t\n\v\f\r"

_HEX_FLOAT_RE: Final[re.Pattern] = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
)
_DECIMAL_FLOAT_RE: Final[re.Pattern] = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)
_SPECIAL_FLOAT_RE: Final[re.Pattern] = re.compile(
    r"([+-]?)(inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?)", re.IGNORECASE
)

_DIGITS_BY_BASE: Final[dict[int, str]] = {
    2: "01",
    8: "01234567",
    10: "0123456789",
    16: "0123456789abcdefABCDEF",
}


# =============================================================================
# PREFIX PARSERS
# =============================================================================


def parse_float_prefix(text: str) -> tuple[float, int]:
    """
    Разбор double из начала строки (семантика atof).

    Returns:
        (значение, количество поглощённых символов); (0.0, 0) если
        префикс не является числом

    Examples:
        >>> parse_float_prefix("0x2.4p0")
        (2.25, 7)
        >>> parse_float_prefix("3.14abc")
        (3.14, 4)
    """
    stripped = text.lstrip(_C_WHITESPACE)
    offset = len(text) - len(stripped)

    match = _HEX_FLOAT_RE.match(stripped)
    if match:
        literal = match.group()
        try:
            value = float.fromhex(literal)
        except OverflowError:
            value = -math.inf if literal.startswith("-") else math.inf
        return value, offset + match.end()

    match = _DECIMAL_FLOAT_RE.match(stripped)
    if match:
        return float(match.group()), offset + match.end()

    match = _SPECIAL_FLOAT_RE.match(stripped)
    if match:
        sign, word = match.groups()
        value = math.nan if word[:3].lower() == "nan" else math.inf
        return (-value if sign == "-" else value), offset + match.end()

    return 0.0, 0


def parse_int_prefix(text: str, base: int = 0) -> tuple[int, int]:
    """
    Разбор целого из начала строки (семантика strtol, результат насыщается
    к диапазону int64).

    Args:
        text: Исходный текст
        base: 0 — автоопределение (0x → 16, ведущий 0 → 8, иначе 10),
            либо 2, 8, 10, 16

    Returns:
        (значение, количество поглощённых символов); (0, 0) если цифр нет

    Raises:
        ValueError: Неподдерживаемое основание

    Examples:
        >>> parse_int_prefix("0x4240")
        (16960, 6)
        >>> parse_int_prefix("017")
        (15, 3)
        >>> parse_int_prefix("1101", base=2)
        (13, 4)
    """
    if base not in (0, *_DIGITS_BY_BASE):
        raise ValueError(f"unsupported base {base}")

    stripped = text.lstrip(_C_WHITESPACE)
    offset = len(text) - len(stripped)

    pos = 0
    negative = False
    if stripped[:1] in ("+", "-"):
        negative = stripped[0] == "-"
        pos = 1

    has_hex_prefix = (
        stripped[pos : pos + 2] in ("0x", "0X")
        and stripped[pos + 2 : pos + 3] != ""
        and stripped[pos + 2] in _DIGITS_BY_BASE[16]
    )
    if base in (0, 16) and has_hex_prefix:
        base = 16
        pos += 2
    elif base == 0:
        base = 8 if stripped[pos : pos + 1] == "0" else 10

    digits = _DIGITS_BY_BASE[base]
    end = pos
    while end < len(stripped) and stripped[end] in digits:
        end += 1
    if end == pos:
        return 0, 0

    value = int(stripped[pos:end], base)
    if negative:
        value = -value
    return clamp_int(value, INT64_MIN, INT64_MAX), offset + end


# =============================================================================
# PARSE NUMBER
# =============================================================================


def parse_number(
    text: str,
    preferred_type: ElementType | int = ElementType.UNDEFINED,
    treat_as_raw: bool = False,
) -> NumericValue:
    """
    Текст → NumericValue.

    - UNDEFINED: всегда FLOAT64, чтобы нетипизированная последовательность
      имела одну кодировку; дробный разбор 0 → значение целого разбора
      (0b1101 → 13.0)
    - дробная кодировка: raw → целый разбор как биты хранения;
      дробный разбор 0 → write_from_int64; иначе write_from_double
    - целая кодировка: write_from_int64

    Args:
        text: Текст числа
        preferred_type: Целевая кодировка или UNDEFINED (вывести из текста)
        treat_as_raw: Текст задаёт биты хранения, а не значение

    Returns:
        NumericValue (ноль кодировки, если текст не распознан)

    Raises:
        UnsupportedTypeError: Для complex64/complex128 вне raw режима

    Examples:
        >>> parse_number("abc", ElementType.FLOAT16).payload
        b'\\x00\\x00'
        >>> parse_number("0x4240", ElementType.FLOAT16, treat_as_raw=True).payload
        b'@B'
    """
    tag = resolve_element_type(preferred_type)

    value_float, _ = parse_float_prefix(text)
    value_int, _ = parse_int_prefix(text)

    # strtol не знает префикса 0b
    if value_int == 0 and text.startswith("0b"):
        binary_value, binary_end = parse_int_prefix(text[2:], base=2)
        if binary_end:
            value_int = binary_value

    if tag == ElementType.UNDEFINED:
        tag = ElementType.FLOAT64
        if value_float == 0:
            result = NumericValue(element_type=tag, data=write_from_int64(tag, value_int))
        else:
            result = NumericValue(element_type=tag, data=write_from_double(tag, value_float))
    elif is_fractional(tag):
        if treat_as_raw:
            result = NumericValue.from_raw_bits(tag, value_int)
        elif value_float == 0:
            result = NumericValue(element_type=tag, data=write_from_int64(tag, value_int))
        else:
            result = NumericValue(element_type=tag, data=write_from_double(tag, value_float))
    else:
        result = NumericValue(element_type=tag, data=write_from_int64(tag, value_int))

    logger.debug(
        "parsed %r as %s", text, result.element_type.name, extra={"token": text}
    )
    return result
