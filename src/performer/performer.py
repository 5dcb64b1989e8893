"""Operation Performer — редукции над последовательностями tagged values.

Арифметика выбирается по тегу ПЕРВОГО операнда через ARITHMETIC_KINDS;
буферы остальных операндов переинтерпретируются в той же кодировке
(гетерогенные последовательности не валидируются).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Не-dispatchable теги (undefined, string_char8, bool8, complex) →
   нулевой результат с тем же тегом, без ошибки
2. Пустой список операндов → ноль element_type (или UNDEFINED)
3. Subtract/Divide: первый операнд — начальное значение; пусто → 0
4. Dot: произведения пар суммируются, нечётный последний операнд
   прибавляется без умножения
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Final, Optional, Sequence

from src.core.domain.element_type import ElementType, display_name, resolve_element_type
from src.core.domain.numeric_value import NumericOperation, NumericValue, OperationRange
from src.performer.kinds import ArithmeticKind, arithmetic_kind_for

logger = logging.getLogger(__name__)


# =============================================================================
# REDUCTIONS
# =============================================================================


def _reduce_none(kind: ArithmeticKind, values: Sequence[Any]) -> Any:
    return kind.zero()


def _reduce_add(kind: ArithmeticKind, values: Sequence[Any]) -> Any:
    result = kind.zero()
    for value in values:
        result = kind.add(result, value)
    return result


def _reduce_subtract(kind: ArithmeticKind, values: Sequence[Any]) -> Any:
    if not values:
        return kind.zero()
    result = values[0]
    for value in values[1:]:
        result = kind.subtract(result, value)
    return result


def _reduce_multiply(kind: ArithmeticKind, values: Sequence[Any]) -> Any:
    result = kind.one()
    for value in values:
        result = kind.multiply(result, value)
    return result


def _reduce_divide(kind: ArithmeticKind, values: Sequence[Any]) -> Any:
    if not values:
        return kind.zero()
    result = values[0]
    for value in values[1:]:
        result = kind.divide(result, value)
    return result


def _reduce_dot(kind: ArithmeticKind, values: Sequence[Any]) -> Any:
    result = kind.zero()
    paired = len(values) - len(values) % 2
    for i in range(0, paired, 2):
        result = kind.add(result, kind.multiply(values[i], values[i + 1]))
    if paired < len(values):
        # Операнд без пары входит в сумму как есть
        result = kind.add(result, values[-1])
    return result


_REDUCERS: Final[dict[NumericOperation, Callable[[ArithmeticKind, Sequence[Any]], Any]]] = {
    NumericOperation.NONE: _reduce_none,
    NumericOperation.ADD: _reduce_add,
    NumericOperation.SUBTRACT: _reduce_subtract,
    NumericOperation.MULTIPLY: _reduce_multiply,
    NumericOperation.DIVIDE: _reduce_divide,
    NumericOperation.DOT: _reduce_dot,
}


def reduce_values(
    operation: NumericOperation, kind: ArithmeticKind, values: Sequence[Any]
) -> Any:
    """
    Редукция уже декодированных значений в арифметике kind.

    Args:
        operation: Редукция
        kind: Арифметика кодировки
        values: Рабочие значения kind (int, float или FixedPointNumber)

    Returns:
        Рабочее значение kind

    Raises:
        ZeroDivisionError: Целочисленное/fixed-point деление на ноль

    Examples:
        >>> from src.performer.kinds import ARITHMETIC_KINDS
        >>> reduce_values(NumericOperation.DOT, ARITHMETIC_KINDS[ElementType.INT32], [1, 2, 3])
        5
    """
    return _REDUCERS[NumericOperation(operation)](kind, values)


# =============================================================================
# PERFORMER
# =============================================================================


def perform_numeric_operation(
    operation: NumericOperation,
    operands: Sequence[NumericValue],
    element_type: Optional[ElementType | int] = None,
) -> NumericValue:
    """
    Выполнение редукции над tagged values.

    Args:
        operation: Редукция
        operands: Операнды; тег первого определяет арифметику
        element_type: Тег результата для пустого списка операндов

    Returns:
        NumericValue с тегом первого операнда

    Raises:
        ZeroDivisionError: Целочисленное/fixed-point деление на ноль

    Examples:
        >>> values = [NumericValue.from_raw_bits(ElementType.UINT32, v) for v in (1, 2, 3, 4)]
        >>> perform_numeric_operation(NumericOperation.DOT, values).payload
        b'\\x0e\\x00\\x00\\x00'
    """
    operation = NumericOperation(operation)

    if not operands:
        # Редукция не выполняется: даже multiply даёт ноль, а не 1
        return NumericValue.zero(
            resolve_element_type(
                element_type if element_type is not None else ElementType.UNDEFINED
            )
        )

    tag = operands[0].element_type
    kind = arithmetic_kind_for(tag)
    log_extra = {
        "element_type": display_name(tag),
        "operation": operation.value,
        "operand_count": len(operands),
    }
    if kind is None:
        logger.debug(
            "%s is not dispatchable for %s, returning zero",
            display_name(tag),
            operation.value,
            extra=log_extra,
        )
        return NumericValue.zero(tag)

    width = kind.byte_width
    values = [kind.decode(operand.data[:width]) for operand in operands]
    result = reduce_values(operation, kind, values)

    logger.debug(
        "%s over %d %s operand(s) -> %r",
        operation.value,
        len(values),
        display_name(tag),
        result,
        extra=log_extra,
    )
    return NumericValue(element_type=tag, data=kind.encode(result))


# =============================================================================
# SEQUENCES
# =============================================================================


@dataclass(frozen=True)
class OperationOutcome:
    """Результат одной операции последовательности."""

    operation_range: OperationRange
    operands: tuple[NumericValue, ...]
    result: NumericValue


def perform_operation_sequence(
    ranges: Sequence[OperationRange],
    values: Sequence[NumericValue],
    element_type: Optional[ElementType | int] = None,
) -> list[OperationOutcome]:
    """
    Выполнение операций последовательности в порядке ввода.

    Args:
        ranges: Операции над полуинтервалами плоского списка
        values: Плоский список значений
        element_type: Тег результата для операций без операндов

    Returns:
        OperationOutcome на каждую операцию
    """
    values = list(values)
    outcomes: list[OperationOutcome] = []
    for operation_range in ranges:
        operands = tuple(operation_range.select(values))
        result = perform_numeric_operation(
            operation_range.operation, operands, element_type
        )
        outcomes.append(OperationOutcome(operation_range, operands, result))
    return outcomes
