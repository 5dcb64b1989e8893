"""
Operation Sequence Builder — плоский список значений + диапазоны операций

Диапазоны строятся по мере ввода:
- новая операция закрывает предыдущий диапазон на текущем количестве
  значений и открывает свой, начиная с него
- nop не открывает диапазон
- build() закрывает последний диапазон на общем количестве значений

Диапазоны непрерывны и не пересекаются.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from src.core.domain.numeric_value import NumericOperation, NumericValue, OperationRange


@dataclass(frozen=True)
class OperationSequence:
    """Результат построения: значения и операции над ними."""

    values: tuple[NumericValue, ...]
    ranges: tuple[OperationRange, ...]


class OperationSequenceBuilder:
    """Инкрементальное построение OperationSequence в порядке ввода."""

    def __init__(self):
        self._values: list[NumericValue] = []
        self._closed: list[OperationRange] = []
        self._open: Optional[tuple[NumericOperation, int]] = None

    @property
    def value_count(self) -> int:
        return len(self._values)

    def add_value(self, value: NumericValue) -> None:
        self._values.append(value)

    def add_values(self, values: Iterable[NumericValue]) -> None:
        self._values.extend(values)

    def add_operation(self, operation: NumericOperation) -> None:
        """Начало новой операции; операнды — значения, добавленные после неё."""
        operation = NumericOperation(operation)
        if operation == NumericOperation.NONE:
            return
        self._close_open_range()
        self._open = (operation, len(self._values))

    def _close_open_range(self) -> None:
        if self._open is None:
            return
        operation, begin = self._open
        self._closed.append(
            OperationRange(operation=operation, begin=begin, end=len(self._values))
        )
        self._open = None

    def build(self) -> OperationSequence:
        """Закрытие последней операции и фиксация последовательности."""
        self._close_open_range()
        return OperationSequence(values=tuple(self._values), ranges=tuple(self._closed))
