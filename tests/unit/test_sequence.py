"""
Тесты для OperationSequenceBuilder

Проверяет:
1. Непрерывные неперекрывающиеся диапазоны в порядке ввода
2. Закрытие последнего диапазона на общем количестве значений
3. nop не открывает диапазон
"""

from src.cli.sequence import OperationSequenceBuilder
from src.core.domain import ElementType, NumericOperation, NumericValue


def value(n: int) -> NumericValue:
    return NumericValue.from_raw_bits(ElementType.UINT32, n)


def spans(builder: OperationSequenceBuilder) -> list[tuple[str, int, int]]:
    sequence = builder.build()
    return [(r.operation.value, r.begin, r.end) for r in sequence.ranges]


class TestOperationSequenceBuilder:
    """Построение диапазонов"""

    def test_operations_partition_values(self) -> None:
        builder = OperationSequenceBuilder()
        for operation, operands in [
            (NumericOperation.MULTIPLY, (3, 2)),
            (NumericOperation.ADD, (3, 2)),
            (NumericOperation.SUBTRACT, (3, 2)),
            (NumericOperation.DOT, (1, 2, 3, 4)),
        ]:
            builder.add_operation(operation)
            builder.add_values(value(n) for n in operands)
        assert spans(builder) == [
            ("multiply", 0, 2),
            ("add", 2, 4),
            ("subtract", 4, 6),
            ("dot", 6, 10),
        ]

    def test_values_before_first_operation_not_operands(self) -> None:
        builder = OperationSequenceBuilder()
        builder.add_value(value(5))
        builder.add_operation(NumericOperation.ADD)
        builder.add_values([value(1), value(2)])
        sequence = builder.build()
        assert len(sequence.values) == 3
        assert [(r.begin, r.end) for r in sequence.ranges] == [(1, 3)]

    def test_nop_does_not_open_range(self) -> None:
        builder = OperationSequenceBuilder()
        builder.add_operation(NumericOperation.ADD)
        builder.add_value(value(1))
        builder.add_operation(NumericOperation.NONE)
        builder.add_value(value(2))
        assert spans(builder) == [("add", 0, 2)]

    def test_consecutive_operations_give_empty_range(self) -> None:
        builder = OperationSequenceBuilder()
        builder.add_operation(NumericOperation.ADD)
        builder.add_operation(NumericOperation.SUBTRACT)
        builder.add_value(value(1))
        assert spans(builder) == [("add", 0, 0), ("subtract", 0, 1)]

    def test_no_operations(self) -> None:
        builder = OperationSequenceBuilder()
        builder.add_values([value(1), value(2)])
        sequence = builder.build()
        assert sequence.ranges == ()
        assert builder.value_count == 2

    def test_ranges_contiguous(self) -> None:
        builder = OperationSequenceBuilder()
        for n in range(6):
            builder.add_operation(NumericOperation.ADD if n % 2 else NumericOperation.DOT)
            builder.add_values(value(i) for i in range(n))
        ranges = builder.build().ranges
        for previous, current in zip(ranges, ranges[1:]):
            assert previous.end == current.begin
        assert ranges[-1].end == sum(range(6))
