"""
Тесты для Pydantic моделей NumericValue и OperationRange

Проверяет:
1. Буфер фиксированной ёмкости и payload
2. Разрешающий fallback для неизвестных тегов
3. Immutability (frozen)
4. Валидацию диапазонов операций
"""

import pytest
from pydantic import ValidationError

from src.core.domain import (
    NUMBER_BUFFER_SIZE,
    ElementType,
    NumericOperation,
    NumericValue,
    OperationRange,
)


class TestNumericValue:
    """Tagged raw value"""

    def test_default_buffer_is_zero(self) -> None:
        value = NumericValue(element_type=ElementType.INT32)
        assert value.data == bytes(NUMBER_BUFFER_SIZE)
        assert value.payload == bytes(4)

    def test_short_buffer_padded(self) -> None:
        value = NumericValue(element_type=ElementType.FLOAT16, data=b"\x00\x3c")
        assert value.data == b"\x00\x3c" + bytes(6)
        assert value.payload == b"\x00\x3c"
        assert value.byte_width == 2

    def test_long_buffer_rejected(self) -> None:
        with pytest.raises(ValidationError, match="buffer holds at most 8"):
            NumericValue(element_type=ElementType.INT64, data=bytes(9))

    def test_unknown_int_tag_is_undefined(self) -> None:
        value = NumericValue(element_type=123)
        assert value.element_type is ElementType.UNDEFINED
        assert value.payload == b""

    def test_int_tag_resolved(self) -> None:
        assert NumericValue(element_type=17).element_type is ElementType.FIXED12_12

    def test_frozen(self) -> None:
        value = NumericValue.zero(ElementType.INT8)
        with pytest.raises(ValidationError):
            value.data = b"\x01"  # type: ignore[misc]

    def test_from_raw_bits(self) -> None:
        value = NumericValue.from_raw_bits(ElementType.FLOAT32, 0x3F800000)
        assert value.payload == b"\x00\x00\x80\x3f"

    def test_from_raw_bits_negative_fills_buffer(self) -> None:
        value = NumericValue.from_raw_bits(ElementType.INT16, -2)
        assert value.data == b"\xfe" + b"\xff" * 7
        assert value.payload == b"\xfe\xff"

    def test_value_semantics(self) -> None:
        a = NumericValue.from_raw_bits(ElementType.UINT8, 7)
        b = NumericValue.from_raw_bits(ElementType.UINT8, 7)
        assert a == b


class TestOperationRange:
    """Диапазон [begin, end) операции"""

    def test_count_and_select(self) -> None:
        values = [NumericValue.from_raw_bits(ElementType.UINT8, i) for i in range(5)]
        op_range = OperationRange(operation=NumericOperation.ADD, begin=1, end=4)
        assert op_range.count == 3
        assert op_range.select(values) == values[1:4]

    def test_empty_range_allowed(self) -> None:
        op_range = OperationRange(operation=NumericOperation.DOT, begin=2, end=2)
        assert op_range.count == 0

    def test_end_before_begin_rejected(self) -> None:
        with pytest.raises(ValidationError, match="precedes begin"):
            OperationRange(operation=NumericOperation.ADD, begin=3, end=2)

    def test_negative_index_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OperationRange(operation=NumericOperation.ADD, begin=-1, end=2)

    def test_operation_from_name(self) -> None:
        op_range = OperationRange(operation="subtract", begin=0, end=0)
        assert op_range.operation is NumericOperation.SUBTRACT
