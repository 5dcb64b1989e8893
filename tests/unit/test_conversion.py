"""
Тесты для Conversion Engine

Проверяет:
1. read_to_double / read_to_int64 / read_raw_bits по всем кодировкам
2. write_from_double / write_from_int64: сужение, wrap, округление
3. UnsupportedTypeError для complex в обе стороны
4. Проверку ширины буфера
"""

import math
import struct

import pytest

from src.core.domain import ElementType, byte_width
from src.core.math.conversion import (
    UnsupportedTypeError,
    read_raw_bits,
    read_to_double,
    read_to_int64,
    write_from_double,
    write_from_int64,
)
from src.core.math.numerical_safeguards import INT64_MAX, INT64_MIN


# =============================================================================
# ЧТЕНИЕ
# =============================================================================


class TestReadToDouble:
    """bytes → double"""

    @pytest.mark.parametrize(
        "element_type,data,expected",
        [
            (ElementType.UINT8, b"\xff", 255.0),
            (ElementType.INT8, b"\xff", -1.0),
            (ElementType.INT16, b"\xff\xff", -1.0),
            (ElementType.UINT32, b"\xff\xff\xff\xff", 4294967295.0),
            (ElementType.INT64, struct.pack("<q", -42), -42.0),
            (ElementType.UINT64, struct.pack("<Q", 2**64 - 1), 18446744073709551615.0),
            (ElementType.FLOAT16, b"\x00\x3c", 1.0),
            (ElementType.BFLOAT16, b"\x80\x3f", 1.0),
            (ElementType.FLOAT32, struct.pack("<f", 0.5), 0.5),
            (ElementType.FLOAT64, struct.pack("<d", 0.1), 0.1),
            (ElementType.FIXED16_16, struct.pack("<i", 163840), 2.5),
            (ElementType.FIXED12_12, b"\x00\xf0\xff", -1.0),
            (ElementType.FIXED8_24, struct.pack("<i", 1 << 23), 0.5),
            (ElementType.BOOL8, b"\x05", 1.0),
            (ElementType.BOOL8, b"\x00", 0.0),
            (ElementType.STRING_CHAR8, b"", 0.0),
            (ElementType.UNDEFINED, b"", 0.0),
        ],
    )
    def test_values(self, element_type: ElementType, data: bytes, expected: float) -> None:
        assert read_to_double(element_type, data) == expected

    def test_unknown_tag_behaves_as_undefined(self) -> None:
        assert read_to_double(99, b"") == 0.0

    def test_width_checked(self) -> None:
        with pytest.raises(ValueError, match="int32 expects 4 bytes, got 2"):
            read_to_double(ElementType.INT32, b"\x00\x00")


class TestReadToInt64:
    """bytes → int64"""

    def test_float_truncates_toward_zero(self) -> None:
        assert read_to_int64(ElementType.FLOAT64, struct.pack("<d", -2.75)) == -2
        assert read_to_int64(ElementType.FLOAT32, struct.pack("<f", 3.9)) == 3

    def test_float_saturates(self) -> None:
        assert read_to_int64(ElementType.FLOAT64, struct.pack("<d", 1e300)) == INT64_MAX
        assert read_to_int64(ElementType.FLOAT16, b"\x00\xfc") == INT64_MIN

    def test_nan_is_zero(self) -> None:
        assert read_to_int64(ElementType.FLOAT16, b"\x00\x7e") == 0

    def test_fixed_point_truncates(self) -> None:
        assert read_to_int64(ElementType.FIXED16_16, struct.pack("<i", -163840)) == -2

    def test_uint64_wraps(self) -> None:
        assert read_to_int64(ElementType.UINT64, b"\xff" * 8) == -1

    def test_integers(self) -> None:
        assert read_to_int64(ElementType.INT8, b"\x80") == -128
        assert read_to_int64(ElementType.UINT16, b"\xff\xff") == 65535
        assert read_to_int64(ElementType.BOOL8, b"\x02") == 1


class TestReadRawBits:
    """Биты хранения как int64"""

    def test_float32_one(self) -> None:
        assert read_raw_bits(ElementType.FLOAT32, struct.pack("<f", 1.0)) == 1065353216

    def test_negative_float_sign_extended(self) -> None:
        assert read_raw_bits(ElementType.FLOAT16, b"\x00\xbc") == 0xBC00 - 0x10000

    def test_fixed12_12_sign_extended_from_bit_23(self) -> None:
        assert read_raw_bits(ElementType.FIXED12_12, b"\x00\xf0\xff") == -4096
        assert read_raw_bits(ElementType.FIXED12_12, b"\xff\xff\x7f") == 0x7FFFFF

    def test_unsigned_zero_extended(self) -> None:
        assert read_raw_bits(ElementType.UINT8, b"\xff") == 255
        assert read_raw_bits(ElementType.UINT32, b"\xff\xff\xff\xff") == 0xFFFFFFFF

    def test_bool8_storage_bits_not_value(self) -> None:
        """bool8 отдаёт байт хранения, а не нормализованное значение"""
        assert read_raw_bits(ElementType.BOOL8, b"\x02") == 2
        assert read_raw_bits(ElementType.BOOL8, b"\xff") == 255
        assert read_to_int64(ElementType.BOOL8, b"\x02") == 1

    def test_uint64_reinterpreted(self) -> None:
        assert read_raw_bits(ElementType.UINT64, b"\xff" * 8) == -1

    def test_zero_width(self) -> None:
        assert read_raw_bits(ElementType.UNDEFINED, b"") == 0
        assert read_raw_bits(ElementType.STRING_CHAR8, b"") == 0


# =============================================================================
# ЗАПИСЬ
# =============================================================================


class TestWriteFromDouble:
    """double → bytes"""

    def test_integers_truncate_and_wrap(self) -> None:
        assert write_from_double(ElementType.UINT8, 257.9) == b"\x01"
        assert write_from_double(ElementType.INT8, -1.9) == b"\xff"
        assert write_from_double(ElementType.UINT16, -1.0) == b"\xff\xff"

    def test_integers_non_finite_is_zero(self) -> None:
        assert write_from_double(ElementType.INT32, math.nan) == bytes(4)
        assert write_from_double(ElementType.INT32, math.inf) == bytes(4)

    def test_float16_round_to_nearest_even(self) -> None:
        assert write_from_double(ElementType.FLOAT16, 0.0650024) == b"\x29\x2c"

    def test_bfloat16(self) -> None:
        assert write_from_double(ElementType.BFLOAT16, 1.0) == b"\x80\x3f"

    def test_float32_and_float64(self) -> None:
        assert write_from_double(ElementType.FLOAT32, 0.1) == struct.pack("<f", 0.1)
        assert write_from_double(ElementType.FLOAT64, 0.1) == struct.pack("<d", 0.1)

    def test_float16_overflow_to_infinity(self) -> None:
        assert write_from_double(ElementType.FLOAT16, 1e6) == b"\x00\x7c"

    def test_fixed_point(self) -> None:
        assert write_from_double(ElementType.FIXED16_16, 2.5) == struct.pack("<i", 163840)
        assert write_from_double(ElementType.FIXED12_12, -1.0) == b"\x00\xf0\xff"

    def test_bool8(self) -> None:
        assert write_from_double(ElementType.BOOL8, 0.0) == b"\x00"
        assert write_from_double(ElementType.BOOL8, -0.5) == b"\x01"
        assert write_from_double(ElementType.BOOL8, math.nan) == b"\x01"

    def test_zero_width_types(self) -> None:
        assert write_from_double(ElementType.STRING_CHAR8, 1.0) == b""
        assert write_from_double(ElementType.UNDEFINED, 1.0) == b""

    def test_output_width(self) -> None:
        for element_type in ElementType:
            if element_type in (ElementType.COMPLEX64, ElementType.COMPLEX128):
                continue
            assert len(write_from_double(element_type, 1.0)) == byte_width(element_type)


class TestWriteFromInt64:
    """int64 → bytes"""

    def test_integers_wrap(self) -> None:
        assert write_from_int64(ElementType.UINT8, 257) == b"\x01"
        assert write_from_int64(ElementType.INT16, 32768) == b"\x00\x80"
        assert write_from_int64(ElementType.UINT64, -1) == b"\xff" * 8

    def test_value_wrapped_to_int64_first(self) -> None:
        assert write_from_int64(ElementType.INT64, 2**64 + 5) == struct.pack("<q", 5)

    def test_floats_single_rounding(self) -> None:
        assert write_from_int64(ElementType.FLOAT16, 3) == b"\x00\x42"
        assert write_from_int64(ElementType.FLOAT32, 16777217) == struct.pack("<f", 16777216.0)
        assert write_from_int64(ElementType.FLOAT64, 2**53 + 1) == struct.pack("<d", 2.0**53)

    def test_fixed_point_scaled(self) -> None:
        assert write_from_int64(ElementType.FIXED16_16, 3) == struct.pack("<i", 3 << 16)
        assert write_from_int64(ElementType.FIXED12_12, -1) == b"\x00\xf0\xff"

    def test_bool8(self) -> None:
        assert write_from_int64(ElementType.BOOL8, 7) == b"\x01"
        assert write_from_int64(ElementType.BOOL8, 0) == b"\x00"


class TestRoundTrip:
    """write → read возвращает исходное значение, где оно представимо"""

    @pytest.mark.parametrize(
        "element_type,value",
        [
            (ElementType.INT32, -123456.0),
            (ElementType.UINT16, 65535.0),
            (ElementType.FLOAT16, 0.5),
            (ElementType.BFLOAT16, -2.0),
            (ElementType.FLOAT32, 0.25),
            (ElementType.FLOAT64, math.pi),
            (ElementType.FIXED12_12, -7.5),
            (ElementType.FIXED8_24, 0.125),
        ],
    )
    def test_double_round_trip(self, element_type: ElementType, value: float) -> None:
        assert read_to_double(element_type, write_from_double(element_type, value)) == value


# =============================================================================
# COMPLEX
# =============================================================================


class TestUnsupportedComplex:
    """Complex-кодировки — жёсткая ошибка в обе стороны"""

    @pytest.mark.parametrize("element_type", [ElementType.COMPLEX64, ElementType.COMPLEX128])
    def test_every_conversion_fails(self, element_type: ElementType) -> None:
        data = bytes(byte_width(element_type))
        for convert in (read_to_double, read_to_int64, read_raw_bits):
            with pytest.raises(UnsupportedTypeError, match="type is not supported"):
                convert(element_type, data)
        with pytest.raises(UnsupportedTypeError):
            write_from_double(element_type, 1.0)
        with pytest.raises(UnsupportedTypeError):
            write_from_int64(element_type, 1)

    def test_error_carries_tag(self) -> None:
        with pytest.raises(UnsupportedTypeError) as exc_info:
            write_from_double(ElementType.COMPLEX64, 1.0)
        assert exc_info.value.element_type is ElementType.COMPLEX64
        assert str(exc_info.value) == "complex64 type is not supported."

    def test_is_value_error(self) -> None:
        assert issubclass(UnsupportedTypeError, ValueError)

    def test_complex_checked_before_width(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            read_to_double(ElementType.COMPLEX128, b"")
