"""
Тесты для текстового и машиночитаемого вывода

Проверяет:
1. Выравнивание имени (%10s) и числовую часть по знаковости/дробности
2. Hex (2 цифры на байт) и binary (старший байт первым) биты
3. %.24g и C-style %a
4. render_record и контракт numeric_value
"""

import math

import pytest

from src.cli.config import FloatFormat, RawBitsFormat, RenderMode
from src.cli.formatting import (
    format_decimal_float,
    format_hex_float,
    format_raw_binary,
    format_raw_hex,
    render,
    render_record,
)
from src.cli.parsing import parse_number
from src.core.domain import ElementType, NumericValue
from src.core.math.conversion import UnsupportedTypeError

BINARY = RenderMode(raw_bits_format=RawBitsFormat.BINARY)
HEX_FLOAT = RenderMode(float_format=FloatFormat.HEX)


def raw(element_type: ElementType, bits: int) -> NumericValue:
    return NumericValue.from_raw_bits(element_type, bits)


class TestFloatText:
    """Текст дробных значений"""

    def test_decimal(self) -> None:
        assert format_decimal_float(1.0) == "1"
        assert format_decimal_float(0.1) == "0.100000000000000005551115"
        assert format_decimal_float(0.06500244140625) == "0.06500244140625"
        assert format_decimal_float(-math.inf) == "-inf"
        assert format_decimal_float(math.nan) == "nan"
        assert format_decimal_float(-math.nan) == "-nan"

    @pytest.mark.parametrize(
        "value,text",
        [
            (1.0, "0x1p+0"),
            (2.25, "0x1.2p+1"),
            (-0.5, "-0x1p-1"),
            (0.1, "0x1.999999999999ap-4"),
            (0.0, "0x0p+0"),
            (-0.0, "-0x0p+0"),
            (5e-324, "0x0.0000000000001p-1022"),
            (math.inf, "inf"),
        ],
    )
    def test_hex(self, value: float, text: str) -> None:
        assert format_hex_float(value) == text


class TestRawBits:
    """Текст сырых битов"""

    def test_hex_two_digits_per_byte(self) -> None:
        assert format_raw_hex(raw(ElementType.UINT8, 0xF)) == "0x0F"
        assert format_raw_hex(raw(ElementType.FIXED12_12, -4096)) == "0xFFF000"
        assert format_raw_hex(raw(ElementType.INT64, -1)) == "0xFFFFFFFFFFFFFFFF"

    def test_hex_zero_width(self) -> None:
        assert format_raw_hex(NumericValue.zero(ElementType.UNDEFINED)) == "0x"

    def test_binary_high_byte_first(self) -> None:
        assert format_raw_binary(raw(ElementType.UINT16, 0x0102)) == "0000000100000010"
        assert format_raw_binary(raw(ElementType.INT8, -13)) == "11110011"
        assert format_raw_binary(NumericValue.zero(ElementType.STRING_CHAR8)) == ""


class TestRender:
    """Строка вывода"""

    def test_float32_one(self) -> None:
        assert render(raw(ElementType.FLOAT32, 0x3F800000)) == "   float32 1(0x3F800000)"

    def test_unsigned(self) -> None:
        assert render(raw(ElementType.UINT8, 255)) == "     uint8 255(0xFF)"
        assert (
            render(raw(ElementType.UINT64, -1))
            == "    uint64 18446744073709551615(0xFFFFFFFFFFFFFFFF)"
        )

    def test_bool8_shows_storage_byte(self) -> None:
        value = NumericValue(element_type=ElementType.BOOL8, data=b"\x02")
        assert render(value) == "     bool8 2(0x02)"
        assert format_raw_binary(value) == "00000010"

    def test_signed_shows_raw_bits_signed(self) -> None:
        assert render(raw(ElementType.INT8, -1)) == "      int8 -1(0xFF)"

    def test_fixed_point(self) -> None:
        assert render(raw(ElementType.FIXED12_12, -4096)) == "fixed12_12 -1(0xFFF000)"

    def test_undefined(self) -> None:
        assert render(NumericValue.zero(ElementType.UNDEFINED)) == " undefined 0(0x)"

    def test_binary_mode_and_flanks(self) -> None:
        text = render(raw(ElementType.INT8, -13), BINARY, " -> ", "")
        assert text == "      int8 -13 -> 11110011"

    def test_hex_float_mode(self) -> None:
        value = parse_number("0x2.4p0", ElementType.FLOAT32)
        assert render(value, HEX_FLOAT) == "   float32 0x1.2p+1(0x40100000)"

    def test_float16_text(self) -> None:
        assert render(raw(ElementType.FLOAT16, 0x2C29)) == "   float16 0.06500244140625(0x2C29)"

    def test_complex_unsupported(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            render(NumericValue.zero(ElementType.COMPLEX64))


class TestRenderRecord:
    """Машиночитаемая запись"""

    def test_float32_record(self) -> None:
        record = render_record(raw(ElementType.FLOAT32, 0x3F800000))
        assert record == {
            "schema_version": "1",
            "element_type": "float32",
            "tag": 1,
            "byte_width": 4,
            "is_signed": True,
            "is_fractional": True,
            "value": "1",
            "raw_bits": 1065353216,
            "raw_hex": "0x3F800000",
            "raw_binary": "00111111100000000000000000000000",
        }

    @pytest.mark.parametrize(
        "element_type",
        [t for t in ElementType if t not in (ElementType.COMPLEX64, ElementType.COMPLEX128)],
    )
    def test_every_storable_type_valid(self, element_type: ElementType) -> None:
        record = render_record(raw(element_type, -1))
        assert record["element_type"] == record["element_type"].lower()
        assert record["tag"] == int(element_type)

    def test_nan_value_text(self) -> None:
        record = render_record(raw(ElementType.FLOAT16, 0x7E00))
        assert record["value"] == "nan"
