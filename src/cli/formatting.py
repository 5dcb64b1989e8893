"""
Number Formatting — tagged value → текст

Строка вывода:

    "%10s " имя кодировки, числовое значение, left_flank, сырые биты, right_flank

    Пример:    float32 1(0x3F800000)

Числовое значение:
- дробные кодировки: %.24g или C-style %a (hex float)
- знаковые: биты хранения как signed int64
- беззнаковые: биты хранения как unsigned 64-bit

Сырые биты: 0x + 2 hex-цифры на байт (верхний регистр) или двоичные
цифры, байты от старшего к младшему.
"""

import math
from typing import Any, Final

from src.cli.config import FloatFormat, RawBitsFormat, RenderMode
from src.core.contracts import NumericValueRecordValidator
from src.core.domain.element_type import display_name, is_fractional, is_signed
from src.core.domain.numeric_value import NumericValue
from src.core.math.conversion import read_raw_bits, read_to_double
from src.core.math.numerical_safeguards import UINT64_MASK

RECORD_SCHEMA_VERSION: Final[str] = "1"

_RECORD_VALIDATOR = NumericValueRecordValidator()


# =============================================================================
# FLOAT TEXT
# =============================================================================


def format_decimal_float(value: float) -> str:
    """Десятичная запись с 24 значащими цифрами (%.24g)."""
    if math.isnan(value):
        return "-nan" if math.copysign(1.0, value) < 0 else "nan"
    return "%.24g" % value


def format_hex_float(value: float) -> str:
    """
    Hex float в записи C %a.

    Examples:
        >>> format_hex_float(1.0)
        '0x1p+0'
        >>> format_hex_float(2.25)
        '0x1.2p+1'
        >>> format_hex_float(0.0)
        '0x0p+0'
    """
    if math.isnan(value):
        return "-nan" if math.copysign(1.0, value) < 0 else "nan"
    if math.isinf(value):
        return "-inf" if value < 0 else "inf"

    # float.hex всегда печатает 13 цифр мантиссы; %a убирает хвостовые нули
    mantissa, exponent = value.hex().split("p")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}p{exponent}"


# =============================================================================
# RAW BITS TEXT
# =============================================================================


def format_raw_hex(value: NumericValue) -> str:
    """Биты хранения как 0x + 2 цифры на байт; для нулевой ширины — '0x'."""
    width = value.byte_width
    if width == 0:
        return "0x"
    mask = (1 << (width * 8)) - 1
    raw = read_raw_bits(value.element_type, value.payload)
    return f"0x{raw & mask:0{width * 2}X}"


def format_raw_binary(value: NumericValue) -> str:
    """Биты хранения двоичными цифрами, байты от старшего к младшему."""
    return "".join(f"{byte:08b}" for byte in reversed(value.payload))


def format_numeric_part(value: NumericValue, float_format: FloatFormat) -> str:
    """Числовая часть строки вывода."""
    tag = value.element_type
    if is_fractional(tag):
        number = read_to_double(tag, value.payload)
        if float_format == FloatFormat.HEX:
            return format_hex_float(number)
        return format_decimal_float(number)

    raw = read_raw_bits(tag, value.payload)
    if is_signed(tag):
        return str(raw)
    return str(raw & UINT64_MASK)


# =============================================================================
# RENDER
# =============================================================================


def render(
    value: NumericValue,
    mode: RenderMode = RenderMode(),
    left_flank: str = "(",
    right_flank: str = ")",
) -> str:
    """
    Строка вывода значения.

    Args:
        value: Значение
        mode: Формат битов и дробных значений
        left_flank: Текст перед сырыми битами
        right_flank: Текст после сырых битов

    Raises:
        UnsupportedTypeError: Для complex64/complex128

    Examples:
        >>> render(NumericValue.from_raw_bits(ElementType.FLOAT32, 0x3F800000))
        '   float32 1(0x3F800000)'
    """
    if mode.raw_bits_format == RawBitsFormat.BINARY:
        raw_text = format_raw_binary(value)
    else:
        raw_text = format_raw_hex(value)

    return (
        "%10s " % display_name(value.element_type)
        + format_numeric_part(value, mode.float_format)
        + left_flank
        + raw_text
        + right_flank
    )


def render_record(value: NumericValue) -> dict[str, Any]:
    """
    Машиночитаемое представление значения.

    Запись проверяется контрактом numeric_value перед возвратом.

    Raises:
        UnsupportedTypeError: Для complex64/complex128
        jsonschema.ValidationError: Если запись нарушает контракт
    """
    tag = value.element_type
    record = {
        "schema_version": RECORD_SCHEMA_VERSION,
        "element_type": display_name(tag),
        "tag": int(tag),
        "byte_width": value.byte_width,
        "is_signed": is_signed(tag),
        "is_fractional": is_fractional(tag),
        "value": format_numeric_part(value, FloatFormat.DECIMAL),
        "raw_bits": read_raw_bits(tag, value.payload),
        "raw_hex": format_raw_hex(value),
        "raw_binary": format_raw_binary(value),
    }
    _RECORD_VALIDATOR.validate(record)
    return record
