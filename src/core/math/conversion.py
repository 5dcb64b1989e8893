"""
Conversion Engine — Bit-exact конверсии tagged raw bytes ↔ канонические формы

Единственный допустимый способ интерпретации байтового буфера:
- read_to_double:    bytes → float64 (расширяющее, value-preserving)
- read_to_int64:     bytes → int64 (усечение к нулю для float/fixed)
- read_raw_bits:     bytes → биты хранения как int64 (для ULP-сравнений и hex)
- write_from_double: float64 → bytes (сужение по правилу округления кодировки)
- write_from_int64:  int64 → bytes (сужение/усечение к ширине)

ЗАПРЕЩЕНО интерпретировать буфер как другой тип в обход этого модуля.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любая конверсия complex-кодировки → UnsupportedTypeError (в обе стороны)
2. Буфер всегда ровно byte_width(tag) байт, little-endian
3. float16/bfloat16 пишутся round-to-nearest-even от исходного double
4. Неизвестный тег ведёт себя как UNDEFINED (ширина 0, значение 0)
"""

import struct
from typing import Final

from src.core.domain.element_type import (
    ElementType,
    byte_width,
    display_name,
    is_complex,
    is_signed,
    resolve_element_type,
)
from src.core.math.binary_float import BFLOAT16, FLOAT16, FLOAT32, BinaryFloatFormat
from src.core.math.fixed_point import (
    FIXED8_24,
    FIXED12_12,
    FIXED16_16,
    FixedPointFormat,
    FixedPointNumber,
)
from src.core.math.numerical_safeguards import (
    truncate_float,
    truncate_float_to_int64,
    wrap_to_int64,
    wrap_to_width,
)


# =============================================================================
# ТАБЛИЦЫ КОДИРОВОК
# =============================================================================

BINARY_FLOAT_FORMATS: Final[dict[ElementType, BinaryFloatFormat]] = {
    ElementType.FLOAT16: FLOAT16,
    ElementType.BFLOAT16: BFLOAT16,
    ElementType.FLOAT32: FLOAT32,
}

FIXED_POINT_FORMATS: Final[dict[ElementType, FixedPointFormat]] = {
    ElementType.FIXED12_12: FIXED12_12,
    ElementType.FIXED16_16: FIXED16_16,
    ElementType.FIXED8_24: FIXED8_24,
}

INTEGER_ELEMENT_TYPES: Final[frozenset[ElementType]] = frozenset(
    {
        ElementType.UINT8,
        ElementType.INT8,
        ElementType.UINT16,
        ElementType.INT16,
        ElementType.UINT32,
        ElementType.INT32,
        ElementType.UINT64,
        ElementType.INT64,
    }
)

_FLOAT64_STRUCT: Final[struct.Struct] = struct.Struct("<d")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnsupportedTypeError(ValueError):
    """
    Кодировка не имеет числовой интерпретации в движке (complex64/complex128).

    Жёсткая ошибка: пробрасывается вызывающему, никогда не поглощается.
    """

    def __init__(self, element_type: ElementType):
        self.element_type = element_type
        super().__init__(f"{display_name(element_type)} type is not supported.")


def _prepare(element_type: ElementType | int, data: bytes | None = None) -> ElementType:
    """Нормализация тега, проверка complex и ширины буфера."""
    tag = resolve_element_type(element_type)
    if is_complex(tag):
        raise UnsupportedTypeError(tag)
    if data is not None and len(data) != byte_width(tag):
        raise ValueError(
            f"{display_name(tag)} expects {byte_width(tag)} bytes, got {len(data)}"
        )
    return tag


def _read_integer(tag: ElementType, data: bytes) -> int:
    return int.from_bytes(data, "little", signed=is_signed(tag))


def _write_integer(tag: ElementType, value: int) -> bytes:
    width = byte_width(tag)
    wrapped = wrap_to_width(value, width * 8, is_signed(tag))
    return wrapped.to_bytes(width, "little", signed=is_signed(tag))


# =============================================================================
# ЧТЕНИЕ
# =============================================================================


def read_to_double(element_type: ElementType | int, data: bytes) -> float:
    """
    Конверсия буфера в ближайший представимый double.

    - STRING_CHAR8, UNDEFINED → 0.0 (нет числового значения)
    - BOOL8 → 0.0 / 1.0 (любой ненулевой байт — true)
    - fixed-point → raw / 2^fractional_bits

    Args:
        element_type: Тег кодировки
        data: Ровно byte_width(element_type) байт

    Returns:
        Значение как float64

    Raises:
        UnsupportedTypeError: Для complex64/complex128
        ValueError: Если длина буфера не совпадает с шириной

    Examples:
        >>> read_to_double(ElementType.INT16, b"\\xff\\xff")
        -1.0
        >>> read_to_double(ElementType.FLOAT16, b"\\x00\\x3c")
        1.0
    """
    tag = _prepare(element_type, data)

    if tag in INTEGER_ELEMENT_TYPES:
        return float(_read_integer(tag, data))
    if tag == ElementType.FLOAT64:
        return _FLOAT64_STRUCT.unpack(data)[0]
    if tag in BINARY_FLOAT_FORMATS:
        return BINARY_FLOAT_FORMATS[tag].decode_bytes(data)
    if tag in FIXED_POINT_FORMATS:
        return FixedPointNumber.from_bytes(data, FIXED_POINT_FORMATS[tag]).to_float()
    if tag == ElementType.BOOL8:
        return 1.0 if data[0] else 0.0

    # UNDEFINED, STRING_CHAR8
    return 0.0


def read_to_int64(element_type: ElementType | int, data: bytes) -> int:
    """
    Конверсия буфера в int64.

    - float/fixed-point: усечение к нулю, насыщение к диапазону int64, NaN → 0
    - uint64 > INT64_MAX: реинтерпретация two's complement

    Raises:
        UnsupportedTypeError: Для complex64/complex128

    Examples:
        >>> read_to_int64(ElementType.FLOAT64, struct.pack("<d", -2.75))
        -2
    """
    tag = _prepare(element_type, data)

    if tag in INTEGER_ELEMENT_TYPES:
        return wrap_to_int64(_read_integer(tag, data))
    if tag in FIXED_POINT_FORMATS:
        return FixedPointNumber.from_bytes(data, FIXED_POINT_FORMATS[tag]).to_int()
    if tag == ElementType.FLOAT64 or tag in BINARY_FLOAT_FORMATS:
        return truncate_float_to_int64(read_to_double(tag, data))
    if tag == ElementType.BOOL8:
        return 1 if data[0] else 0

    return 0


def read_raw_bits(element_type: ElementType | int, data: bytes) -> int:
    """
    Биты хранения (не числовое значение) как int64.

    Используется для unit-in-last-place сравнений и hex/binary вывода.

    - знаковые целые, float, fixed-point: sign-extension от старшего бита
      ширины (fixed12_12 — от бита 23)
    - беззнаковые целые и bool8: zero-extension (bool8 0x02 → 2, не 1)
    - uint64: реинтерпретация как int64

    Raises:
        UnsupportedTypeError: Для complex64/complex128

    Examples:
        >>> read_raw_bits(ElementType.FLOAT32, struct.pack("<f", 1.0))
        1065353216
    """
    tag = _prepare(element_type, data)

    if byte_width(tag) == 0:
        return 0

    # Float и fixed-point кодировки зарегистрированы как signed
    return wrap_to_int64(int.from_bytes(data, "little", signed=is_signed(tag)))


# =============================================================================
# ЗАПИСЬ
# =============================================================================


def write_from_double(element_type: ElementType | int, value: float) -> bytes:
    """
    Сужающая конверсия double → буфер кодировки.

    - целые: усечение к нулю, wrap к ширине (NaN/Inf → 0)
    - bool8: 1 если value != 0 (NaN — true)
    - float16/bfloat16/float32: round-to-nearest-even, переполнение → ±inf
    - fixed-point: округление к ближайшему, wrap к ширине хранения
    - STRING_CHAR8, UNDEFINED: пустой буфер

    Args:
        element_type: Тег целевой кодировки
        value: Исходное значение

    Returns:
        Ровно byte_width(element_type) байт

    Raises:
        UnsupportedTypeError: Для complex64/complex128

    Examples:
        >>> write_from_double(ElementType.FLOAT16, 0.0650024).hex()
        '292c'
    """
    tag = _prepare(element_type)
    value = float(value)

    if tag in INTEGER_ELEMENT_TYPES:
        return _write_integer(tag, truncate_float(value))
    if tag == ElementType.FLOAT64:
        return _FLOAT64_STRUCT.pack(value)
    if tag in BINARY_FLOAT_FORMATS:
        return BINARY_FLOAT_FORMATS[tag].encode_bytes(value)
    if tag in FIXED_POINT_FORMATS:
        return FixedPointNumber.from_float(value, FIXED_POINT_FORMATS[tag]).to_bytes()
    if tag == ElementType.BOOL8:
        return b"\x01" if value != 0 else b"\x00"

    return b""


def write_from_int64(element_type: ElementType | int, value: int) -> bytes:
    """
    Сужающая конверсия int64 → буфер кодировки.

    Значение сначала приводится к int64. Float-кодировки получают
    единственное round-to-nearest-even (без промежуточного double),
    fixed-point — точное масштабирование с wrap.

    Raises:
        UnsupportedTypeError: Для complex64/complex128

    Examples:
        >>> write_from_int64(ElementType.UINT8, 257)
        b'\\x01'
    """
    tag = _prepare(element_type)
    value = wrap_to_int64(int(value))

    if tag in INTEGER_ELEMENT_TYPES:
        return _write_integer(tag, value)
    if tag == ElementType.FLOAT64:
        # int → double округляется к ближайшему чётному
        return _FLOAT64_STRUCT.pack(float(value))
    if tag in BINARY_FLOAT_FORMATS:
        return BINARY_FLOAT_FORMATS[tag].encode_bytes(value)
    if tag in FIXED_POINT_FORMATS:
        return FixedPointNumber.from_int(value, FIXED_POINT_FORMATS[tag]).to_bytes()
    if tag == ElementType.BOOL8:
        return b"\x01" if value != 0 else b"\x00"

    return b""
