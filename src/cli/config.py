"""
CLI Configuration — режимы вывода, состояние сессии и таблицы ключевых слов

Конфигурация:
- RenderMode: как показывать сырые биты (hex/binary) и дробные значения
  (decimal/hex float)
- SessionConfig: предпочтительная кодировка и режим разбора чисел;
  меняется токенами командной строки по ходу ввода

Таблицы ключевых слов неизменяемы и задают грамматику токенов.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping

from src.core.domain.element_type import ElementType
from src.core.domain.numeric_value import NumericOperation


# =============================================================================
# ENUMS
# =============================================================================


class RawBitsFormat(str, Enum):
    """Отображение сырых битов хранения."""

    HEX = "hex"
    BINARY = "binary"


class FloatFormat(str, Enum):
    """Отображение дробных значений."""

    DECIMAL = "decimal"  # %.24g
    HEX = "hex"  # %a


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class RenderMode:
    """Режим текстового вывода значения."""

    raw_bits_format: RawBitsFormat = RawBitsFormat.HEX
    float_format: FloatFormat = FloatFormat.DECIMAL


@dataclass(frozen=True)
class SessionConfig:
    """
    Состояние разбора командной строки.

    preferred_type == UNDEFINED означает вывод кодировки из текста числа.
    """

    preferred_type: ElementType = ElementType.UNDEFINED
    parse_as_raw: bool = False
    render_mode: RenderMode = field(default_factory=RenderMode)


# =============================================================================
# CONSTANTS
# =============================================================================

LOG_LEVEL_ENV_VAR: Final[str] = "SEEBINUM_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS: Final[tuple[str, ...]] = ("text", "json")

# Порядок кодировок в блоках "To binary" / "From binary"
DISPLAY_ORDER: Final[tuple[ElementType, ...]] = (
    ElementType.UINT8,
    ElementType.UINT16,
    ElementType.UINT32,
    ElementType.UINT64,
    ElementType.INT8,
    ElementType.INT16,
    ElementType.INT32,
    ElementType.INT64,
    ElementType.FLOAT16,
    ElementType.BFLOAT16,
    ElementType.FLOAT32,
    ElementType.FLOAT64,
    ElementType.FIXED12_12,
    ElementType.FIXED16_16,
    ElementType.FIXED8_24,
)


# =============================================================================
# KEYWORDS
# =============================================================================

OPERATION_KEYWORDS: Final[Mapping[str, NumericOperation]] = MappingProxyType(
    {
        "nop": NumericOperation.NONE,
        "add": NumericOperation.ADD,
        "sub": NumericOperation.SUBTRACT,
        "subtract": NumericOperation.SUBTRACT,
        "mul": NumericOperation.MULTIPLY,
        "multiply": NumericOperation.MULTIPLY,
        "div": NumericOperation.DIVIDE,
        "divide": NumericOperation.DIVIDE,
        "dot": NumericOperation.DOT,
        "dotproduct": NumericOperation.DOT,
    }
)

ELEMENT_TYPE_KEYWORDS: Final[Mapping[str, ElementType]] = MappingProxyType(
    {
        "i8": ElementType.INT8,
        "int8": ElementType.INT8,
        "ui8": ElementType.UINT8,
        "uint8": ElementType.UINT8,
        "i16": ElementType.INT16,
        "int16": ElementType.INT16,
        "ui16": ElementType.UINT16,
        "uint16": ElementType.UINT16,
        "i32": ElementType.INT32,
        "int32": ElementType.INT32,
        "ui32": ElementType.UINT32,
        "uint32": ElementType.UINT32,
        "i64": ElementType.INT64,
        "int64": ElementType.INT64,
        "ui64": ElementType.UINT64,
        "uint64": ElementType.UINT64,
        "f16": ElementType.FLOAT16,
        "float16": ElementType.FLOAT16,
        "f16m7e8s1": ElementType.BFLOAT16,
        "bfloat16": ElementType.BFLOAT16,
        "f32": ElementType.FLOAT32,
        "float32": ElementType.FLOAT32,
        "f64": ElementType.FLOAT64,
        "float64": ElementType.FLOAT64,
        "fixed12_12": ElementType.FIXED12_12,
        "fixed16_16": ElementType.FIXED16_16,
        "fixed8_24": ElementType.FIXED8_24,
    }
)

RAW_BITS_FORMAT_KEYWORDS: Final[Mapping[str, RawBitsFormat]] = MappingProxyType(
    {
        "showbinary": RawBitsFormat.BINARY,
        "showbin": RawBitsFormat.BINARY,
        "showhex": RawBitsFormat.HEX,
    }
)

FLOAT_FORMAT_KEYWORDS: Final[Mapping[str, FloatFormat]] = MappingProxyType(
    {
        "showhexfloat": FloatFormat.HEX,
        "showdecfloat": FloatFormat.DECIMAL,
    }
)

PARSE_MODE_KEYWORDS: Final[Mapping[str, bool]] = MappingProxyType(
    {
        "raw": True,
        "num": False,
    }
)
