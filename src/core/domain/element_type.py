"""
ElementType — Реестр бинарных числовых кодировок

Единственный источник метаданных о каждой кодировке:
- byte width (ширина хранения в байтах)
- signed flag (знаковая ли кодировка)
- fractional flag (может ли значение быть нецелым)
- display name (имя для вывода и CLI)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Длина таблицы реестра == количество дискриминантов ElementType
   (проверяется при импорте модуля)
2. Все функции реестра тотальные: неизвестный тег → Undefined
   (ширина 0, unsigned, non-fractional) без исключений
3. Таблица заполняется один раз и больше не изменяется
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final


# =============================================================================
# ENUMS
# =============================================================================


class ElementType(int, Enum):
    """
    Дискриминант бинарной кодировки.

    Нумерация совпадает с исходным форматом тегов, поэтому значения
    нельзя переупорядочивать.
    """

    UNDEFINED = 0
    FLOAT32 = 1  # mantissa:23 exponent:8 sign:1
    UINT8 = 2
    INT8 = 3
    UINT16 = 4
    INT16 = 5
    INT32 = 6
    INT64 = 7
    STRING_CHAR8 = 8
    BOOL8 = 9
    FLOAT16 = 10  # mantissa:10 exponent:5 sign:1
    FLOAT64 = 11  # mantissa:52 exponent:11 sign:1
    UINT32 = 12
    UINT64 = 13
    COMPLEX64 = 14
    COMPLEX128 = 15
    BFLOAT16 = 16  # mantissa:7 exponent:8 sign:1
    FIXED12_12 = 17
    FIXED16_16 = 18
    FIXED8_24 = 19

    # Алиасы по битовой раскладке
    FLOAT16M10E5S1 = 10
    FLOAT16M7E8S1 = 16


# =============================================================================
# REGISTRY
# =============================================================================


@dataclass(frozen=True)
class ElementTypeInfo:
    """Запись реестра для одной кодировки."""

    name: str
    byte_width: int
    is_signed: bool
    is_fractional: bool


# Индекс в таблице == значение дискриминанта
_ELEMENT_TYPE_TABLE: Final[tuple[ElementTypeInfo, ...]] = (
    ElementTypeInfo("undefined", 0, False, False),  # UNDEFINED = 0
    ElementTypeInfo("float32", 4, True, True),  # FLOAT32 = 1
    ElementTypeInfo("uint8", 1, False, False),  # UINT8 = 2
    ElementTypeInfo("int8", 1, True, False),  # INT8 = 3
    ElementTypeInfo("uint16", 2, False, False),  # UINT16 = 4
    ElementTypeInfo("int16", 2, True, False),  # INT16 = 5
    ElementTypeInfo("int32", 4, True, False),  # INT32 = 6
    ElementTypeInfo("int64", 8, True, False),  # INT64 = 7
    ElementTypeInfo("string8", 0, False, False),  # STRING_CHAR8 = 8
    ElementTypeInfo("bool8", 1, False, False),  # BOOL8 = 9
    ElementTypeInfo("float16", 2, True, True),  # FLOAT16 = 10
    ElementTypeInfo("float64", 8, True, True),  # FLOAT64 = 11
    ElementTypeInfo("uint32", 4, False, False),  # UINT32 = 12
    ElementTypeInfo("uint64", 8, False, False),  # UINT64 = 13
    ElementTypeInfo("complex64", 8, True, True),  # COMPLEX64 = 14
    ElementTypeInfo("complex128", 16, True, True),  # COMPLEX128 = 15
    ElementTypeInfo("bfloat16", 2, True, True),  # BFLOAT16 = 16
    ElementTypeInfo("fixed12_12", 3, True, True),  # FIXED12_12 = 17
    ElementTypeInfo("fixed16_16", 4, True, True),  # FIXED16_16 = 18
    ElementTypeInfo("fixed8_24", 4, True, True),  # FIXED8_24 = 19
)

if len(_ELEMENT_TYPE_TABLE) != len(ElementType):
    raise RuntimeError(
        f"Element type registry has {len(_ELEMENT_TYPE_TABLE)} entries, "
        f"expected {len(ElementType)}"
    )

# Самая широкая кодировка, которую хранит NumericValue (complex128 не хранится)
NUMBER_BUFFER_SIZE: Final[int] = 8

COMPLEX_ELEMENT_TYPES: Final[frozenset[ElementType]] = frozenset(
    {ElementType.COMPLEX64, ElementType.COMPLEX128}
)


# =============================================================================
# ДОСТУП К РЕЕСТРУ
# =============================================================================


def element_type_info(element_type: ElementType | int) -> ElementTypeInfo:
    """
    Запись реестра для тега.

    Разрешающий fallback: любой тег вне диапазона (или не целое число)
    трактуется как UNDEFINED. Это не ошибка, а наблюдаемое поведение.

    Args:
        element_type: ElementType или сырое значение дискриминанта

    Returns:
        ElementTypeInfo (для неизвестного тега — запись UNDEFINED)

    Examples:
        >>> element_type_info(ElementType.FLOAT32).byte_width
        4
        >>> element_type_info(999).name
        'undefined'
    """
    if isinstance(element_type, int) and 0 <= element_type < len(_ELEMENT_TYPE_TABLE):
        return _ELEMENT_TYPE_TABLE[int(element_type)]
    return _ELEMENT_TYPE_TABLE[0]


def resolve_element_type(element_type: ElementType | int) -> ElementType:
    """Нормализация сырого тега в ElementType (неизвестный → UNDEFINED)."""
    if isinstance(element_type, int) and 0 <= element_type < len(_ELEMENT_TYPE_TABLE):
        return ElementType(int(element_type))
    return ElementType.UNDEFINED


def byte_width(element_type: ElementType | int) -> int:
    """Ширина хранения в байтах (0 для UNDEFINED и STRING_CHAR8)."""
    return element_type_info(element_type).byte_width


def is_signed(element_type: ElementType | int) -> bool:
    """Знаковая ли кодировка."""
    return element_type_info(element_type).is_signed


def is_fractional(element_type: ElementType | int) -> bool:
    """Может ли значение кодировки быть нецелым (float, fixed, complex)."""
    return element_type_info(element_type).is_fractional


def display_name(element_type: ElementType | int) -> str:
    """Имя кодировки для вывода (например, 'fixed16_16')."""
    return element_type_info(element_type).name


def is_complex(element_type: ElementType | int) -> bool:
    """Complex-кодировки не имеют числовой интерпретации в движке."""
    return resolve_element_type(element_type) in COMPLEX_ELEMENT_TYPES
