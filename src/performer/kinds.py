"""Arithmetic Kinds — конкретные арифметики, выбираемые по тегу кодировки.

Каждый kind — stateless объект с единым интерфейсом:
- decode/encode: байты хранения ↔ рабочее значение
- zero/one: нейтральные элементы редукций
- add/subtract/multiply/divide: шаг арифметики с приведением к кодировке

Семантика:
- Целые: wrap по модулю 2^width после каждого шага, деление с усечением
  к нулю, деление на ноль → ZeroDivisionError
- Float: вычисление в double, округление обратно в кодировку после
  каждого шага (round-to-nearest-even), деление по IEEE-754
- Fixed-point: операторы FixedPointNumber

Таблица ARITHMETIC_KINDS строится один раз при импорте и не изменяется.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Final, Mapping, Optional

from src.core.domain.element_type import (
    ElementType,
    byte_width,
    display_name,
    is_signed,
    resolve_element_type,
)
from src.core.math.conversion import (
    FIXED_POINT_FORMATS,
    INTEGER_ELEMENT_TYPES,
    read_to_double,
    write_from_double,
)
from src.core.math.fixed_point import FixedPointFormat, FixedPointNumber
from src.core.math.numerical_safeguards import (
    ieee_divide,
    truncating_divide,
    wrap_to_width,
)


class ArithmeticKind(ABC):
    """Общий интерфейс арифметики одной кодировки."""

    def __init__(self, element_type: ElementType):
        self.element_type = element_type

    @property
    def byte_width(self) -> int:
        return byte_width(self.element_type)

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        ...

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        ...

    @abstractmethod
    def zero(self) -> Any:
        ...

    @abstractmethod
    def one(self) -> Any:
        ...

    @abstractmethod
    def add(self, a: Any, b: Any) -> Any:
        ...

    @abstractmethod
    def subtract(self, a: Any, b: Any) -> Any:
        ...

    @abstractmethod
    def multiply(self, a: Any, b: Any) -> Any:
        ...

    @abstractmethod
    def divide(self, a: Any, b: Any) -> Any:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({display_name(self.element_type)})"


class IntegerKind(ArithmeticKind):
    """Машинные целые фиксированной ширины (wrap-around)."""

    def __init__(self, element_type: ElementType):
        super().__init__(element_type)
        self.bits = byte_width(element_type) * 8
        self.signed = is_signed(element_type)

    def _wrap(self, value: int) -> int:
        return wrap_to_width(value, self.bits, self.signed)

    def decode(self, data: bytes) -> int:
        return int.from_bytes(data, "little", signed=self.signed)

    def encode(self, value: int) -> bytes:
        return self._wrap(value).to_bytes(self.byte_width, "little", signed=self.signed)

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def add(self, a: int, b: int) -> int:
        return self._wrap(a + b)

    def subtract(self, a: int, b: int) -> int:
        return self._wrap(a - b)

    def multiply(self, a: int, b: int) -> int:
        return self._wrap(a * b)

    def divide(self, a: int, b: int) -> int:
        if b == 0:
            raise ZeroDivisionError(f"{display_name(self.element_type)} division by zero")
        return self._wrap(truncating_divide(a, b))


class FloatKind(ArithmeticKind):
    """Бинарные float (float16, bfloat16, float32, float64)."""

    def _narrow(self, value: float) -> float:
        # Округление результата шага к ближайшему значению кодировки
        return read_to_double(self.element_type, write_from_double(self.element_type, value))

    def decode(self, data: bytes) -> float:
        return read_to_double(self.element_type, data)

    def encode(self, value: float) -> bytes:
        return write_from_double(self.element_type, value)

    def zero(self) -> float:
        return 0.0

    def one(self) -> float:
        return 1.0

    def add(self, a: float, b: float) -> float:
        return self._narrow(a + b)

    def subtract(self, a: float, b: float) -> float:
        return self._narrow(a - b)

    def multiply(self, a: float, b: float) -> float:
        return self._narrow(a * b)

    def divide(self, a: float, b: float) -> float:
        return self._narrow(ieee_divide(a, b))


class FixedPointKind(ArithmeticKind):
    """Q-format числа с фиксированной точкой."""

    def __init__(self, element_type: ElementType, fmt: FixedPointFormat):
        super().__init__(element_type)
        self.fmt = fmt

    def decode(self, data: bytes) -> FixedPointNumber:
        return FixedPointNumber.from_bytes(data, self.fmt)

    def encode(self, value: FixedPointNumber) -> bytes:
        return value.to_bytes()

    def zero(self) -> FixedPointNumber:
        return FixedPointNumber.from_int(0, self.fmt)

    def one(self) -> FixedPointNumber:
        return FixedPointNumber.from_int(1, self.fmt)

    def add(self, a: FixedPointNumber, b: FixedPointNumber) -> FixedPointNumber:
        return a + b

    def subtract(self, a: FixedPointNumber, b: FixedPointNumber) -> FixedPointNumber:
        return a - b

    def multiply(self, a: FixedPointNumber, b: FixedPointNumber) -> FixedPointNumber:
        return a * b

    def divide(self, a: FixedPointNumber, b: FixedPointNumber) -> FixedPointNumber:
        return a / b


# =============================================================================
# DISPATCH TABLE
# =============================================================================

_FLOAT_ELEMENT_TYPES: Final[tuple[ElementType, ...]] = (
    ElementType.FLOAT16,
    ElementType.BFLOAT16,
    ElementType.FLOAT32,
    ElementType.FLOAT64,
)


def _build_kind_table() -> Mapping[ElementType, ArithmeticKind]:
    table: dict[ElementType, ArithmeticKind] = {}
    for element_type in sorted(INTEGER_ELEMENT_TYPES):
        table[element_type] = IntegerKind(element_type)
    for element_type in _FLOAT_ELEMENT_TYPES:
        table[element_type] = FloatKind(element_type)
    for element_type, fmt in FIXED_POINT_FORMATS.items():
        table[element_type] = FixedPointKind(element_type, fmt)
    return MappingProxyType(table)


# UNDEFINED, STRING_CHAR8, BOOL8, COMPLEX64, COMPLEX128 сознательно отсутствуют
ARITHMETIC_KINDS: Final[Mapping[ElementType, ArithmeticKind]] = _build_kind_table()


def arithmetic_kind_for(element_type: ElementType | int) -> Optional[ArithmeticKind]:
    """
    Арифметика для тега.

    Returns:
        ArithmeticKind или None, если кодировка не dispatchable
    """
    return ARITHMETIC_KINDS.get(resolve_element_type(element_type))
