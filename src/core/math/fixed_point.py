"""
Fixed Point — Q-format числа с фиксированной точкой

Scaled-integer тип: value = raw / 2^fractional_bits.

Форматы:
- fixed12_12: 24-bit хранение (не кратно native int), 12 целых / 12 дробных бит
- fixed16_16: 32-bit хранение, 16 / 16
- fixed8_24:  32-bit хранение, 8 / 24

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. integer_bits + fractional_bits == storage_bits (знаковый бит входит в integer_bits)
2. raw всегда sign-extended от бита storage_bits - 1 (для 12.12 — бит 23)
3. Сложение/вычитание — на scaled integers напрямую (масштаб совпадает)
4. Умножение/деление — в промежуточном представлении шире хранения
   (Python int не ограничен), затем rescale на 2^fractional_bits
   с округлением к ближайшему
5. Любой результат заворачивается (wrap) к ширине хранения

ПРИМЕР:
    Fixed16.16(2.5) хранится как 163840 (2.5 × 65536), обратно читается ровно 2.5
"""

import math
from dataclasses import dataclass
from typing import Final

from src.core.math.numerical_safeguards import (
    is_valid_float,
    round_half_away_divide,
    sign_extend,
    truncating_divide,
)


# =============================================================================
# ФОРМАТ
# =============================================================================


@dataclass(frozen=True)
class FixedPointFormat:
    """Раскладка Q-формата: ширина хранения и разбиение на целые/дробные биты."""

    storage_bits: int
    integer_bits: int
    fractional_bits: int

    def __post_init__(self):
        if self.storage_bits <= 0 or self.storage_bits % 8 != 0:
            raise ValueError(
                f"storage_bits must be a positive multiple of 8, got {self.storage_bits}"
            )
        if self.integer_bits < 1 or self.fractional_bits < 0:
            raise ValueError(
                f"invalid bit split: integer_bits={self.integer_bits}, "
                f"fractional_bits={self.fractional_bits}"
            )
        if self.integer_bits + self.fractional_bits != self.storage_bits:
            raise ValueError(
                f"integer_bits + fractional_bits must equal storage_bits "
                f"({self.integer_bits} + {self.fractional_bits} != {self.storage_bits})"
            )

    @property
    def byte_width(self) -> int:
        return self.storage_bits // 8

    @property
    def scale(self) -> int:
        return 1 << self.fractional_bits

    @property
    def name(self) -> str:
        return f"fixed{self.integer_bits}_{self.fractional_bits}"


FIXED12_12: Final[FixedPointFormat] = FixedPointFormat(24, 12, 12)
FIXED16_16: Final[FixedPointFormat] = FixedPointFormat(32, 16, 16)
FIXED8_24: Final[FixedPointFormat] = FixedPointFormat(32, 8, 24)


# =============================================================================
# FIXED POINT NUMBER
# =============================================================================


class FixedPointNumber:
    """
    Значение с фиксированной точкой.

    raw — знаковое scaled integer, уже приведённое к ширине хранения.
    Экземпляры неизменяемы: каждая операция создаёт новый объект.
    """

    __slots__ = ("_raw", "_fmt")

    def __init__(self, raw: int, fmt: FixedPointFormat):
        self._raw = sign_extend(int(raw), fmt.storage_bits)
        self._fmt = fmt

    # ---------- Создание ---------- #

    @classmethod
    def from_raw(cls, raw: int, fmt: FixedPointFormat) -> "FixedPointNumber":
        """Из сырого scaled integer (лишние старшие биты отбрасываются)."""
        return cls(raw, fmt)

    @classmethod
    def from_float(cls, value: float, fmt: FixedPointFormat) -> "FixedPointNumber":
        """
        Из float: умножение на 2^fractional_bits, округление к ближайшему
        (half away from zero), wrap к ширине хранения.

        NaN/Inf не имеют представления → 0.

        Examples:
            >>> FixedPointNumber.from_float(2.5, FIXED16_16).raw
            163840
            >>> FixedPointNumber.from_float(-1.0, FIXED12_12).raw
            -4096
        """
        if not is_valid_float(value):
            return cls(0, fmt)

        numerator, denominator = value.as_integer_ratio()
        return cls(round_half_away_divide(numerator * fmt.scale, denominator), fmt)

    @classmethod
    def from_int(cls, value: int, fmt: FixedPointFormat) -> "FixedPointNumber":
        """Из целого: точное масштабирование, wrap к ширине хранения."""
        return cls(value * fmt.scale, fmt)

    @classmethod
    def from_bytes(cls, data: bytes, fmt: FixedPointFormat) -> "FixedPointNumber":
        """Из little-endian байтов хранения (ровно fmt.byte_width)."""
        if len(data) != fmt.byte_width:
            raise ValueError(
                f"{fmt.name} expects {fmt.byte_width} bytes, got {len(data)}"
            )
        return cls(int.from_bytes(data, "little", signed=True), fmt)

    # ---------- Доступ ---------- #

    @property
    def raw(self) -> int:
        return self._raw

    @property
    def fmt(self) -> FixedPointFormat:
        return self._fmt

    def to_bytes(self) -> bytes:
        """Little-endian байты хранения (two's complement)."""
        return self._raw.to_bytes(self._fmt.byte_width, "little", signed=True)

    def to_float(self) -> float:
        """raw / 2^fractional_bits (точно: 32-bit raw представим в double)."""
        return math.ldexp(self._raw, -self._fmt.fractional_bits)

    def to_int(self) -> int:
        """Целая часть с усечением к нулю."""
        return truncating_divide(self._raw, self._fmt.scale)

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        return self.to_int()

    # ---------- Арифметика ---------- #

    def _check_format(self, other: object) -> "FixedPointNumber":
        if not isinstance(other, FixedPointNumber):
            return NotImplemented
        if other._fmt != self._fmt:
            raise TypeError(
                f"cannot mix fixed-point formats {self._fmt.name} and {other._fmt.name}"
            )
        return other

    def __add__(self, other: "FixedPointNumber") -> "FixedPointNumber":
        other = self._check_format(other)
        if other is NotImplemented:
            return NotImplemented
        return FixedPointNumber(self._raw + other._raw, self._fmt)

    def __sub__(self, other: "FixedPointNumber") -> "FixedPointNumber":
        other = self._check_format(other)
        if other is NotImplemented:
            return NotImplemented
        return FixedPointNumber(self._raw - other._raw, self._fmt)

    def __mul__(self, other: "FixedPointNumber") -> "FixedPointNumber":
        other = self._check_format(other)
        if other is NotImplemented:
            return NotImplemented
        # Произведение имеет масштаб 2^(2f) → rescale вниз на 2^f
        product = self._raw * other._raw
        return FixedPointNumber(round_half_away_divide(product, self._fmt.scale), self._fmt)

    def __truediv__(self, other: "FixedPointNumber") -> "FixedPointNumber":
        other = self._check_format(other)
        if other is NotImplemented:
            return NotImplemented
        if other._raw == 0:
            raise ZeroDivisionError(f"{self._fmt.name} division by zero")
        # Делимое масштабируется вверх на 2^f, чтобы частное осталось в масштабе 2^f
        dividend = self._raw * self._fmt.scale
        return FixedPointNumber(round_half_away_divide(dividend, other._raw), self._fmt)

    def __neg__(self) -> "FixedPointNumber":
        return FixedPointNumber(-self._raw, self._fmt)

    # ---------- Сравнение ---------- #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedPointNumber):
            return NotImplemented
        return self._fmt == other._fmt and self._raw == other._raw

    def __hash__(self) -> int:
        return hash((self._raw, self._fmt))

    def __repr__(self) -> str:
        return f"FixedPointNumber({self.to_float()!r}, raw={self._raw}, fmt={self._fmt.name})"
