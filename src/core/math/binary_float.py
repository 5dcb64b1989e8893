"""
Binary Float — Codec узких IEEE-754 форматов

Точное кодирование/декодирование бинарных float форматов уже double:
- float16  (IEEE binary16: exponent 5, mantissa 10)
- bfloat16 (truncated-mantissa: exponent 8, mantissa 7)
- float32  (IEEE binary32: exponent 8, mantissa 23)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Кодирование — единственный шаг round-to-nearest-even от точного
   значения источника (double или целого), без промежуточного float32.
   Иначе значения не переживают round-trip через текст: float16 0x2C29
   печатается как 0.0650024, и этот текст должен парситься обратно
   в 0x2C29, а не в соседний 0x2C28.
2. Переполнение после округления → ±inf (без исключений)
3. NaN кодируется как quiet NaN с сохранением знака
4. Декодирование точное (каждое значение формата представимо в double)
"""

import math
from dataclasses import dataclass
from typing import Final

from src.core.math.numerical_safeguards import round_half_even_shift


# =============================================================================
# ФОРМАТ
# =============================================================================


@dataclass(frozen=True)
class BinaryFloatFormat:
    """
    Раскладка бинарного float: sign:1 | exponent:exponent_bits | mantissa:mantissa_bits.

    Мантисса хранится без неявного ведущего бита.
    """

    exponent_bits: int
    mantissa_bits: int

    def __post_init__(self):
        if self.exponent_bits < 2 or self.mantissa_bits < 1:
            raise ValueError(
                f"invalid float layout: exponent_bits={self.exponent_bits}, "
                f"mantissa_bits={self.mantissa_bits}"
            )

    @property
    def total_bits(self) -> int:
        return 1 + self.exponent_bits + self.mantissa_bits

    @property
    def byte_width(self) -> int:
        return self.total_bits // 8

    @property
    def bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def max_biased_exponent(self) -> int:
        # Все единицы: inf / NaN
        return (1 << self.exponent_bits) - 1

    @property
    def min_exponent(self) -> int:
        # Несмещённая экспонента наименьшего нормального числа
        return 1 - self.bias

    @property
    def sign_mask(self) -> int:
        return 1 << (self.total_bits - 1)

    @property
    def infinity_bits(self) -> int:
        return self.max_biased_exponent << self.mantissa_bits

    @property
    def quiet_nan_bits(self) -> int:
        return self.infinity_bits | (1 << (self.mantissa_bits - 1))

    # -------------------------------------------------------------------------
    # Кодирование
    # -------------------------------------------------------------------------

    def encode(self, value: float | int) -> int:
        """
        Кодирование значения в битовый паттерн формата.

        Округление round-to-nearest-even за один шаг от точного значения.

        Args:
            value: double или целое (целые округляются точно, без
                промежуточного double)

        Returns:
            Битовый паттерн (беззнаковое целое шириной total_bits)

        Examples:
            >>> FLOAT16.encode(1.0)
            15360
            >>> hex(BFLOAT16.encode(1.0))
            '0x3f80'
            >>> FLOAT16.encode(1e6) == FLOAT16.infinity_bits
            True
        """
        if isinstance(value, float):
            negative = math.copysign(1.0, value) < 0
            if math.isnan(value):
                return self._with_sign(self.quiet_nan_bits, negative)
            if math.isinf(value):
                return self._with_sign(self.infinity_bits, negative)
        else:
            negative = value < 0

        numerator, denominator = abs(value).as_integer_ratio()
        if numerator == 0:
            return self._with_sign(0, negative)

        # value = numerator / 2^denominator_shift (знаменатель: степень двойки)
        denominator_shift = denominator.bit_length() - 1
        exponent = numerator.bit_length() - 1 - denominator_shift

        if exponent > self.bias:
            # Выше наибольшей конечной экспоненты даже до округления
            return self._with_sign(self.infinity_bits, negative)

        # Субнормальные числа используют фиксированную минимальную экспоненту
        exponent = max(exponent, self.min_exponent)

        # significand = round(value / 2^(exponent - mantissa_bits))
        shift = exponent - self.mantissa_bits + denominator_shift
        significand = round_half_even_shift(numerator, shift)

        implicit_bit = 1 << self.mantissa_bits
        if significand >= implicit_bit << 1:
            # Перенос при округлении вверх (1.111... → 10.000...)
            significand >>= 1
            exponent += 1

        if significand < implicit_bit:
            biased_exponent = 0
            mantissa = significand
        else:
            biased_exponent = exponent + self.bias
            mantissa = significand - implicit_bit

        if biased_exponent >= self.max_biased_exponent:
            return self._with_sign(self.infinity_bits, negative)

        bits = (biased_exponent << self.mantissa_bits) | mantissa
        return self._with_sign(bits, negative)

    def encode_bytes(self, value: float | int) -> bytes:
        """Кодирование в little-endian байты."""
        return self.encode(value).to_bytes(self.byte_width, "little")

    # -------------------------------------------------------------------------
    # Декодирование
    # -------------------------------------------------------------------------

    def decode(self, bits: int) -> float:
        """
        Точное декодирование битового паттерна в double.

        Examples:
            >>> FLOAT16.decode(0x3C00)
            1.0
            >>> FLOAT16.decode(0x0001)  # наименьшее субнормальное
            5.960464477539063e-08
        """
        bits &= (1 << self.total_bits) - 1
        negative = bool(bits & self.sign_mask)
        biased_exponent = (bits >> self.mantissa_bits) & self.max_biased_exponent
        mantissa = bits & ((1 << self.mantissa_bits) - 1)

        if biased_exponent == self.max_biased_exponent:
            result = math.nan if mantissa else math.inf
        elif biased_exponent == 0:
            result = math.ldexp(mantissa, self.min_exponent - self.mantissa_bits)
        else:
            result = math.ldexp(
                mantissa | (1 << self.mantissa_bits),
                biased_exponent - self.bias - self.mantissa_bits,
            )

        return -result if negative else result

    def decode_bytes(self, data: bytes) -> float:
        """Декодирование little-endian байтов."""
        return self.decode(int.from_bytes(data, "little"))

    def round_value(self, value: float) -> float:
        """Ближайшее к value значение, представимое в формате."""
        return self.decode(self.encode(value))

    def _with_sign(self, bits: int, negative: bool) -> int:
        return bits | self.sign_mask if negative else bits


# =============================================================================
# СТАНДАРТНЫЕ ФОРМАТЫ
# =============================================================================

FLOAT16: Final[BinaryFloatFormat] = BinaryFloatFormat(exponent_bits=5, mantissa_bits=10)
BFLOAT16: Final[BinaryFloatFormat] = BinaryFloatFormat(exponent_bits=8, mantissa_bits=7)
FLOAT32: Final[BinaryFloatFormat] = BinaryFloatFormat(exponent_bits=8, mantissa_bits=23)
