"""
Numerical Safeguards — Bit-level Math Primitives

Модуль обеспечивает детерминированную эмуляцию машинной арифметики
поверх неограниченных Python int и IEEE-754 double:
- Усечение к ширине хранения (two's complement wrap) и sign-extension
- Усечение float к int64 с насыщением и защитой от NaN/Inf
- Целочисленные сдвиги с округлением (half-even, half-away-from-zero)
- Деление float по правилам IEEE-754 (x/0 → ±inf, 0/0 → NaN)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат wrap_to_width всегда помещается в bits бит
2. NaN никогда не превращается в исключение при усечении (→ 0)
3. Деление float никогда не бросает ZeroDivisionError
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# ГРАНИЦЫ INT64
# =============================================================================

INT64_BITS: Final[int] = 64
INT64_MIN: Final[int] = -(1 << 63)
INT64_MAX: Final[int] = (1 << 63) - 1
UINT64_MASK: Final[int] = (1 << 64) - 1


# =============================================================================
# WRAP И SIGN-EXTENSION
# =============================================================================


def sign_extend(value: int, bits: int) -> int:
    """
    Sign-extension младших bits бит значения.

    Старший значимый бит (bits - 1) трактуется как знаковый.
    Используется для ширин, не кратных native int (например, int24).

    Args:
        value: Исходное значение (учитываются только младшие bits бит)
        bits: Ширина хранения в битах

    Returns:
        Знаковое значение в диапазоне [-2^(bits-1), 2^(bits-1))

    Examples:
        >>> sign_extend(0xFF, 8)
        -1
        >>> sign_extend(0x7FFFFF, 24)
        8388607
        >>> sign_extend(0x800000, 24)
        -8388608
    """
    if bits <= 0:
        raise ValueError(f"bits must be positive, got {bits}")

    sign_bit = 1 << (bits - 1)
    masked = value & ((1 << bits) - 1)
    return (masked ^ sign_bit) - sign_bit


def wrap_to_width(value: int, bits: int, signed: bool) -> int:
    """
    Усечение целого к ширине хранения (модуль 2^bits).

    Эмулирует narrowing-преобразование машинного целого.

    Args:
        value: Исходное значение (любой величины)
        bits: Ширина хранения в битах (0 → всегда 0)
        signed: Знаковая ли ширина

    Returns:
        Значение в диапазоне ширины

    Examples:
        >>> wrap_to_width(256, 8, signed=False)
        0
        >>> wrap_to_width(128, 8, signed=True)
        -128
        >>> wrap_to_width(-1, 16, signed=False)
        65535
    """
    if bits <= 0:
        return 0
    if signed:
        return sign_extend(value, bits)
    return value & ((1 << bits) - 1)


def wrap_to_int64(value: int) -> int:
    """Усечение к знаковому int64."""
    return sign_extend(value, INT64_BITS)


# =============================================================================
# УСЕЧЕНИЕ FLOAT → INT
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float конечным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def truncate_float(value: float) -> int:
    """
    Усечение float к целому в сторону нуля.

    NaN/Inf не имеют целочисленного значения → 0.

    Examples:
        >>> truncate_float(-2.9)
        -2
        >>> truncate_float(float('nan'))
        0
    """
    if not is_valid_float(value):
        return 0
    return math.trunc(value)


def truncate_float_to_int64(value: float) -> int:
    """
    Усечение float к ближайшему представимому int64 (в сторону нуля).

    - NaN → 0
    - Значения вне диапазона (включая ±inf) насыщаются к INT64_MIN/INT64_MAX

    Examples:
        >>> truncate_float_to_int64(1e30)
        9223372036854775807
        >>> truncate_float_to_int64(float('-inf'))
        -9223372036854775808
    """
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return INT64_MAX if value > 0 else INT64_MIN
    return clamp_int(math.trunc(value), INT64_MIN, INT64_MAX)


def clamp_int(value: int, min_value: int, max_value: int) -> int:
    """Ограничение целого диапазоном [min_value, max_value]."""
    return max(min_value, min(value, max_value))


# =============================================================================
# СДВИГИ С ОКРУГЛЕНИЕМ
# =============================================================================


def round_half_even_shift(value: int, shift: int) -> int:
    """
    Деление неотрицательного целого на 2^shift с round-half-to-even.

    Используется при сужении мантиссы бинарных float.

    Args:
        value: Неотрицательное целое
        shift: Величина сдвига (>= 0)

    Returns:
        round_half_even(value / 2^shift)

    Examples:
        >>> round_half_even_shift(5, 1)  # 2.5 → 2
        2
        >>> round_half_even_shift(7, 1)  # 3.5 → 4
        4
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if shift <= 0:
        return value << -shift

    quotient = value >> shift
    remainder = value & ((1 << shift) - 1)
    half = 1 << (shift - 1)

    if remainder > half or (remainder == half and quotient & 1):
        quotient += 1
    return quotient


def round_half_away_divide(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с округлением к ближайшему (half away from zero).

    Используется при rescale fixed-point умножения и деления.

    Raises:
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> round_half_away_divide(5, 2)
        3
        >>> round_half_away_divide(-5, 2)
        -3
        >>> round_half_away_divide(7, 3)
        2
    """
    if denominator == 0:
        raise ZeroDivisionError("integer division by zero")

    negative = (numerator < 0) != (denominator < 0)
    quotient, remainder = divmod(abs(numerator), abs(denominator))

    # Половина и больше → от нуля
    if remainder * 2 >= abs(denominator):
        quotient += 1

    return -quotient if negative else quotient


def truncating_divide(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю (семантика машинного деления).

    Raises:
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> truncating_divide(-7, 2)
        -3
    """
    if denominator == 0:
        raise ZeroDivisionError("integer division by zero")

    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


# =============================================================================
# IEEE-754 ДЕЛЕНИЕ
# =============================================================================


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Деление float по правилам IEEE-754.

    Python бросает ZeroDivisionError на x / 0.0; машинная арифметика
    возвращает ±inf (знак = XOR знаков) или NaN для 0/0 и NaN/0.

    Examples:
        >>> ieee_divide(1.0, 0.0)
        inf
        >>> ieee_divide(1.0, -0.0)
        -inf
        >>> ieee_divide(6.0, 3.0)
        2.0
    """
    if denominator != 0.0:
        return numerator / denominator

    if numerator == 0.0 or math.isnan(numerator) or math.isnan(denominator):
        return math.nan

    negative = (math.copysign(1.0, numerator) < 0) != (math.copysign(1.0, denominator) < 0)
    return -math.inf if negative else math.inf
