"""
Core math modules для SeeBiNum

Бинарные кодировки, fixed-point тип и bit-exact конверсии.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # int64 bounds
    INT64_MAX,
    INT64_MIN,
    UINT64_MASK,
    # Wrap and sign-extension
    sign_extend,
    wrap_to_int64,
    wrap_to_width,
    # Float truncation
    clamp_int,
    is_valid_float,
    truncate_float,
    truncate_float_to_int64,
    # Rounding shifts and division
    ieee_divide,
    round_half_away_divide,
    round_half_even_shift,
    truncating_divide,
)

# Binary Float codec
from src.core.math.binary_float import (
    BFLOAT16,
    FLOAT16,
    FLOAT32,
    BinaryFloatFormat,
)

# Fixed Point
from src.core.math.fixed_point import (
    FIXED8_24,
    FIXED12_12,
    FIXED16_16,
    FixedPointFormat,
    FixedPointNumber,
)

# Conversion Engine
from src.core.math.conversion import (
    BINARY_FLOAT_FORMATS,
    FIXED_POINT_FORMATS,
    INTEGER_ELEMENT_TYPES,
    UnsupportedTypeError,
    read_raw_bits,
    read_to_double,
    read_to_int64,
    write_from_double,
    write_from_int64,
)

__all__ = [
    # Numerical Safeguards: int64 bounds
    "INT64_MAX",
    "INT64_MIN",
    "UINT64_MASK",
    # Numerical Safeguards: Wrap and sign-extension
    "sign_extend",
    "wrap_to_int64",
    "wrap_to_width",
    # Numerical Safeguards: Float truncation
    "clamp_int",
    "is_valid_float",
    "truncate_float",
    "truncate_float_to_int64",
    # Numerical Safeguards: Rounding and division
    "ieee_divide",
    "round_half_away_divide",
    "round_half_even_shift",
    "truncating_divide",
    # Binary Float: Formats
    "BFLOAT16",
    "FLOAT16",
    "FLOAT32",
    "BinaryFloatFormat",
    # Fixed Point: Formats
    "FIXED8_24",
    "FIXED12_12",
    "FIXED16_16",
    # Fixed Point: Types
    "FixedPointFormat",
    "FixedPointNumber",
    # Conversion Engine: Tables
    "BINARY_FLOAT_FORMATS",
    "FIXED_POINT_FORMATS",
    "INTEGER_ELEMENT_TYPES",
    # Conversion Engine: Exceptions
    "UnsupportedTypeError",
    # Conversion Engine: Functions
    "read_raw_bits",
    "read_to_double",
    "read_to_int64",
    "write_from_double",
    "write_from_int64",
]
