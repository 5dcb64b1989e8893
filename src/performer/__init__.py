"""Operation Performer — арифметические редукции над tagged values.

- kinds: арифметики кодировок (целые, float, fixed-point) и таблица dispatch
- performer: nop/add/subtract/multiply/divide/dot над последовательностями
"""

from .kinds import (
    ARITHMETIC_KINDS,
    ArithmeticKind,
    FixedPointKind,
    FloatKind,
    IntegerKind,
    arithmetic_kind_for,
)
from .performer import (
    OperationOutcome,
    perform_numeric_operation,
    perform_operation_sequence,
    reduce_values,
)

__all__ = [
    # Kinds
    "ArithmeticKind",
    "IntegerKind",
    "FloatKind",
    "FixedPointKind",
    "ARITHMETIC_KINDS",
    "arithmetic_kind_for",
    # Performer
    "OperationOutcome",
    "perform_numeric_operation",
    "perform_operation_sequence",
    "reduce_values",
]
