"""
Contract Validation Module

Модуль для валидации JSON контрактов машиночитаемого вывода.
"""

from .validators import (
    ContractValidator,
    NumericValueRecordValidator,
    SchemaLoader,
    validate_numeric_value_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "NumericValueRecordValidator",
    # Functions
    "validate_numeric_value_record",
]
