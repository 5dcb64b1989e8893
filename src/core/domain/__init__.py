"""
Domain models and value objects.

Contains the encoding registry (ElementType) and the tagged value models
(NumericValue, OperationRange).
"""

from src.core.domain.element_type import (
    COMPLEX_ELEMENT_TYPES,
    NUMBER_BUFFER_SIZE,
    ElementType,
    ElementTypeInfo,
    byte_width,
    display_name,
    element_type_info,
    is_complex,
    is_fractional,
    is_signed,
    resolve_element_type,
)
from src.core.domain.numeric_value import (
    NumericOperation,
    NumericValue,
    OperationRange,
)

__all__ = [
    # Element type registry
    "COMPLEX_ELEMENT_TYPES",
    "NUMBER_BUFFER_SIZE",
    "ElementType",
    "ElementTypeInfo",
    "byte_width",
    "display_name",
    "element_type_info",
    "is_complex",
    "is_fractional",
    "is_signed",
    "resolve_element_type",
    # Numeric value models
    "NumericOperation",
    "NumericValue",
    "OperationRange",
]
