"""
NumericValue — Tagged raw value и операции над последовательностями

Immutable Pydantic модели:
- NumericValue: 8-байтовый буфер + тег кодировки
- OperationRange: операция над полуинтервалом [begin, end) плоского списка значений

Модели не интерпретируют байты: это делает только Conversion Engine
(src.core.math.conversion) по тегу значения.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.domain.element_type import (
    NUMBER_BUFFER_SIZE,
    ElementType,
    byte_width,
    resolve_element_type,
)


# =============================================================================
# ENUMS
# =============================================================================


class NumericOperation(str, Enum):
    """Редукция над последовательностью значений одной кодировки."""

    NONE = "nop"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    DOT = "dot"


# =============================================================================
# NUMERIC VALUE
# =============================================================================


class NumericValue(BaseModel):
    """
    Значение в бинарной кодировке.

    Immutable модель (frozen=True). Буфер всегда NUMBER_BUFFER_SIZE байт;
    значимы только первые byte_width(element_type) байт (payload).
    Короткий буфер дополняется нулями справа.
    """

    element_type: ElementType = Field(..., description="Тег кодировки")
    data: bytes = Field(
        default=bytes(NUMBER_BUFFER_SIZE),
        description="Little-endian буфер хранения",
    )

    model_config = {"frozen": True}

    @field_validator("element_type", mode="before")
    @classmethod
    def normalize_element_type(cls, v: object) -> object:
        """Неизвестный целочисленный тег → UNDEFINED (разрешающий fallback)."""
        if isinstance(v, int):
            return resolve_element_type(v)
        return v

    @field_validator("data")
    @classmethod
    def pad_to_buffer_size(cls, v: bytes) -> bytes:
        """Дополнение буфера нулями до NUMBER_BUFFER_SIZE."""
        if len(v) > NUMBER_BUFFER_SIZE:
            raise ValueError(
                f"data has {len(v)} bytes, buffer holds at most {NUMBER_BUFFER_SIZE}"
            )
        return v.ljust(NUMBER_BUFFER_SIZE, b"\x00")

    # ---------- Создание ---------- #

    @classmethod
    def zero(cls, element_type: ElementType | int) -> "NumericValue":
        """Нулевое значение кодировки."""
        return cls(element_type=element_type)

    @classmethod
    def from_raw_bits(cls, element_type: ElementType | int, bits: int) -> "NumericValue":
        """
        Значение из сырых битов хранения.

        Биты приводятся к int64 и раскладываются по всему буферу;
        кодировка читает только свои младшие байты.
        """
        data = (bits & ((1 << (NUMBER_BUFFER_SIZE * 8)) - 1)).to_bytes(
            NUMBER_BUFFER_SIZE, "little"
        )
        return cls(element_type=element_type, data=data)

    # ---------- Доступ ---------- #

    @property
    def byte_width(self) -> int:
        return byte_width(self.element_type)

    @property
    def payload(self) -> bytes:
        """Значимые байты буфера."""
        return self.data[: self.byte_width]


# =============================================================================
# OPERATION RANGE
# =============================================================================


class OperationRange(BaseModel):
    """
    Операция над полуинтервалом [begin, end) плоского списка значений.

    Immutable модель (frozen=True).
    """

    operation: NumericOperation = Field(..., description="Редукция")
    begin: int = Field(..., ge=0, description="Индекс первого операнда")
    end: int = Field(..., ge=0, description="Индекс после последнего операнда")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_bounds(self) -> "OperationRange":
        """Интервал не может быть отрицательной длины."""
        if self.end < self.begin:
            raise ValueError(f"range end {self.end} precedes begin {self.begin}")
        return self

    @property
    def count(self) -> int:
        """Количество операндов интервала."""
        return self.end - self.begin

    def select(self, values: list[NumericValue]) -> list[NumericValue]:
        """Операнды интервала из плоского списка."""
        return values[self.begin : self.end]
