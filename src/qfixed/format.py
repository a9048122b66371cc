"""
FixedFormat — Конфигурация формата fixed-point

Immutable Pydantic модель выбора формата: общая ширина W и число дробных
бит P. Формат фиксируется в момент выбора типа и не меняется.

Валидация:
- width ∈ SUPPORTED_WIDTHS (8, 16, 32, 64)
- 0 <= precision < width
"""

import re
from fractions import Fraction

from pydantic import BaseModel, Field, field_validator, model_validator

from qfixed.int_info import SUPPORTED_WIDTHS

# Q32.15 / 32.15 / 32,15
_SIGNATURE_RE = re.compile(r"^\s*[Qq]?\s*(\d+)\s*[.,]\s*(\d+)\s*$")


class FixedFormat(BaseModel):
    """
    Формат fixed-point значения (Q-формат).

    Битовый шаблон — знаковое целое ширины width; вещественное значение
    равно bits / 2**precision.
    """

    width: int = Field(..., description="Общая ширина битового шаблона (бит)")
    precision: int = Field(..., ge=0, description="Число бит дробной части")

    model_config = {"frozen": True, "strict": True}

    @field_validator("width")
    @classmethod
    def validate_width(cls, v: int) -> int:
        """Ширина из закрытой таблицы."""
        if v not in SUPPORTED_WIDTHS:
            raise ValueError(
                f"width must be one of {SUPPORTED_WIDTHS}, got {v}"
            )
        return v

    @model_validator(mode="after")
    def validate_precision_fits(self) -> "FixedFormat":
        """Хотя бы один бит остаётся под знак."""
        if self.precision >= self.width:
            raise ValueError(
                f"precision must be < width ({self.width}), got {self.precision}"
            )
        return self

    @classmethod
    def parse(cls, signature: str) -> "FixedFormat":
        """
        Разбор текстовой сигнатуры формата.

        Examples:
            >>> FixedFormat.parse("Q32.15")
            FixedFormat(width=32, precision=15)
            >>> FixedFormat.parse("16,8").signature
            'Q16.8'

        Raises:
            ValueError: Если сигнатура не распознана
            ValidationError: Если формат невалиден
        """
        match = _SIGNATURE_RE.match(signature)
        if match is None:
            raise ValueError(f"Unrecognised fixed-point format signature: {signature!r}")
        return cls(width=int(match.group(1)), precision=int(match.group(2)))

    # -------------------------------------------------------------------------
    # Производные величины
    # -------------------------------------------------------------------------

    @property
    def integer_bits(self) -> int:
        """Число бит целой части, включая знаковый."""
        return self.width - self.precision

    @property
    def resolution(self) -> Fraction:
        """Вес младшего бита: 2**-precision."""
        return Fraction(1, 1 << self.precision)

    @property
    def min_value(self) -> Fraction:
        return Fraction(-(1 << (self.width - 1)), 1 << self.precision)

    @property
    def max_value(self) -> Fraction:
        return Fraction((1 << (self.width - 1)) - 1, 1 << self.precision)

    @property
    def signature(self) -> str:
        return f"Q{self.width}.{self.precision}"

    def __str__(self) -> str:
        return self.signature
