"""
qfixed — fixed-point числа с фиксированной шириной и точностью

Знаковое целое W бит (8, 16, 32, 64) хранит и целую, и дробную часть;
P младших бит — дробь. Детерминированная арифметика без float,
переполнение — wraparound ширины W.
"""

# Таблица ширин
from qfixed.int_info import (
    MAX_WIDTH,
    MIN_WIDTH,
    SUPPORTED_WIDTHS,
    IntInfo,
    IntType,
    int_info,
    narrower,
    signed_of,
    trunc_div,
    unsigned_of,
    wider,
    wrap_signed,
    wrap_unsigned,
)

# Формат
from qfixed.format import FixedFormat

# Десятичная дробь
from qfixed.decimal_fraction import (
    DecimalFractionEncoder,
    decimal_fraction_encoder,
    decimal_log10,
)

# Значение
from qfixed.fixed import Fixed, fixed_type

# Исключения
from qfixed.errors import (
    FixedFormatError,
    FixedPointError,
    NegativeFractionError,
    UnsupportedWidthError,
)

__all__ = [
    # Таблица ширин: Constants
    "MAX_WIDTH",
    "MIN_WIDTH",
    "SUPPORTED_WIDTHS",
    # Таблица ширин: Types
    "IntInfo",
    "IntType",
    # Таблица ширин: Functions
    "int_info",
    "narrower",
    "signed_of",
    "trunc_div",
    "unsigned_of",
    "wider",
    "wrap_signed",
    "wrap_unsigned",
    # Формат
    "FixedFormat",
    # Десятичная дробь
    "DecimalFractionEncoder",
    "decimal_fraction_encoder",
    "decimal_log10",
    # Значение
    "Fixed",
    "fixed_type",
    # Исключения
    "FixedFormatError",
    "FixedPointError",
    "NegativeFractionError",
    "UnsupportedWidthError",
]
