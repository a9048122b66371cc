"""
Errors — иерархия исключений qfixed

Исключения возникают только на границе выбора формата и при явно
невалидных входных данных. Арифметика исключений не порождает:
переполнение — wraparound, деление на ноль — ZeroDivisionError хоста.
"""


class FixedPointError(Exception):
    """Базовое исключение пакета qfixed."""
    pass


class FixedFormatError(FixedPointError, ValueError):
    """
    Невалидный формат (width, precision).

    Возникает при выборе типа, до создания любого значения.
    """
    pass


class UnsupportedWidthError(FixedFormatError):
    """Ширина не входит в SUPPORTED_WIDTHS (8, 16, 32, 64)."""
    pass


class NegativeFractionError(FixedPointError, ValueError):
    """Десятичные цифры дробной части заданы отрицательным числом."""
    pass
