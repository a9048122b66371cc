"""
IntInfo — Таблица целочисленных представлений по ширине

Закрытая таблица поддерживаемых ширин (8, 16, 32, 64 бит). Для каждой ширины:
- знаковое представление ровно W бит
- беззнаковое представление ровно W бит
- ссылки на соседние ширины (prev / next)

Используется для выбора хранилища значения и аккумулятора двойной ширины
при умножении и делении.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ширина вне SUPPORTED_WIDTHS → UnsupportedWidthError сразу при запросе
2. wider(64) == 64, narrower(8) == 8 (расширения за 64 бита нет)
3. wrap() всегда возвращает значение в диапазоне [min, max] представления
"""

from dataclasses import dataclass
from typing import Final

from qfixed.errors import UnsupportedWidthError

# =============================================================================
# ПОДДЕРЖИВАЕМЫЕ ШИРИНЫ
# =============================================================================

SUPPORTED_WIDTHS: Final[tuple[int, ...]] = (8, 16, 32, 64)

MIN_WIDTH: Final[int] = SUPPORTED_WIDTHS[0]

MAX_WIDTH: Final[int] = SUPPORTED_WIDTHS[-1]


# =============================================================================
# ЦЕЛОЧИСЛЕННОЕ ПРЕДСТАВЛЕНИЕ
# =============================================================================


@dataclass(frozen=True)
class IntType:
    """
    Целое фиксированной ширины (аналог int8_t ... uint64_t).

    Python int не ограничен по размеру, поэтому ширина моделируется
    явной редукцией wrap() после каждой операции.
    """

    bits: int
    signed: bool

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else self.mask

    @property
    def name(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"

    def wrap(self, value: int) -> int:
        """
        Редукция значения к ширине представления (wraparound).

        Знаковые: two's-complement, беззнаковые: по модулю 2**bits.

        Examples:
            >>> IntType(8, True).wrap(128)
            -128
            >>> IntType(8, False).wrap(-1)
            255
        """
        value &= self.mask
        if self.signed and value > self.max:
            value -= 1 << self.bits
        return value

    def contains(self, value: int) -> bool:
        """Проверка, помещается ли value в представление без wraparound."""
        return self.min <= value <= self.max


@dataclass(frozen=True)
class IntInfo:
    """Сведения о ширине: представления и соседние ширины."""

    bits: int
    int_t: IntType  # Знаковое представление
    uint_t: IntType  # Беззнаковое представление
    prev: int  # Предыдущая (меньшая) ширина; для 8 сама себя
    next: int  # Следующая (большая) ширина; для 64 сама себя


def _build_table() -> dict[int, IntInfo]:
    table = {}
    for index, bits in enumerate(SUPPORTED_WIDTHS):
        table[bits] = IntInfo(
            bits=bits,
            int_t=IntType(bits, signed=True),
            uint_t=IntType(bits, signed=False),
            prev=SUPPORTED_WIDTHS[max(index - 1, 0)],
            next=SUPPORTED_WIDTHS[min(index + 1, len(SUPPORTED_WIDTHS) - 1)],
        )
    return table


_INT_INFO: Final[dict[int, IntInfo]] = _build_table()


# =============================================================================
# ДОСТУП К ТАБЛИЦЕ
# =============================================================================


def int_info(bits: int) -> IntInfo:
    """
    Сведения о ширине bits.

    Raises:
        UnsupportedWidthError: Если bits не входит в SUPPORTED_WIDTHS
    """
    # bool это подкласс int, но шириной не является
    if not isinstance(bits, int) or isinstance(bits, bool) or bits not in _INT_INFO:
        raise UnsupportedWidthError(
            f"Unsupported width {bits!r}, expected one of {SUPPORTED_WIDTHS}"
        )
    return _INT_INFO[bits]


def signed_of(bits: int) -> IntType:
    """Знаковое представление ровно bits бит."""
    return int_info(bits).int_t


def unsigned_of(bits: int) -> IntType:
    """Беззнаковое представление ровно bits бит."""
    return int_info(bits).uint_t


def wider(bits: int) -> int:
    """
    Следующая большая ширина.

    Examples:
        >>> wider(32)
        64
        >>> wider(64)  # расширения нет
        64
    """
    return int_info(bits).next


def narrower(bits: int) -> int:
    """
    Следующая меньшая ширина.

    Examples:
        >>> narrower(16)
        8
        >>> narrower(8)
        8
    """
    return int_info(bits).prev


# =============================================================================
# ЦЕЛОЧИСЛЕННЫЕ ПРИМИТИВЫ
# =============================================================================


def wrap_signed(value: int, bits: int) -> int:
    """Редукция value к знаковому представлению bits бит."""
    return signed_of(bits).wrap(value)


def wrap_unsigned(value: int, bits: int) -> int:
    """Редукция value к беззнаковому представлению bits бит."""
    return unsigned_of(bits).wrap(value)


def trunc_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с округлением к нулю.

    Оператор // в Python округляет к -inf; целочисленное деление
    фиксированной ширины округляет к нулю.

    Raises:
        ZeroDivisionError: Если denominator == 0 (не перехватывается)

    Examples:
        >>> trunc_div(7, 2)
        3
        >>> trunc_div(-7, 2)
        -3
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient
