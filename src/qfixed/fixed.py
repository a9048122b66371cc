"""
Fixed — Вещественное число с фиксированной шириной и точностью

Значение формата (W, P) — ровно одно знаковое целое из W бит (bit pattern).
Вещественное значение равно bits / 2**P. Других состояний нет.

Выбор типа:
    Q = Fixed[32, 15]          # или fixed_type(32, 15)
    a = Q(15, 5)               # 15.5
    b = Q(15) + Q(1) / Q(2)    # 15.5

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. bits всегда в диапазоне знакового W-битного целого (wraparound)
2. Переполнение не проверяется и не сообщается
3. Умножение и деление идут через аккумулятор следующей ширины;
   для W = 64 расширения нет, переполнение при умножении вероятно
4. Деление на ноль — ZeroDivisionError хоста, не перехватывается
5. Q(i, d): дробь d всегда ПРИБАВЛЯЕТСЯ. Q(-1, 5) == -0.5, а не -1.5

СМЕШАННАЯ АРИФМЕТИКА С int:
- q += n, q -= n: n прибавляется к bits БЕЗ сдвига (n уже в масштабе bits)
- q *= n, q /= n: bits умножаются / делятся на n (безразмерный множитель)
- n + q, n * q: коммутативно, то же что q + n, q * n
- n - q, n / q: n сначала становится Q(n) (со сдвигом), затем операция
- Сравнения с n: n сдвигается на P в расширенной ширине
"""

import logging
import numbers
import operator
from fractions import Fraction
from functools import lru_cache
from typing import Any, ClassVar

from pydantic import ValidationError

from qfixed.decimal_fraction import DecimalFractionEncoder, decimal_fraction_encoder
from qfixed.errors import FixedFormatError
from qfixed.format import FixedFormat
from qfixed.int_info import IntType, int_info, signed_of, trunc_div

logger = logging.getLogger(__name__)


# =============================================================================
# FIXED
# =============================================================================


class Fixed:
    """
    Fixed-point значение формата (width, precision).

    Базовый класс не параметризован; конкретный тип получается через
    Fixed[W, P] и кэшируется, поэтому Fixed[32, 15] is Fixed[32, 15].

    Составные операторы (+=, -=, *=, /=) изменяют значение на месте;
    бинарные операторы возвращают новое значение. Из-за изменяемости
    экземпляры не хэшируются.
    """

    __slots__ = ("bits",)

    width: ClassVar[int] = 0
    precision: ClassVar[int] = 0
    format: ClassVar[FixedFormat | None] = None
    int_type: ClassVar[IntType]  # Хранилище: знаковое W бит
    wide_type: ClassVar[IntType]  # Аккумулятор: знаковое wider(W) бит
    encoder: ClassVar[DecimalFractionEncoder]

    bits: int

    def __class_getitem__(cls, params: tuple[int, int]) -> type["Fixed"]:
        if cls.format is not None:
            raise TypeError(f"{cls.__name__} is already parameterised")
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError(f"Fixed[...] expects (width, precision), got {params!r}")
        return fixed_type(*params)

    def __init__(self, i: int = 0, d: int | None = None) -> None:
        """
        Создание значения.

        Args:
            i: Целая часть; без d — целое для upscale (bits = i << P)
            d: Десятичные цифры дробной части (5 == 50 == 500 == .5).
               Прибавляются к целой части независимо от её знака.

        При P < 4 десятичного запаса нет (L < 0), и d не добавляет ни одного
        бита: Fixed[8, 3](0, 5).bits == 0, хотя .5 представимо. Для таких
        форматов дробь задаётся через from_bits или делением.

        Raises:
            TypeError: Если тип не параметризован или аргументы не int (или bool)
            NegativeFractionError: Если d < 0
        """
        cls = type(self)
        if cls.format is None:
            raise TypeError("Fixed must be parameterised, e.g. Fixed[32, 15]")

        if isinstance(i, bool) or isinstance(d, bool):
            raise TypeError(f"{cls.__name__} arguments must be integers, not bool")

        bits = operator.index(i) << cls.precision
        if d is not None:
            bits += cls.encoder.encode(operator.index(d))
        self.bits = cls.int_type.wrap(bits)

    @classmethod
    def from_bits(cls, bits: int) -> "Fixed":
        """Значение с заданным битовым шаблоном (редуцируется к W бит)."""
        if cls.format is None:
            raise TypeError("Fixed must be parameterised, e.g. Fixed[32, 15]")
        value = cls.__new__(cls)
        value.bits = cls.int_type.wrap(operator.index(bits))
        return value

    # -------------------------------------------------------------------------
    # Копирование
    # -------------------------------------------------------------------------

    def copy(self) -> "Fixed":
        return type(self).from_bits(self.bits)

    def __copy__(self) -> "Fixed":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Fixed":
        return self.copy()

    def __reduce__(self) -> tuple:
        return (_restore_fixed, (self.width, self.precision, self.bits))

    # -------------------------------------------------------------------------
    # Преобразования
    # -------------------------------------------------------------------------

    def __int__(self) -> int:
        """Арифметический сдвиг вправо: округление к -inf, не к нулю."""
        return self.bits >> self.precision

    def __float__(self) -> float:
        return self.bits / (1 << self.precision)

    def __bool__(self) -> bool:
        return self.bits != 0

    def as_fraction(self) -> Fraction:
        """Точное рациональное значение bits / 2**P."""
        return Fraction(self.bits, 1 << self.precision)

    def __str__(self) -> str:
        # Точная десятичная запись: frac / 2**P == frac * 5**P / 10**P
        precision = self.precision
        magnitude = abs(self.bits)
        whole = magnitude >> precision
        frac = magnitude & ((1 << precision) - 1)
        sign = "-" if self.bits < 0 else ""

        if frac == 0:
            return f"{sign}{whole}"

        digits = str(frac * 5**precision).rjust(precision, "0").rstrip("0")
        return f"{sign}{whole}.{digits}"

    def __repr__(self) -> str:
        return f"Fixed[{self.width}, {self.precision}]({self}, bits={self.bits})"

    # -------------------------------------------------------------------------
    # Операнды
    # -------------------------------------------------------------------------

    def _same_format(self, other: Any) -> bool:
        return (
            isinstance(other, Fixed)
            and other.width == self.width
            and other.precision == self.precision
        )

    def _integral(self, other: Any) -> int | None:
        """Целый операнд, редуцированный к W бит; None если операнд не целый."""
        if isinstance(other, bool) or not isinstance(other, numbers.Integral):
            return None
        return self.int_type.wrap(int(other))

    # -------------------------------------------------------------------------
    # Составная арифметика
    # -------------------------------------------------------------------------

    def __iadd__(self, other: Any) -> "Fixed":
        if self._same_format(other):
            self.bits = self.int_type.wrap(self.bits + other.bits)
            return self

        r = self._integral(other)
        if r is None:
            return NotImplemented
        self.bits = self.int_type.wrap(self.bits + r)
        return self

    def __isub__(self, other: Any) -> "Fixed":
        if self._same_format(other):
            self.bits = self.int_type.wrap(self.bits - other.bits)
            return self

        r = self._integral(other)
        if r is None:
            return NotImplemented
        self.bits = self.int_type.wrap(self.bits - r)
        return self

    def __imul__(self, other: Any) -> "Fixed":
        if self._same_format(other):
            product = self.wide_type.wrap(self.bits * other.bits)
            self.bits = self.int_type.wrap(product >> self.precision)
            return self

        r = self._integral(other)
        if r is None:
            return NotImplemented
        self.bits = self.int_type.wrap(self.bits * r)
        return self

    def __itruediv__(self, other: Any) -> "Fixed":
        if self._same_format(other):
            numerator = self.wide_type.wrap(self.bits << self.precision)
            self.bits = self.int_type.wrap(trunc_div(numerator, other.bits))
            return self

        r = self._integral(other)
        if r is None:
            return NotImplemented
        self.bits = self.int_type.wrap(trunc_div(self.bits, r))
        return self

    # -------------------------------------------------------------------------
    # Бинарная арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "Fixed":
        return self.copy().__iadd__(other)

    def __radd__(self, other: Any) -> "Fixed":
        return self.copy().__iadd__(other)

    def __sub__(self, other: Any) -> "Fixed":
        return self.copy().__isub__(other)

    def __rsub__(self, other: Any) -> "Fixed":
        r = self._integral(other)
        if r is None:
            return NotImplemented
        return type(self)(r).__isub__(self)

    def __mul__(self, other: Any) -> "Fixed":
        return self.copy().__imul__(other)

    def __rmul__(self, other: Any) -> "Fixed":
        return self.copy().__imul__(other)

    def __truediv__(self, other: Any) -> "Fixed":
        return self.copy().__itruediv__(other)

    def __rtruediv__(self, other: Any) -> "Fixed":
        r = self._integral(other)
        if r is None:
            return NotImplemented
        return type(self)(r).__itruediv__(self)

    def __neg__(self) -> "Fixed":
        return type(self).from_bits(-self.bits)

    def __pos__(self) -> "Fixed":
        return self.copy()

    def __abs__(self) -> "Fixed":
        return type(self).from_bits(abs(self.bits))

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def _compare_bits(self, other: Any) -> int | None:
        """Битовый шаблон операнда в масштабе self; None если несравнимы."""
        if isinstance(other, Fixed):
            return other.bits if self._same_format(other) else None

        r = self._integral(other)
        if r is None:
            return None
        return self.wide_type.wrap(r << self.precision)

    def __eq__(self, other: Any) -> bool:
        key = self._compare_bits(other)
        if key is None:
            return NotImplemented
        return self.bits == key

    def __ne__(self, other: Any) -> bool:
        key = self._compare_bits(other)
        if key is None:
            return NotImplemented
        return self.bits != key

    def __lt__(self, other: Any) -> bool:
        key = self._compare_bits(other)
        if key is None:
            return NotImplemented
        return self.bits < key

    def __gt__(self, other: Any) -> bool:
        key = self._compare_bits(other)
        if key is None:
            return NotImplemented
        return self.bits > key

    def __le__(self, other: Any) -> bool:
        key = self._compare_bits(other)
        if key is None:
            return NotImplemented
        return self.bits <= key

    def __ge__(self, other: Any) -> bool:
        key = self._compare_bits(other)
        if key is None:
            return NotImplemented
        return self.bits >= key

    __hash__ = None  # type: ignore[assignment]


# =============================================================================
# ФАБРИКА ТИПОВ
# =============================================================================


def fixed_type(width: int, precision: int) -> type[Fixed]:
    """
    Тип fixed-point значения формата (width, precision).

    Формат проверяется здесь, до создания любого значения.

    Args:
        width: Общая ширина (8, 16, 32, 64)
        precision: Число дробных бит, 0 <= precision < width

    Returns:
        Кэшированный подкласс Fixed

    Raises:
        UnsupportedWidthError: Если width не поддерживается
        FixedFormatError: Если precision вне [0, width)

    Examples:
        >>> Q = fixed_type(32, 15)
        >>> Q is Fixed[32, 15]
        True
        >>> int(Q(15, 5))
        15
    """
    int_info(width)

    try:
        fmt = FixedFormat(width=width, precision=precision)
    except ValidationError as e:
        raise FixedFormatError(
            f"Invalid fixed-point format (width={width!r}, precision={precision!r}): {e}"
        ) from e

    return _create_fixed_type(fmt.width, fmt.precision)


@lru_cache(maxsize=None)
def _create_fixed_type(width: int, precision: int) -> type[Fixed]:
    fmt = FixedFormat(width=width, precision=precision)
    info = int_info(width)

    cls = type(
        f"Fixed{width}_{precision}",
        (Fixed,),
        {
            "__slots__": (),
            "__module__": __name__,
            "width": width,
            "precision": precision,
            "format": fmt,
            "int_type": info.int_t,
            "wide_type": signed_of(info.next),
            "encoder": decimal_fraction_encoder(width, precision),
        },
    )

    logger.debug(
        "created fixed-point type %s (%s storage, %s accumulator)",
        fmt.signature,
        cls.int_type.name,
        cls.wide_type.name,
    )
    return cls


def _restore_fixed(width: int, precision: int, bits: int) -> Fixed:
    return fixed_type(width, precision).from_bits(bits)
