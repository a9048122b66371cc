"""
Decimal Fraction — Кодирование десятичной дроби в двоичную

Преобразует неотрицательное целое d, записанное как десятичные цифры дробной
части ("5" означает .5, "50" означает .50), в числитель двоичной дроби
ровно из P бит. Результат не зависит от числа цифр: 5, 50, 500 дают одно и
то же значение.

АЛГОРИТМ:
    MAX_FRAC = 2**P - 1
    L        = floor(log10(MAX_FRAC)) - 1   (запас десятичных цифр минус одна)
    k        = floor(log10(d))
    k > L  →  d //= 10**(k - L)             (отбрасываем младшие цифры)
    k < L  →  d *= 10**(L - k)              (дополняем нулями справа)
    BASE10   = 10**(L + 1)                  (знаменатель нормализованных L+1 цифр)
    SCALE    = (MAX_FRAC + 1) / BASE10      (точная рациональная дробь)
    frac     = floor(d * SCALE)             (всегда < 2**P)

ГРАНИЧНЫЕ СЛУЧАИ:
1. d == 0 → 0, log10(0) не вычисляется
2. P == 0 (нет дробных бит) и P < 4 (L < 0, нет десятичного запаса) → 0
3. Слишком длинное d теряет младшие цифры молча (не ошибка)
4. d < 0 → NegativeFractionError
"""

import logging
from dataclasses import dataclass
from fractions import Fraction
from functools import lru_cache

from qfixed.errors import NegativeFractionError
from qfixed.format import FixedFormat

logger = logging.getLogger(__name__)


# =============================================================================
# ДЕСЯТИЧНЫЕ ПРИМИТИВЫ
# =============================================================================


def decimal_log10(x: int) -> int:
    """
    Целый десятичный логарифм: число цифр x минус один.

    Считается без float и без str(): оценка снизу по bit_length и уточнение
    сравнением со степенями 10. Точен для x любой длины (str() отказывает
    после 4300 цифр).

    Raises:
        ValueError: Если x <= 0

    Examples:
        >>> decimal_log10(9)
        0
        >>> decimal_log10(32767)
        4
    """
    if x <= 0:
        raise ValueError(f"decimal_log10 is defined for positive integers, got {x}")

    # 0.30102 < log10(2), поэтому k не превышает ответ
    k = (x.bit_length() - 1) * 30102 // 100000
    while pow10(k + 1) <= x:
        k += 1
    return k


def pow10(n: int) -> int:
    """10**n для n >= 0."""
    return 10**n


# =============================================================================
# ENCODER
# =============================================================================


@dataclass(frozen=True)
class DecimalFractionEncoder:
    """
    Кодировщик десятичных цифр дробной части для формата (width, precision).

    Все константы вычисляются один раз при создании.
    """

    width: int
    precision: int
    max_frac: int  # Наибольший числитель двоичной дроби: 2**P - 1
    max_frac_log10: int  # L: десятичный запас; < 0 если запаса нет
    base10: int  # Знаменатель нормализованного десятичного числителя
    scale: Fraction  # Коэффициент перевода десятичного числителя в двоичный

    @classmethod
    def for_format(cls, fmt: FixedFormat) -> "DecimalFractionEncoder":
        max_frac = (1 << fmt.precision) - 1

        if max_frac > 0:
            max_frac_log10 = decimal_log10(max_frac) - 1
        else:
            max_frac_log10 = -1

        base10 = pow10(max(max_frac_log10 + 1, 0))

        return cls(
            width=fmt.width,
            precision=fmt.precision,
            max_frac=max_frac,
            max_frac_log10=max_frac_log10,
            base10=base10,
            scale=Fraction(max_frac + 1, base10),
        )

    @property
    def digits(self) -> int:
        """Сколько десятичных цифр дробной части различимо (0 если ни одной)."""
        return max(self.max_frac_log10 + 1, 0)

    def normalize(self, d: int) -> int:
        """
        Приведение d ровно к L+1 десятичным цифрам.

        Args:
            d: Цифры дробной части (d > 0)

        Returns:
            Нормализованный десятичный числитель (знаменатель base10)
        """
        log10 = decimal_log10(d)

        if log10 > self.max_frac_log10:
            return d // pow10(log10 - self.max_frac_log10)
        if log10 < self.max_frac_log10:
            return d * pow10(self.max_frac_log10 - log10)
        return d

    def encode(self, d: int) -> int:
        """
        Числитель двоичной дроби для десятичных цифр d.

        Args:
            d: Цифры дробной части в base 10 (например 5 для .5)

        Returns:
            Значение в диапазоне [0, 2**precision)

        Raises:
            NegativeFractionError: Если d < 0

        Examples:
            >>> enc = decimal_fraction_encoder(32, 15)
            >>> enc.encode(5) == enc.encode(50) == 1 << 14
            True
            >>> enc.encode(0)
            0
        """
        if d < 0:
            raise NegativeFractionError(
                f"Fraction digits must be non-negative, got {d}"
            )

        if d == 0 or self.max_frac_log10 < 0:
            return 0

        return int(self.normalize(d) * self.scale)


@lru_cache(maxsize=None)
def decimal_fraction_encoder(width: int, precision: int) -> DecimalFractionEncoder:
    """
    Кэшированный кодировщик для формата (width, precision).

    Raises:
        ValidationError: Если формат невалиден
    """
    encoder = DecimalFractionEncoder.for_format(
        FixedFormat(width=width, precision=precision)
    )
    logger.debug(
        "decimal fraction encoder Q%d.%d: max_frac=%d headroom=%d base10=%d",
        width,
        precision,
        encoder.max_frac,
        encoder.max_frac_log10,
        encoder.base10,
    )
    return encoder
