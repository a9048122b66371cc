"""
Тесты для FixedFormat — конфигурация формата

Проверяет:
1. Валидацию ширины и точности
2. Производные величины (resolution, min/max, signature)
3. Разбор текстовой сигнатуры
4. Immutability (frozen=True)
"""

from fractions import Fraction

import pytest
from pydantic import ValidationError

from qfixed.format import FixedFormat


class TestFixedFormatValidation:
    """Тесты валидации FixedFormat"""

    @pytest.mark.parametrize(
        "width, precision", [(8, 0), (8, 7), (16, 8), (32, 15), (64, 63)]
    )
    def test_valid_formats(self, width: int, precision: int) -> None:
        """Допустимые форматы создаются"""
        fmt = FixedFormat(width=width, precision=precision)
        assert fmt.width == width
        assert fmt.precision == precision

    @pytest.mark.parametrize("width", [0, 7, 12, 24, 128])
    def test_unsupported_width(self, width: int) -> None:
        """Ширина вне таблицы отвергается"""
        with pytest.raises(ValidationError, match="width must be one of"):
            FixedFormat(width=width, precision=0)

    def test_precision_not_below_width(self) -> None:
        """precision >= width отвергается"""
        with pytest.raises(ValidationError, match="precision must be < width"):
            FixedFormat(width=32, precision=32)
        with pytest.raises(ValidationError, match="precision must be < width"):
            FixedFormat(width=8, precision=10)

    def test_negative_precision(self) -> None:
        """Отрицательная точность отвергается"""
        with pytest.raises(ValidationError):
            FixedFormat(width=32, precision=-1)

    def test_strict_types(self) -> None:
        """Строки и bool не приводятся к int"""
        with pytest.raises(ValidationError):
            FixedFormat(width="32", precision=15)  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            FixedFormat(width=32, precision=True)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        """FixedFormat immutable (frozen=True)"""
        fmt = FixedFormat(width=32, precision=15)
        with pytest.raises(ValidationError):
            fmt.precision = 8  # type: ignore[misc]

    def test_equality_and_hash(self) -> None:
        """Одинаковые форматы равны и хэшируются одинаково"""
        a = FixedFormat(width=16, precision=8)
        b = FixedFormat(width=16, precision=8)
        assert a == b
        assert hash(a) == hash(b)
        assert a != FixedFormat(width=16, precision=7)


class TestFixedFormatDerived:
    """Тесты производных величин"""

    def test_q32_15(self) -> None:
        """Q32.15: 17 целых бит (со знаком), шаг 2**-15"""
        fmt = FixedFormat(width=32, precision=15)
        assert fmt.integer_bits == 17
        assert fmt.resolution == Fraction(1, 32768)
        assert fmt.min_value == -65536
        assert fmt.max_value == Fraction(2**31 - 1, 2**15)
        assert fmt.signature == "Q32.15"
        assert str(fmt) == "Q32.15"

    def test_q8_0(self) -> None:
        """Без дробных бит формат — обычное int8"""
        fmt = FixedFormat(width=8, precision=0)
        assert fmt.resolution == 1
        assert fmt.min_value == -128
        assert fmt.max_value == 127

    def test_q8_7(self) -> None:
        """Максимальная точность: только знаковый бит в целой части"""
        fmt = FixedFormat(width=8, precision=7)
        assert fmt.integer_bits == 1
        assert fmt.min_value == -1
        assert fmt.max_value == Fraction(127, 128)


class TestFixedFormatParse:
    """Тесты FixedFormat.parse"""

    @pytest.mark.parametrize(
        "signature, expected",
        [
            ("Q32.15", (32, 15)),
            ("q16.8", (16, 8)),
            ("32.15", (32, 15)),
            ("64,32", (64, 32)),
            ("  Q8.4 ", (8, 4)),
        ],
    )
    def test_parse(self, signature: str, expected: tuple[int, int]) -> None:
        """Распознаются Q-нотация и пары через точку / запятую"""
        fmt = FixedFormat.parse(signature)
        assert (fmt.width, fmt.precision) == expected

    @pytest.mark.parametrize("signature", ["", "Q32", "32/15", "Qx.y", "Q-8.4"])
    def test_parse_unrecognised(self, signature: str) -> None:
        """Нераспознанная сигнатура → ValueError"""
        with pytest.raises(ValueError, match="Unrecognised"):
            FixedFormat.parse(signature)

    def test_parse_invalid_format(self) -> None:
        """Распознанная, но невалидная сигнатура → ValidationError"""
        with pytest.raises(ValidationError):
            FixedFormat.parse("Q12.4")
        with pytest.raises(ValidationError):
            FixedFormat.parse("Q16.16")
