"""
Тесты для BigDecimal

Проверяет:
1. Разбор десятичных строк (точка, экспонента) и plain-рендеринг
2. Сложение / вычитание / умножение со сохранением scale
3. Деление с явным scale и точное деление
4. set_scale, strip_trailing_zeros, to_big_integer, целая и дробная части
5. Числовое сравнение против строгого равенства представления
6. power, sqrt, операторы, неизменяемость

Каждый тест выполняется на всех доступных backend-ах (fixture calculator).
"""

import pickle

import pytest

from src.bigmath import (
    ArgumentError,
    BigDecimal,
    BigInteger,
    DivisionByZero,
    InvalidExponent,
    NumberFormatError,
    RoundingMode,
    RoundingNecessary,
)

pytestmark = pytest.mark.usefixtures("calculator")


def _identical(value: BigDecimal, text: str) -> bool:
    return value.is_identical(BigDecimal(text))


# =============================================================================
# PARSING / RENDERING
# =============================================================================


class TestParsing:
    """Тесты разбора и рендеринга"""

    @pytest.mark.parametrize(
        "text,unscaled,scale,rendered",
        [
            ("1.5", 15, 1, "1.5"),
            ("-0.050", -50, 3, "-0.050"),
            ("1e3", 1000, 0, "1000"),
            ("1.2e-3", 12, 4, "0.0012"),
            ("1.23E+1", 123, 1, "12.3"),
            (".5", 5, 1, "0.5"),
            ("5.", 5, 0, "5"),
            ("+2", 2, 0, "2"),
            ("-0", 0, 0, "0"),
            ("-0.00", 0, 2, "0.00"),
            ("007.10", 710, 2, "7.10"),
        ],
    )
    def test_parse(self, text, unscaled, scale, rendered) -> None:
        value = BigDecimal(text)
        assert value.unscaled_value == unscaled
        assert value.scale == scale
        assert str(value) == rendered

    @pytest.mark.parametrize(
        "text",
        ["", ".", "-", "+.", "1.2.3", "1e", "e5", " 1", "1 ", "abc", "1,5", "0x10", "1e+", "\u0661"],
    )
    def test_invalid_format(self, text) -> None:
        with pytest.raises(NumberFormatError):
            BigDecimal(text)

    @pytest.mark.parametrize("sign", ["", "+", "-"])
    def test_oversized_exponent(self, sign) -> None:
        """Экспонента длиннее лимита int <-> str"""
        with pytest.raises(NumberFormatError):
            BigDecimal("1e" + sign + "7" * 5000)

    def test_from_integers(self) -> None:
        assert _identical(BigDecimal(42), "42")
        assert _identical(BigDecimal(BigInteger(-3)), "-3")
        assert BigDecimal.of(BigDecimal("1.50")).scale == 2

    def test_float_rejected(self) -> None:
        """float неточен и не принимается"""
        with pytest.raises(TypeError):
            BigDecimal(0.1)

    def test_of_unscaled_value(self) -> None:
        assert str(BigDecimal.of_unscaled_value(123, 2)) == "1.23"
        assert str(BigDecimal.of_unscaled_value("-5", 3)) == "-0.005"
        assert str(BigDecimal.of_unscaled_value(BigInteger(7))) == "7"

    def test_of_unscaled_value_negative_scale(self) -> None:
        with pytest.raises(ArgumentError):
            BigDecimal.of_unscaled_value(1, -1)

    @pytest.mark.parametrize(
        "text",
        ["0", "0.00", "-1.50", "123456789012345678901234567890.000000001", "-0.0000001"],
    )
    def test_render_roundtrip(self, text) -> None:
        assert str(BigDecimal(text)) == text

    def test_factories(self) -> None:
        assert _identical(BigDecimal.zero(), "0")
        assert _identical(BigDecimal.one(), "1")
        assert _identical(BigDecimal.ten(), "10")

    def test_precision(self) -> None:
        assert BigDecimal("123.45").precision() == 5
        assert BigDecimal("0.001").precision() == 1
        assert BigDecimal("0").precision() == 1


# =============================================================================
# ADD / SUBTRACT / MULTIPLY
# =============================================================================


class TestArithmetic:
    """Тесты арифметики со scale"""

    def test_add_uses_max_scale(self) -> None:
        """1.5 + 2.25 = 3.75 со scale 2"""
        result = BigDecimal("1.5").add(BigDecimal("2.25"))
        assert result == BigDecimal("3.75")
        assert result.scale == 2
        assert str(result) == "3.75"

    def test_subtract(self) -> None:
        assert _identical(BigDecimal("1.5").subtract("2.25"), "-0.75")
        assert _identical(BigDecimal("10").subtract("0.001"), "9.999")

    def test_multiply_sums_scales(self) -> None:
        assert _identical(BigDecimal("1.5").multiply("2.25"), "3.375")
        assert _identical(BigDecimal("-0.1").multiply("0.1"), "-0.01")
        assert _identical(BigDecimal("2.00").multiply("0"), "0.00")

    def test_power(self) -> None:
        assert _identical(BigDecimal("1.5").power(2), "2.25")
        assert _identical(BigDecimal("0.1").power(3), "0.001")
        assert _identical(BigDecimal("1.5").power(0), "1")

    def test_negative_exponent(self) -> None:
        with pytest.raises(InvalidExponent):
            BigDecimal("1.5").power(-1)

    def test_negate_abs(self) -> None:
        assert _identical(BigDecimal("1.50").negate(), "-1.50")
        assert _identical(BigDecimal("-1.50").abs(), "1.50")
        assert BigDecimal("-1.5").sign == -1


# =============================================================================
# DIVISION
# =============================================================================


class TestDivision:
    """Тесты деления"""

    def test_inexact_with_unnecessary(self) -> None:
        """1 / 3 в scale 4 без округления невозможно"""
        with pytest.raises(RoundingNecessary):
            BigDecimal("1").divide(BigDecimal("3"), scale=4, rounding_mode=RoundingMode.UNNECESSARY)

    @pytest.mark.parametrize(
        "a,b,scale,mode,expected",
        [
            ("1", "3", 4, RoundingMode.HALF_UP, "0.3333"),
            ("2", "3", 4, RoundingMode.HALF_UP, "0.6667"),
            ("-2", "3", 2, RoundingMode.FLOOR, "-0.67"),
            ("-2", "3", 2, RoundingMode.CEILING, "-0.66"),
            ("10", "4", 0, RoundingMode.HALF_EVEN, "2"),
            ("10", "4", 0, RoundingMode.HALF_UP, "3"),
            ("1", "8", 3, RoundingMode.UNNECESSARY, "0.125"),
            ("1.25", "0.5", 1, RoundingMode.UNNECESSARY, "2.5"),
            ("100", "0.001", 0, RoundingMode.UNNECESSARY, "100000"),
        ],
    )
    def test_divide_with_scale(self, a, b, scale, mode, expected) -> None:
        result = BigDecimal(a).divide(b, scale, mode)
        assert _identical(result, expected)

    def test_divide_default_scale_is_dividend_scale(self) -> None:
        """Только rounding_mode → scale делимого"""
        assert _identical(BigDecimal("1.00").divide("0.3", rounding_mode=RoundingMode.DOWN), "3.33")

    def test_divide_default_mode_is_unnecessary(self) -> None:
        """Только scale → UNNECESSARY"""
        assert _identical(BigDecimal("1").divide("4", scale=2), "0.25")
        with pytest.raises(RoundingNecessary):
            BigDecimal("1").divide("8", scale=2)

    def test_divide_without_arguments_is_exact(self) -> None:
        assert _identical(BigDecimal("1").divide("4"), "0.25")

    def test_divide_by_zero(self) -> None:
        with pytest.raises(DivisionByZero):
            BigDecimal("1").divide("0.00", 2, RoundingMode.HALF_UP)
        with pytest.raises(DivisionByZero):
            BigDecimal("1").exact_divide(0)
        with pytest.raises(DivisionByZero):
            BigDecimal("1") / 0

    def test_divide_negative_scale(self) -> None:
        with pytest.raises(ArgumentError):
            BigDecimal("1").divide("3", -1, RoundingMode.HALF_UP)

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("1", "4", "0.25"),
            ("6", "2", "3"),
            ("1.00", "2", "0.5"),
            ("0.00", "5", "0"),
            ("-1", "8", "-0.125"),
            ("1", "0.125", "8"),
            ("7", "-0.2", "-35"),
            ("1", "1024", "0.0009765625"),
            ("3", "0.3", "10"),
        ],
    )
    def test_exact_divide_minimal_scale(self, a, b, expected) -> None:
        """Частное с минимальным scale, представляющим его точно"""
        assert _identical(BigDecimal(a).exact_divide(b), expected)

    def test_exact_divide_wide_operands(self) -> None:
        """Сокращение дроби на gcd для операндов длиннее 28 цифр"""
        assert _identical(BigDecimal(str(2**100)).divide(BigDecimal(str(2**99))), "2")
        assert _identical(BigDecimal(str(2**100)) / BigDecimal(str(2**102)), "0.25")

    @pytest.mark.parametrize("a,b", [("1", "3"), ("2", "7"), ("1", "0.6"), ("10", "-12")])
    def test_exact_divide_non_terminating(self, a, b) -> None:
        with pytest.raises(RoundingNecessary):
            BigDecimal(a).exact_divide(b)


# =============================================================================
# SCALE
# =============================================================================


class TestScale:
    """Тесты управления scale"""

    def test_set_scale_rounding(self) -> None:
        """1.005 → scale 2: HALF_UP → 1.01, HALF_EVEN → 1.00"""
        assert str(BigDecimal("1.005").set_scale(2, RoundingMode.HALF_UP)) == "1.01"
        assert str(BigDecimal("1.005").set_scale(2, RoundingMode.HALF_EVEN)) == "1.00"

    def test_set_scale_increase_is_exact(self) -> None:
        assert _identical(BigDecimal("1.5").set_scale(3), "1.500")

    def test_set_scale_decrease(self) -> None:
        assert _identical(BigDecimal("1.500").set_scale(1), "1.5")
        assert _identical(BigDecimal("123.4567").set_scale(2, RoundingMode.HALF_UP), "123.46")
        assert _identical(BigDecimal("-123.455").set_scale(2, RoundingMode.HALF_EVEN), "-123.46")
        assert _identical(BigDecimal("-123.445").set_scale(2, RoundingMode.HALF_EVEN), "-123.44")

    def test_set_scale_unnecessary_inexact(self) -> None:
        with pytest.raises(RoundingNecessary):
            BigDecimal("1.25").set_scale(1)

    def test_set_scale_negative(self) -> None:
        with pytest.raises(ArgumentError):
            BigDecimal("1.25").set_scale(-1)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1.500", "1.5"),
            ("100", "100"),
            ("0.000", "0"),
            ("-2.000", "-2"),
            ("10.0", "10"),
            ("1.23", "1.23"),
        ],
    )
    def test_strip_trailing_zeros(self, text, expected) -> None:
        assert _identical(BigDecimal(text).strip_trailing_zeros(), expected)

    def test_to_big_integer(self) -> None:
        assert BigDecimal("12.00").to_big_integer() == 12
        assert BigDecimal("12.5").to_big_integer(RoundingMode.DOWN) == 12
        assert BigDecimal("-12.5").to_big_integer(RoundingMode.FLOOR) == -13
        assert BigDecimal("12.5").to_big_integer(RoundingMode.HALF_EVEN) == 12
        assert BigDecimal("-12.5").to_big_integer(RoundingMode.HALF_EVEN) == -12

    def test_to_big_integer_inexact(self) -> None:
        with pytest.raises(RoundingNecessary):
            BigDecimal("12.5").to_big_integer()

    def test_integral_and_fractional_parts(self) -> None:
        value = BigDecimal("-12.345")
        assert value.integral_part() == -12
        assert _identical(value.fractional_part(), "-0.345")
        assert value.integral_part() + value.fractional_part() == value

    def test_int_truncates(self) -> None:
        assert int(BigDecimal("-12.9")) == -12
        assert int(BigDecimal("12.9")) == 12


# =============================================================================
# SQRT
# =============================================================================


class TestSqrt:
    """Тесты квадратного корня"""

    @pytest.mark.parametrize(
        "text,scale,expected",
        [
            ("2", 10, "1.4142135623"),
            ("0.25", 2, "0.50"),
            ("1.21", 0, "1"),
            ("1.21", 1, "1.1"),
            ("0", 3, "0.000"),
            ("100", 0, "10"),
        ],
    )
    def test_sqrt_truncated(self, text, scale, expected) -> None:
        assert _identical(BigDecimal(text).sqrt(scale), expected)

    def test_sqrt_of_negative(self) -> None:
        with pytest.raises(ArgumentError):
            BigDecimal("-1").sqrt(2)


# =============================================================================
# COMPARISON / HASH / IMMUTABILITY
# =============================================================================


class TestComparison:
    """Тесты сравнения"""

    def test_numeric_equality_ignores_scale(self) -> None:
        """2.0 и 2.00 численно равны, но представлены по-разному"""
        a, b = BigDecimal("2.0"), BigDecimal("2.00")
        assert a.compare_to(b) == 0
        assert a == b
        assert not a.is_identical(b)

    def test_ordering(self) -> None:
        assert BigDecimal("1.5") < BigDecimal("1.51")
        assert BigDecimal("-1") < BigDecimal("0.0")
        assert BigDecimal("10") > BigDecimal("9.999")
        assert BigDecimal("1.50") >= BigDecimal("1.5")
        assert BigDecimal("1.50") <= 2
        values = ["3.1", "-2", "0.001", "0", "-2.5"]
        assert [str(v) for v in sorted(BigDecimal(v) for v in values)] == ["-2.5", "-2", "0", "0.001", "3.1"]

    def test_compare_with_integers(self) -> None:
        assert BigDecimal("2.00") == 2
        assert BigDecimal("2.00") == BigInteger(2)
        assert BigInteger(2) == BigDecimal("2.00")

    def test_hash_consistent_with_equality(self) -> None:
        assert hash(BigDecimal("2.00")) == hash(BigDecimal("2"))
        assert hash(BigDecimal("2.00")) == hash(2)
        assert hash(BigDecimal("1.50")) == hash(BigDecimal("1.5"))
        assert len({BigDecimal("1.5"), BigDecimal("1.50"), BigDecimal("1.500")}) == 1

    def test_immutable(self) -> None:
        value = BigDecimal("1.5")
        with pytest.raises(AttributeError):
            value._scale = 3
        with pytest.raises(AttributeError):
            value.extra = 1
        assert value.scale == 1

    def test_pickle_preserves_scale(self) -> None:
        value = BigDecimal("-1.50")
        assert pickle.loads(pickle.dumps(value)).is_identical(value)

    def test_repr(self) -> None:
        assert repr(BigDecimal("-1.50")) == "BigDecimal('-1.50')"

    def test_bool(self) -> None:
        assert bool(BigDecimal("0.00")) is False
        assert bool(BigDecimal("0.01")) is True


# =============================================================================
# OPERATORS
# =============================================================================


class TestOperators:
    """Тесты операторов Python"""

    def test_mixed_operands(self) -> None:
        assert _identical(BigDecimal("1.5") + 1, "2.5")
        assert _identical(1 + BigDecimal("1.5"), "2.5")
        assert _identical(3 - BigDecimal("0.5"), "2.5")
        assert _identical(BigInteger(2) * BigDecimal("1.5"), "3.0")
        assert _identical(BigDecimal("1") / 4, "0.25")
        assert _identical(1 / BigDecimal("8"), "0.125")
        assert _identical(BigDecimal("1.5") ** 2, "2.25")
        assert _identical(-BigDecimal("1.5"), "-1.5")
        assert _identical(abs(BigDecimal("-1.5")), "1.5")

    def test_integer_exponents(self) -> None:
        assert _identical(BigDecimal("1.5") ** BigInteger(2), "2.25")
        assert _identical(BigDecimal("1.5") ** True, "1.5")

    def test_bool_operand_like_int(self) -> None:
        assert BigDecimal("1.00") == True  # noqa: E712
        assert _identical(BigDecimal("0.5") + True, "1.5")

    def test_float_operand_rejected(self) -> None:
        with pytest.raises(TypeError):
            BigDecimal("1.5") + 0.5
        with pytest.raises(TypeError):
            0.5 * BigDecimal("1.5")
