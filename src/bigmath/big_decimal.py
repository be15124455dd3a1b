"""
BigDecimal — неизменяемое десятичное число произвольной точности

Представление: unscaled_value (BigInteger) и scale (int >= 0):
    value = unscaled_value × 10^(−scale)

Два BigDecimal могут быть численно равны, но текстуально различны:
"2.0" (20, 1) и "2.00" (200, 2). Сравнение (compare_to, ==, <) — числовое,
без учёта scale; строгое сравнение представления — is_identical().

Правила scale:
- add / subtract: max(scale_a, scale_b)
- multiply: scale_a + scale_b
- divide: явный scale (или scale делимого), либо точное деление
- set_scale: увеличение — дополнение нулями, уменьшение — округление

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. scale >= 0 всегда; отрицательная экспонента при парсинге переносится
   в unscaled_value
2. Рендеринг всегда в plain-нотации с сохранением scale
3. RoundingNecessary вместо тихой потери точности при UNNECESSARY

Examples:
    >>> BigDecimal("1.5") + BigDecimal("2.25")
    BigDecimal('3.75')
    >>> BigDecimal("1.005").set_scale(2, RoundingMode.HALF_EVEN)
    BigDecimal('1.00')
    >>> BigDecimal("1.2e-3")
    BigDecimal('0.0012')
"""

import re
from typing import Optional, Union

from src.bigmath.big_integer import BigInteger
from src.bigmath.errors import (
    ArgumentError,
    DivisionByZero,
    InvalidExponent,
    NumberFormatError,
    RoundingNecessary,
)
from src.bigmath.rounding import RoundingMode

# =============================================================================
# ПАРСИНГ
# =============================================================================

# [знак] [целая часть] [.дробная часть] [e|E [знак] экспонента]
_DECIMAL_PATTERN = re.compile(
    r"(?P<sign>[+-])?(?P<integral>[0-9]*)(?:\.(?P<fraction>[0-9]*))?(?:[eE](?P<exponent>[+-]?[0-9]+))?",
    re.ASCII,
)


def _pow10(exponent: int) -> BigInteger:
    """10 ** exponent, exponent >= 0."""
    return BigInteger.parse("1" + "0" * exponent)


def _check_scale(scale: int) -> None:
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise ArgumentError(f"Scale must be an integer, got {scale!r}")
    if scale < 0:
        raise ArgumentError(f"Scale must be non-negative, got {scale}")


def _parse(text: str) -> tuple[BigInteger, int]:
    """
    Разбор десятичной строки в (unscaled_value, scale).

    scale = число дробных цифр − экспонента; при отрицательном результате
    unscaled_value домножается на 10^(−scale), а scale становится 0.

    Raises:
        NumberFormatError: Строка не является десятичным числом
    """
    match = _DECIMAL_PATTERN.fullmatch(text)
    if match is None:
        raise NumberFormatError(f"The value {text!r} is not a valid decimal number")

    integral = match.group("integral")
    fraction = match.group("fraction") or ""
    if not integral and not fraction:
        raise NumberFormatError(f"The value {text!r} has no digits")

    sign = match.group("sign") or ""
    try:
        exponent = int(match.group("exponent") or 0)
    except ValueError as e:
        # лимит int <-> str (sys.get_int_max_str_digits)
        raise NumberFormatError(f"The exponent in {text[:40]!r}... has too many digits") from e

    unscaled = BigInteger.parse(sign + integral + fraction)
    scale = len(fraction) - exponent

    if scale < 0:
        return unscaled.multiply(_pow10(-scale)), 0

    return unscaled, scale


# =============================================================================
# BIGDECIMAL
# =============================================================================

DecimalLike = Union["BigDecimal", BigInteger, int, str]


class BigDecimal:
    """
    Неизменяемое десятичное число произвольной точности.

    Args:
        value: Десятичная строка ("-1.50", "2e3", ".5"), int, BigInteger
            или BigDecimal

    Raises:
        NumberFormatError: Некорректная строка
        TypeError: Неподдерживаемый тип value (в том числе float)
    """

    __slots__ = ("_unscaled", "_scale")

    def __init__(self, value: DecimalLike = 0) -> None:
        if isinstance(value, BigDecimal):
            unscaled, scale = value._unscaled, value._scale
        elif isinstance(value, str):
            unscaled, scale = _parse(value)
        elif isinstance(value, BigInteger):
            unscaled, scale = value, 0
        elif isinstance(value, int) and not isinstance(value, bool):
            unscaled, scale = BigInteger.from_int(value), 0
        else:
            raise TypeError(f"Cannot convert {type(value).__name__} to BigDecimal")

        object.__setattr__(self, "_unscaled", unscaled)
        object.__setattr__(self, "_scale", scale)

    @classmethod
    def _create(cls, unscaled: BigInteger, scale: int) -> "BigDecimal":
        instance = object.__new__(cls)
        object.__setattr__(instance, "_unscaled", unscaled)
        object.__setattr__(instance, "_scale", scale)
        return instance

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("BigDecimal is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("BigDecimal is immutable")

    def __reduce__(self):
        return (type(self), (self.to_string(),))

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, value: DecimalLike) -> "BigDecimal":
        if isinstance(value, BigDecimal):
            return value
        return cls(value)

    @classmethod
    def of_unscaled_value(cls, value: Union[BigInteger, int, str], scale: int = 0) -> "BigDecimal":
        """
        BigDecimal из unscaled value и scale: value × 10^(−scale).

        Raises:
            ArgumentError: scale < 0
        """
        _check_scale(scale)
        return cls._create(BigInteger.of(value), scale)

    @classmethod
    def zero(cls) -> "BigDecimal":
        return cls._create(BigInteger.zero(), 0)

    @classmethod
    def one(cls) -> "BigDecimal":
        return cls._create(BigInteger.one(), 0)

    @classmethod
    def ten(cls) -> "BigDecimal":
        return cls._create(BigInteger.ten(), 0)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def unscaled_value(self) -> BigInteger:
        return self._unscaled

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def sign(self) -> int:
        return self._unscaled.sign

    def is_zero(self) -> bool:
        return self._unscaled.is_zero()

    def is_negative(self) -> bool:
        return self._unscaled.is_negative()

    def is_positive(self) -> bool:
        return self._unscaled.is_positive()

    def precision(self) -> int:
        """Число значащих цифр unscaled value (у нуля — 1)."""
        return len(self._unscaled.magnitude)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _aligned(self, that: "BigDecimal") -> tuple[BigInteger, BigInteger, int]:
        """Unscaled values обоих операндов, приведённые к max(scale)."""
        if self._scale == that._scale:
            return self._unscaled, that._unscaled, self._scale

        if self._scale > that._scale:
            shift = _pow10(self._scale - that._scale)
            return self._unscaled, that._unscaled.multiply(shift), self._scale

        shift = _pow10(that._scale - self._scale)
        return self._unscaled.multiply(shift), that._unscaled, that._scale

    def add(self, that: DecimalLike) -> "BigDecimal":
        that = BigDecimal.of(that)
        a, b, scale = self._aligned(that)
        return BigDecimal._create(a.add(b), scale)

    def subtract(self, that: DecimalLike) -> "BigDecimal":
        that = BigDecimal.of(that)
        a, b, scale = self._aligned(that)
        return BigDecimal._create(a.subtract(b), scale)

    def multiply(self, that: DecimalLike) -> "BigDecimal":
        that = BigDecimal.of(that)
        return BigDecimal._create(
            self._unscaled.multiply(that._unscaled),
            self._scale + that._scale,
        )

    def divide(
        self,
        divisor: DecimalLike,
        scale: Optional[int] = None,
        rounding_mode: Optional[RoundingMode] = None,
    ) -> "BigDecimal":
        """
        Деление с явным scale и режимом округления.

        - scale и rounding_mode не заданы → точное деление (exact_divide)
        - задан только rounding_mode → scale = self.scale
        - задан только scale → rounding_mode = UNNECESSARY

        Алгоритм: q = round(a_u × 10^(scale − sa + sb) / b_u), результат (q, scale).

        Raises:
            DivisionByZero: divisor == 0
            RoundingNecessary: UNNECESSARY и частное неточно в данном scale
            ArgumentError: scale < 0
        """
        that = BigDecimal.of(divisor)
        if that.is_zero():
            raise DivisionByZero("Division by zero")

        if scale is None and rounding_mode is None:
            return self.exact_divide(that)

        if scale is None:
            scale = self._scale
        if rounding_mode is None:
            rounding_mode = RoundingMode.UNNECESSARY

        _check_scale(scale)

        shift = scale - self._scale + that._scale
        if shift >= 0:
            numerator = self._unscaled.multiply(_pow10(shift))
            denominator = that._unscaled
        else:
            numerator = self._unscaled
            denominator = that._unscaled.multiply(_pow10(-shift))

        return BigDecimal._create(numerator.divide(denominator, rounding_mode), scale)

    def exact_divide(self, divisor: DecimalLike) -> "BigDecimal":
        """
        Точное деление с минимальным scale, представляющим частное.

        Частное = N / D, N = a_u × 10^sb, D = b_u × 10^sa. После сокращения
        на gcd(N, D) знаменатель должен иметь вид 2^x × 5^y; тогда
        минимальный scale = max(x, y).

        Raises:
            DivisionByZero: divisor == 0
            RoundingNecessary: Частное — бесконечная десятичная дробь
        """
        that = BigDecimal.of(divisor)
        if that.is_zero():
            raise DivisionByZero("Division by zero")

        numerator = self._unscaled.multiply(_pow10(that._scale))
        denominator = that._unscaled.multiply(_pow10(self._scale))

        reduced = denominator.quotient(numerator.gcd(denominator)).abs()

        twos = 0
        while reduced.is_even():
            reduced = reduced.quotient(2)
            twos += 1

        fives = 0
        while True:
            q, r = reduced.quotient_and_remainder(5)
            if not r.is_zero():
                break
            reduced = q
            fives += 1

        if reduced != 1:
            raise RoundingNecessary(
                f"The quotient {self} / {that} does not have a terminating decimal expansion"
            )

        return self.divide(that, max(twos, fives), RoundingMode.UNNECESSARY)

    def power(self, exponent: int) -> "BigDecimal":
        """
        Возведение в степень exponent >= 0; scale умножается на exponent.

        Raises:
            InvalidExponent: exponent < 0
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"Exponent must be an integer, got {type(exponent).__name__}")
        if exponent < 0:
            raise InvalidExponent(f"The exponent {exponent} is negative")

        return BigDecimal._create(self._unscaled.power(exponent), self._scale * exponent)

    def sqrt(self, scale: int) -> "BigDecimal":
        """
        Квадратный корень, усечённый до scale знаков после точки.

        Raises:
            ArgumentError: self < 0 или scale < 0
        """
        _check_scale(scale)
        if self.is_negative():
            raise ArgumentError(f"Cannot calculate the square root of a negative number: {self}")

        # sqrt(u × 10^−s) × 10^S = sqrt(u × 10^(2S − s))
        shift = 2 * scale - self._scale
        if shift >= 0:
            radicand = self._unscaled.multiply(_pow10(shift))
        else:
            radicand = self._unscaled.quotient(_pow10(-shift))

        return BigDecimal._create(radicand.sqrt(), scale)

    def negate(self) -> "BigDecimal":
        return BigDecimal._create(self._unscaled.negate(), self._scale)

    def abs(self) -> "BigDecimal":
        return self.negate() if self.is_negative() else self

    # -------------------------------------------------------------------------
    # Scale
    # -------------------------------------------------------------------------

    def set_scale(
        self,
        new_scale: int,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> "BigDecimal":
        """
        Смена scale: увеличение точное, уменьшение — с округлением.

        Raises:
            ArgumentError: new_scale < 0
            RoundingNecessary: UNNECESSARY и отбрасываются ненулевые цифры
        """
        _check_scale(new_scale)

        if new_scale == self._scale:
            return self

        if new_scale > self._scale:
            shift = _pow10(new_scale - self._scale)
            return BigDecimal._create(self._unscaled.multiply(shift), new_scale)

        divisor = _pow10(self._scale - new_scale)
        return BigDecimal._create(self._unscaled.divide(divisor, rounding_mode), new_scale)

    def strip_trailing_zeros(self) -> "BigDecimal":
        """Минимальный scale (>= 0) с тем же значением."""
        if self._scale == 0:
            return self

        if self.is_zero():
            return BigDecimal.zero()

        digits = str(self._unscaled)
        trailing = len(digits) - len(digits.rstrip("0"))
        shift = min(trailing, self._scale)
        if shift == 0:
            return self

        return BigDecimal._create(BigInteger.parse(digits[:-shift]), self._scale - shift)

    def to_big_integer(self, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> BigInteger:
        """
        Целое значение.

        - UNNECESSARY (default): дробная часть обязана быть нулевой
        - DOWN: усечение, иначе округление по rounding_mode

        Raises:
            RoundingNecessary: UNNECESSARY и дробная часть ненулевая
        """
        return self.set_scale(0, rounding_mode)._unscaled

    def integral_part(self) -> BigInteger:
        """Целая часть (усечение к нулю)."""
        return self.to_big_integer(RoundingMode.DOWN)

    def fractional_part(self) -> "BigDecimal":
        """Дробная часть со знаком self и тем же scale: self − integral_part()."""
        return self.subtract(self.integral_part())

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare_to(self, that: DecimalLike) -> int:
        """Числовое сравнение без учёта scale: -1, 0 или 1."""
        that = BigDecimal.of(that)
        a, b, _ = self._aligned(that)
        return a.compare_to(b)

    def is_identical(self, that: "BigDecimal") -> bool:
        """Строгое равенство представления: одинаковые unscaled value и scale."""
        return (
            isinstance(that, BigDecimal)
            and self._scale == that._scale
            and self._unscaled == that._unscaled
        )

    # -------------------------------------------------------------------------
    # Конверсия
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        """Plain-нотация с сохранением scale: "-0.050", "12", "3.75"."""
        value = str(self._unscaled)
        if self._scale == 0:
            return value

        negative = value[0] == "-"
        digits = value[1:] if negative else value
        digits = digits.rjust(self._scale + 1, "0")

        result = digits[: -self._scale] + "." + digits[-self._scale :]
        return "-" + result if negative else result

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigDecimal('{self.to_string()}')"

    def __int__(self) -> int:
        return self.integral_part().to_int()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __hash__(self) -> int:
        stripped = self.strip_trailing_zeros()
        if stripped._scale == 0:
            # Совпадает с hash(BigInteger) и hash(int) для целых значений
            return hash(stripped._unscaled)
        return hash((stripped._unscaled, stripped._scale))

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) == 0

    def __lt__(self, other: object) -> bool:
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) < 0

    def __le__(self, other: object) -> bool:
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) <= 0

    def __gt__(self, other: object) -> bool:
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) > 0

    def __ge__(self, other: object) -> bool:
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.compare_to(that) >= 0

    def __add__(self, other: object) -> "BigDecimal":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.add(that)

    __radd__ = __add__

    def __sub__(self, other: object) -> "BigDecimal":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.subtract(that)

    def __rsub__(self, other: object) -> "BigDecimal":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return that.subtract(self)

    def __mul__(self, other: object) -> "BigDecimal":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.multiply(that)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "BigDecimal":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.exact_divide(that)

    def __rtruediv__(self, other: object) -> "BigDecimal":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return that.exact_divide(self)

    def __pow__(self, exponent: object) -> "BigDecimal":
        if isinstance(exponent, BigInteger):
            return self.power(exponent.to_int())
        if isinstance(exponent, int):
            return self.power(int(exponent))
        return NotImplemented

    def __neg__(self) -> "BigDecimal":
        return self.negate()

    def __pos__(self) -> "BigDecimal":
        return self

    def __abs__(self) -> "BigDecimal":
        return self.abs()


def _coerce(value: object) -> "BigDecimal | None":
    """BigDecimal для операторов; None для неподдерживаемых типов (float и т.п.)."""
    if isinstance(value, BigDecimal):
        return value
    if isinstance(value, BigInteger):
        return BigDecimal._create(value, 0)
    if isinstance(value, int):
        return BigDecimal._create(BigInteger.from_int(int(value)), 0)
    return None
