"""
BigInteger — неизменяемое целое произвольной точности

Представление: каноническая десятичная строка со знаком ("0", "42", "-7").
Знак и модуль однозначно восстанавливаются из строки:
- модуль не пустой и не содержит ведущих нулей (кроме самого "0")
- модуль == "0" тогда и только тогда, когда знак == 0 ("-0" не существует)

Вся арифметика над модулями делегируется Calculator процесса
(src.bigmath.calculator.get_calculator), поэтому результат не зависит от
выбранного backend-а.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Экземпляр не изменяется после создания (присваивание атрибутов → AttributeError)
2. Каждая операция возвращает новый экземпляр (или self, если значение то же)
3. Равенство и порядок — чисто числовые
4. Ошибки немедленные: DivisionByZero, InvalidExponent, NumberFormatError,
   ArgumentError, RoundingNecessary

Examples:
    >>> BigInteger("2").power(10)
    BigInteger('1024')
    >>> BigInteger("ff", radix=16) + 1
    BigInteger('256')
    >>> BigInteger(-7).quotient_and_remainder(2, DivisionMode.FLOOR)
    (BigInteger('-4'), BigInteger('1'))
"""

from typing import Final, Union

from src.bigmath.calculator import ALPHABET, MAX_RADIX, MIN_RADIX, get_calculator
from src.bigmath.errors import (
    ArgumentError,
    DivisionByZero,
    InvalidExponent,
    NumberFormatError,
)
from src.bigmath.rounding import DivisionMode, RoundingMode

# =============================================================================
# КОНВЕРСИЯ С НАТИВНЫМ int
# =============================================================================

# Python ограничивает int <-> str конверсию (sys.get_int_max_str_digits);
# ниже этого порога str()/int() безопасны, выше конвертируем по группам цифр
_INT_STR_SAFE_BITS: Final[int] = 10_000

_GROUP_DIGITS: Final[int] = 9
_GROUP_BASE: Final[int] = 10**_GROUP_DIGITS


def _int_to_str(value: int) -> str:
    if value.bit_length() <= _INT_STR_SAFE_BITS:
        return str(value)

    negative = value < 0
    value = -value if negative else value

    groups = []
    while value:
        value, group = divmod(value, _GROUP_BASE)
        groups.append(group)

    head = str(groups[-1])
    tail = "".join(f"{group:09d}" for group in reversed(groups[:-1]))

    return ("-" if negative else "") + head + tail


def _str_to_int(value: str) -> int:
    negative = value[0] == "-"
    digits = value[1:] if negative else value

    if len(digits) * 4 <= _INT_STR_SAFE_BITS:
        result = int(digits)
    else:
        head = len(digits) % _GROUP_DIGITS or _GROUP_DIGITS
        result = int(digits[:head])
        for start in range(head, len(digits), _GROUP_DIGITS):
            result = result * _GROUP_BASE + int(digits[start : start + _GROUP_DIGITS])

    return -result if negative else result


# =============================================================================
# ПАРСИНГ
# =============================================================================


def _check_radix(radix: int) -> None:
    if isinstance(radix, bool) or not isinstance(radix, int):
        raise ArgumentError(f"Radix must be an integer, got {radix!r}")
    if not MIN_RADIX <= radix <= MAX_RADIX:
        raise ArgumentError(f"Radix must be in range [{MIN_RADIX}, {MAX_RADIX}], got {radix}")


def _parse(text: str, radix: int) -> str:
    """
    Разбор строки со знаком в radix 2..36 в каноническую десятичную строку.

    Raises:
        ArgumentError: radix вне [2, 36]
        NumberFormatError: пустая строка, одиночный знак, пробелы,
            недопустимые символы или цифра вне диапазона radix
    """
    _check_radix(radix)

    if not text:
        raise NumberFormatError("The number cannot be empty")

    sign = ""
    digits = text
    if text[0] in "+-":
        sign = text[0]
        digits = text[1:]

    if not digits:
        raise NumberFormatError(f"The number {text!r} has no digits")

    # lower() отображает некоторые не-ASCII символы в латиницу (например, знак Кельвина)
    if not digits.isascii():
        raise NumberFormatError(f"The number {text!r} contains non-ASCII characters")

    digits = digits.lower()
    allowed = ALPHABET[:radix]
    for char in digits:
        if char not in allowed:
            raise NumberFormatError(
                f"The number {text!r} contains {char!r}, which is not a valid digit in base {radix}"
            )

    digits = digits.lstrip("0") or "0"
    if digits == "0":
        return "0"

    magnitude = digits if radix == 10 else get_calculator().from_base(digits, radix)

    return "-" + magnitude if sign == "-" else magnitude


# =============================================================================
# BIGINTEGER
# =============================================================================

IntegerLike = Union["BigInteger", int, str]


class BigInteger:
    """
    Неизменяемое целое произвольной точности.

    Args:
        value: Строка со знаком (в radix), нативный int или BigInteger
        radix: Основание для строкового value (2..36, default: 10)

    Raises:
        NumberFormatError: Некорректная строка
        ArgumentError: radix вне [2, 36]
        TypeError: Неподдерживаемый тип value
    """

    __slots__ = ("_value",)

    def __init__(self, value: IntegerLike = 0, radix: int = 10) -> None:
        if isinstance(value, BigInteger):
            canonical = value._value
        elif isinstance(value, str):
            canonical = _parse(value, radix)
        elif isinstance(value, int) and not isinstance(value, bool):
            canonical = _int_to_str(value)
        else:
            raise TypeError(f"Cannot convert {type(value).__name__} to BigInteger")

        object.__setattr__(self, "_value", canonical)

    @classmethod
    def _of_canonical(cls, value: str) -> "BigInteger":
        instance = object.__new__(cls)
        object.__setattr__(instance, "_value", value)
        return instance

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("BigInteger is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("BigInteger is immutable")

    def __reduce__(self):
        return (type(self), (self._value,))

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, value: IntegerLike) -> "BigInteger":
        """BigInteger из BigInteger (возвращается как есть), int или строки."""
        if isinstance(value, BigInteger):
            return value
        return cls(value)

    @classmethod
    def parse(cls, text: str, radix: int = 10) -> "BigInteger":
        """Разбор строки со знаком в системе счисления radix (2..36)."""
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        return cls._of_canonical(_parse(text, radix))

    @classmethod
    def from_int(cls, value: int) -> "BigInteger":
        """BigInteger из нативного int."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        return cls._of_canonical(_int_to_str(value))

    @classmethod
    def zero(cls) -> "BigInteger":
        return cls._of_canonical("0")

    @classmethod
    def one(cls) -> "BigInteger":
        return cls._of_canonical("1")

    @classmethod
    def ten(cls) -> "BigInteger":
        return cls._of_canonical("10")

    # -------------------------------------------------------------------------
    # Знак и модуль
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        """-1, 0 или 1."""
        if self._value == "0":
            return 0
        return -1 if self._value[0] == "-" else 1

    @property
    def magnitude(self) -> str:
        """Модуль как десятичная строка без знака."""
        return self._value[1:] if self._value[0] == "-" else self._value

    def is_zero(self) -> bool:
        return self._value == "0"

    def is_negative(self) -> bool:
        return self._value[0] == "-"

    def is_positive(self) -> bool:
        return self._value != "0" and self._value[0] != "-"

    def is_even(self) -> bool:
        return int(self._value[-1]) % 2 == 0

    def is_odd(self) -> bool:
        return not self.is_even()

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, that: IntegerLike) -> "BigInteger":
        that = BigInteger.of(that)
        if that._value == "0":
            return self
        if self._value == "0":
            return that
        return BigInteger._of_canonical(get_calculator().add(self._value, that._value))

    def subtract(self, that: IntegerLike) -> "BigInteger":
        that = BigInteger.of(that)
        if that._value == "0":
            return self
        return BigInteger._of_canonical(get_calculator().sub(self._value, that._value))

    def multiply(self, that: IntegerLike) -> "BigInteger":
        that = BigInteger.of(that)
        if that._value == "1":
            return self
        if self._value == "1":
            return that
        return BigInteger._of_canonical(get_calculator().mul(self._value, that._value))

    def quotient_and_remainder(
        self,
        divisor: IntegerLike,
        mode: DivisionMode = DivisionMode.TRUNCATE,
    ) -> tuple["BigInteger", "BigInteger"]:
        """
        Деление с остатком.

        Для любого режима: self == q * divisor + r и |r| < |divisor|.
        - TRUNCATE: q округлено к нулю, r имеет знак self
        - FLOOR: q округлено к −∞, r имеет знак divisor

        Raises:
            DivisionByZero: divisor == 0
        """
        divisor = BigInteger.of(divisor)
        if divisor._value == "0":
            raise DivisionByZero("Division by zero")

        calculator = get_calculator()
        q, r = calculator.div_q_r(self._value, divisor._value)

        if mode == DivisionMode.FLOOR and r != "0" and (r[0] == "-") != (divisor._value[0] == "-"):
            q = calculator.sub(q, "1")
            r = calculator.add(r, divisor._value)

        return BigInteger._of_canonical(q), BigInteger._of_canonical(r)

    def quotient(self, divisor: IntegerLike) -> "BigInteger":
        """Частное с усечением к нулю."""
        return self.quotient_and_remainder(divisor)[0]

    def remainder(self, divisor: IntegerLike) -> "BigInteger":
        """Остаток от деления с усечением (знак делимого)."""
        return self.quotient_and_remainder(divisor)[1]

    def divide(
        self,
        divisor: IntegerLike,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> "BigInteger":
        """
        Частное, округлённое по rounding_mode.

        Raises:
            DivisionByZero: divisor == 0
            RoundingNecessary: rounding_mode == UNNECESSARY и деление неточное
        """
        divisor = BigInteger.of(divisor)
        if divisor._value == "0":
            raise DivisionByZero("Division by zero")
        if divisor._value == "1":
            return self

        return BigInteger._of_canonical(
            get_calculator().div_round(self._value, divisor._value, RoundingMode(rounding_mode))
        )

    def power(self, exponent: int) -> "BigInteger":
        """
        Возведение в степень exponent >= 0.

        Raises:
            InvalidExponent: exponent < 0
        """
        if isinstance(exponent, BigInteger):
            exponent = exponent.to_int()
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"Exponent must be an integer, got {type(exponent).__name__}")
        if exponent < 0:
            raise InvalidExponent(f"The exponent {exponent} is negative")

        if exponent == 0:
            return BigInteger.one()
        if exponent == 1:
            return self

        return BigInteger._of_canonical(get_calculator().pow(self._value, exponent))

    def mod(self, modulus: IntegerLike) -> "BigInteger":
        """
        Остаток по модулю в диапазоне [0, modulus).

        Raises:
            DivisionByZero: modulus == 0
            ArgumentError: modulus < 0
        """
        modulus = BigInteger.of(modulus)
        _check_modulus(modulus)

        calculator = get_calculator()
        r = calculator.div_r(self._value, modulus._value)
        if r[0] == "-":
            r = calculator.add(r, modulus._value)

        return BigInteger._of_canonical(r)

    def mod_power(self, exponent: IntegerLike, modulus: IntegerLike) -> "BigInteger":
        """
        (self ** exponent) mod modulus, результат в [0, modulus).

        Raises:
            InvalidExponent: exponent < 0
            DivisionByZero: modulus == 0
            ArgumentError: modulus < 0
        """
        exponent = BigInteger.of(exponent)
        modulus = BigInteger.of(modulus)

        if exponent.is_negative():
            raise InvalidExponent(f"The exponent {exponent} is negative")
        _check_modulus(modulus)

        return BigInteger._of_canonical(
            get_calculator().mod_pow(self._value, exponent._value, modulus._value)
        )

    def gcd(self, that: IntegerLike) -> "BigInteger":
        """Наибольший общий делитель (>= 0); gcd(0, 0) == 0."""
        that = BigInteger.of(that)
        return BigInteger._of_canonical(get_calculator().gcd(self._value, that._value))

    def sqrt(self) -> "BigInteger":
        """
        floor(sqrt(self)).

        Raises:
            ArgumentError: self < 0
        """
        if self.is_negative():
            raise ArgumentError(f"Cannot calculate the square root of a negative number: {self}")
        return BigInteger._of_canonical(get_calculator().sqrt(self._value))

    def abs(self) -> "BigInteger":
        return self.negate() if self.is_negative() else self

    def negate(self) -> "BigInteger":
        if self._value == "0":
            return self
        return BigInteger._of_canonical(get_calculator().neg(self._value))

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare_to(self, that: IntegerLike) -> int:
        """-1, 0 или 1."""
        that = BigInteger.of(that)
        if self._value == that._value:
            return 0
        return get_calculator().cmp(self._value, that._value)

    def bit_length(self) -> int:
        """Число бит модуля без знака (семантика int.bit_length)."""
        if self._value == "0":
            return 0
        return len(get_calculator().to_base(self.magnitude, 2))

    # -------------------------------------------------------------------------
    # Конверсия
    # -------------------------------------------------------------------------

    def to_string(self, radix: int = 10) -> str:
        """
        Строковое представление в radix 2..36 (цифры в нижнем регистре).

        Raises:
            ArgumentError: radix вне [2, 36]
        """
        _check_radix(radix)
        if radix == 10 or self._value == "0":
            return self._value
        return get_calculator().to_base(self._value, radix)

    def to_int(self) -> int:
        """Нативный int с тем же значением."""
        return _str_to_int(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"BigInteger('{self._value}')"

    def __int__(self) -> int:
        return self.to_int()

    def __bool__(self) -> bool:
        return self._value != "0"

    def __hash__(self) -> int:
        # Совпадает с hash(int) для одинаковых значений
        return hash(self.to_int())

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self._value == that._value

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

    def __add__(self, other: object) -> "BigInteger":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.add(that)

    __radd__ = __add__

    def __sub__(self, other: object) -> "BigInteger":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.subtract(that)

    def __rsub__(self, other: object) -> "BigInteger":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return that.subtract(self)

    def __mul__(self, other: object) -> "BigInteger":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.multiply(that)

    __rmul__ = __mul__

    def __floordiv__(self, other: object) -> "BigInteger":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.quotient_and_remainder(that, DivisionMode.FLOOR)[0]

    def __rfloordiv__(self, other: object) -> "BigInteger":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return that.quotient_and_remainder(self, DivisionMode.FLOOR)[0]

    def __mod__(self, other: object) -> "BigInteger":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.quotient_and_remainder(that, DivisionMode.FLOOR)[1]

    def __rmod__(self, other: object) -> "BigInteger":
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return that.quotient_and_remainder(self, DivisionMode.FLOOR)[1]

    def __divmod__(self, other: object) -> tuple["BigInteger", "BigInteger"]:
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return self.quotient_and_remainder(that, DivisionMode.FLOOR)

    def __rdivmod__(self, other: object) -> tuple["BigInteger", "BigInteger"]:
        that = _coerce(other)
        if that is None:
            return NotImplemented
        return that.quotient_and_remainder(self, DivisionMode.FLOOR)

    def __pow__(self, exponent: object, modulus: object = None) -> "BigInteger":
        that = _coerce(exponent)
        if that is None:
            return NotImplemented
        if modulus is None:
            return self.power(that.to_int())
        mod = _coerce(modulus)
        if mod is None:
            return NotImplemented
        return self.mod_power(that, mod)

    def __rpow__(self, base: object, modulus: object = None) -> "BigInteger":
        that = _coerce(base)
        if that is None:
            return NotImplemented
        return that.__pow__(self, modulus)

    def __neg__(self) -> "BigInteger":
        return self.negate()

    def __pos__(self) -> "BigInteger":
        return self

    def __abs__(self) -> "BigInteger":
        return self.abs()


def _coerce(value: object) -> "BigInteger | None":
    """BigInteger для операторов; None для неподдерживаемых типов."""
    if isinstance(value, BigInteger):
        return value
    if isinstance(value, int):
        # bool сравнивается и считается как int: True == 1
        return BigInteger.from_int(int(value))
    return None


def _check_modulus(modulus: BigInteger) -> None:
    if modulus.is_zero():
        raise DivisionByZero("The modulus must not be zero")
    if modulus.is_negative():
        raise ArgumentError(f"The modulus {modulus} must not be negative")
