"""
Calculator — абстракция арифметики произвольной длины

Calculator оперирует каноническими десятичными строками со знаком:
    "0", "123", "-45"
(без ведущих нулей, без "+", без "-0").

Каждый backend обязан реализовать базовый набор операций:
- add / sub / mul
- div_q_r (усечение к нулю, остаток со знаком делимого)
- pow (показатель >= 0)
- mod_pow (показатель >= 0, модуль > 0, результат в [0, модуль))
- gcd (неотрицательный результат)
- sqrt (floor от истинного корня, операнд >= 0)
- cmp (-1 / 0 / 1)

Остальные операции (смена системы счисления, деление с округлением)
реализованы обобщённо поверх базового набора и могут быть
переопределены backend-ом.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Calculator не хранит состояние: все методы — чистые функции
2. Результат не зависит от backend (побитово одинаковые строки)
3. Предусловия (делитель != 0, показатель >= 0, модуль > 0, операнд
   sqrt >= 0) проверяются слоем BigInteger / BigDecimal
"""

from abc import ABC, abstractmethod
from typing import Final

from src.bigmath.errors import RoundingNecessary
from src.bigmath.rounding import RoundingMode

# =============================================================================
# CONSTANTS
# =============================================================================

# Алфавит цифр для radix 2..36 (нижний регистр)
ALPHABET: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"

MIN_RADIX: Final[int] = 2
MAX_RADIX: Final[int] = 36

# Верхняя граница значения одной группы цифр при смене radix.
# Группа помещается в машинное слово при любом radix.
_CHUNK_LIMIT: Final[int] = 10**9


def _chunk_width(radix: int) -> int:
    """Максимальное k такое, что radix**k <= _CHUNK_LIMIT."""
    width = 1
    while radix ** (width + 1) <= _CHUNK_LIMIT:
        width += 1
    return width


def _small_to_base(value: int, radix: int) -> str:
    """Перевод небольшого неотрицательного числа (< _CHUNK_LIMIT) в radix."""
    if value == 0:
        return "0"

    digits = []
    while value:
        value, digit = divmod(value, radix)
        digits.append(ALPHABET[digit])

    return "".join(reversed(digits))


# =============================================================================
# CALCULATOR
# =============================================================================


class Calculator(ABC):
    """
    Интерфейс арифметики над десятичными строками произвольной длины.

    Наследники задают name (идентификатор для конфигурации) и
    is_available() (проверка возможностей среды исполнения).
    """

    name: str = "abstract"

    @classmethod
    def is_available(cls) -> bool:
        """Может ли backend работать в текущем процессе."""
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # -------------------------------------------------------------------------
    # Базовый набор (реализуется каждым backend)
    # -------------------------------------------------------------------------

    @abstractmethod
    def add(self, a: str, b: str) -> str:
        """a + b"""

    @abstractmethod
    def sub(self, a: str, b: str) -> str:
        """a - b"""

    @abstractmethod
    def mul(self, a: str, b: str) -> str:
        """a * b"""

    @abstractmethod
    def div_q_r(self, a: str, b: str) -> tuple[str, str]:
        """
        Деление с остатком с усечением к нулю.

        Возвращает (q, r) такие, что a == q*b + r, |r| < |b|,
        а r имеет знак a (или равен нулю).
        """

    @abstractmethod
    def pow(self, a: str, e: int) -> str:
        """a ** e, e >= 0"""

    @abstractmethod
    def mod_pow(self, base: str, exp: str, mod: str) -> str:
        """(base ** exp) mod mod, exp >= 0, mod > 0, результат в [0, mod)."""

    @abstractmethod
    def gcd(self, a: str, b: str) -> str:
        """Наибольший общий делитель (>= 0); gcd(0, 0) == 0."""

    @abstractmethod
    def sqrt(self, n: str) -> str:
        """floor(sqrt(n)), n >= 0"""

    @abstractmethod
    def cmp(self, a: str, b: str) -> int:
        """Трёхстороннее сравнение: -1, 0 или 1."""

    # -------------------------------------------------------------------------
    # Обобщённые операции
    # -------------------------------------------------------------------------

    def sign(self, a: str) -> int:
        if a == "0":
            return 0
        return -1 if a[0] == "-" else 1

    def abs(self, a: str) -> str:
        return a[1:] if a[0] == "-" else a

    def neg(self, a: str) -> str:
        if a == "0":
            return a
        return a[1:] if a[0] == "-" else "-" + a

    def div_q(self, a: str, b: str) -> str:
        return self.div_q_r(a, b)[0]

    def div_r(self, a: str, b: str) -> str:
        return self.div_q_r(a, b)[1]

    def from_base(self, digits: str, radix: int) -> str:
        """
        Перевод неотрицательного числа из radix в десятичную строку.

        Args:
            digits: Цифры в нижнем регистре, без знака (валидированы вызывающим)
            radix: Основание 2..36

        Returns:
            Каноническая десятичная строка
        """
        width = _chunk_width(radix)
        head = len(digits) % width or width

        result = str(int(digits[:head], radix))
        multiplier = str(radix**width)

        for start in range(head, len(digits), width):
            chunk = int(digits[start : start + width], radix)
            result = self.add(self.mul(result, multiplier), str(chunk))

        return result

    def to_base(self, number: str, radix: int) -> str:
        """
        Перевод десятичной строки со знаком в radix (нижний регистр).

        Args:
            number: Каноническая десятичная строка
            radix: Основание 2..36

        Returns:
            Строка в системе счисления radix, с "-" для отрицательных
        """
        negative = number[0] == "-"
        remaining = self.abs(number)

        width = _chunk_width(radix)
        divisor = str(radix**width)

        chunks = []
        while self.cmp(remaining, divisor) >= 0:
            remaining, chunk = self.div_q_r(remaining, divisor)
            chunks.append(_small_to_base(int(chunk), radix).rjust(width, "0"))

        chunks.append(_small_to_base(int(remaining), radix))
        result = "".join(reversed(chunks))

        return "-" + result if negative else result

    def div_round(self, a: str, b: str, rounding_mode: RoundingMode) -> str:
        """
        Деление с округлением частного по RoundingMode.

        Алгоритм:
            1. q, r = div_q_r(a, b) (усечение к нулю)
            2. r == 0 → q точное
            3. иначе по режиму решаем, увеличивать ли |q| на 1 (от нуля),
               исходя из знака истинного частного, сравнения |2r| с |b|
               и, для HALF_EVEN, чётности последней цифры q

        Raises:
            RoundingNecessary: если режим UNNECESSARY и r != 0
        """
        quotient, remainder = self.div_q_r(a, b)

        if remainder == "0":
            return quotient

        if rounding_mode == RoundingMode.UNNECESSARY:
            raise RoundingNecessary(
                f"Division {a} / {b} is not exact; rounding is necessary"
            )

        # Знак истинного частного (a != 0, так как остаток ненулевой)
        is_positive = (a[0] == "-") == (b[0] == "-")

        # -1: отброшено меньше половины, 0: ровно половина, 1: больше половины
        discarded = self.cmp(self.mul(self.abs(remainder), "2"), self.abs(b))

        is_even = int(quotient[-1]) % 2 == 0

        if rounding_mode == RoundingMode.UP:
            increment = True
        elif rounding_mode == RoundingMode.DOWN:
            increment = False
        elif rounding_mode == RoundingMode.CEILING:
            increment = is_positive
        elif rounding_mode == RoundingMode.FLOOR:
            increment = not is_positive
        elif rounding_mode == RoundingMode.HALF_UP:
            increment = discarded >= 0
        elif rounding_mode == RoundingMode.HALF_DOWN:
            increment = discarded > 0
        elif rounding_mode == RoundingMode.HALF_CEILING:
            increment = discarded > 0 or (discarded == 0 and is_positive)
        elif rounding_mode == RoundingMode.HALF_FLOOR:
            increment = discarded > 0 or (discarded == 0 and not is_positive)
        elif rounding_mode == RoundingMode.HALF_EVEN:
            increment = discarded > 0 or (discarded == 0 and not is_even)
        else:
            raise ValueError(f"Unknown rounding mode: {rounding_mode!r}")

        if increment:
            return self.add(quotient, "1" if is_positive else "-1")

        return quotient
