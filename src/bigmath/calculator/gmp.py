"""
GmpCalculator — адаптер к GMP через gmpy2 (Backend B)

Все операции делегируются в mpz. Результаты побитово совпадают с
NativeCalculator: деление усекает к нулю (t_divmod), powmod с
положительным модулем возвращает значение в [0, mod), gcd и isqrt
неотрицательны.

Модуль gmpy2 импортируется лениво при создании экземпляра: наличие
библиотеки проверяется через is_available() до инстанцирования.
"""

import importlib
import importlib.util

from src.bigmath.calculator.base import Calculator


class GmpCalculator(Calculator):
    """Backend на базе GMP (пакет gmpy2)."""

    name = "gmp"

    @classmethod
    def is_available(cls) -> bool:
        return importlib.util.find_spec("gmpy2") is not None

    def __init__(self) -> None:
        self._gmpy2 = importlib.import_module("gmpy2")
        self._mpz = self._gmpy2.mpz

    def add(self, a: str, b: str) -> str:
        return str(self._mpz(a) + self._mpz(b))

    def sub(self, a: str, b: str) -> str:
        return str(self._mpz(a) - self._mpz(b))

    def mul(self, a: str, b: str) -> str:
        return str(self._mpz(a) * self._mpz(b))

    def div_q_r(self, a: str, b: str) -> tuple[str, str]:
        q, r = self._gmpy2.t_divmod(self._mpz(a), self._mpz(b))
        return str(q), str(r)

    def pow(self, a: str, e: int) -> str:
        return str(self._mpz(a) ** e)

    def mod_pow(self, base: str, exp: str, mod: str) -> str:
        return str(self._gmpy2.powmod(self._mpz(base), self._mpz(exp), self._mpz(mod)))

    def gcd(self, a: str, b: str) -> str:
        return str(self._gmpy2.gcd(self._mpz(a), self._mpz(b)))

    def sqrt(self, n: str) -> str:
        return str(self._gmpy2.isqrt(self._mpz(n)))

    def cmp(self, a: str, b: str) -> int:
        x = self._mpz(a)
        y = self._mpz(b)
        return (x > y) - (x < y)

    def from_base(self, digits: str, radix: int) -> str:
        return str(self._mpz(digits, radix))

    def to_base(self, number: str, radix: int) -> str:
        return self._mpz(number).digits(radix)
