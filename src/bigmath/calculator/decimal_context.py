"""
DecimalCalculator — адаптер к стандартному модулю decimal (Backend C)

Модуль decimal (libmpdec) работает с десятичными числами произвольной
длины. Для точной целочисленной арифметики используется контекст с
максимальной точностью (prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN),
в котором Inexact и Rounded переведены в исключения: любая потеря
точности — ошибка, а не тихое округление.

ВАЖНО: используются только операции с точным результатом (add,
subtract, multiply, divide_int, remainder, целочисленный power).
Неточные операции (divide, sqrt) при MAX_PREC пытаются выделить память
под MAX_PREC цифр, поэтому целочисленный корень вычисляется итерацией
Ньютона поверх divide_int.

Операции могут вернуть Decimal("-0"): он нормализуется в "0".

Арифметические операторы Decimal (+, abs(), //) работают в глобальном
контексте потока (prec=28), поэтому вся арифметика идёт через методы
self._context, а модуль берётся через copy_abs().
"""

import decimal
import importlib.util
from decimal import Decimal

from src.bigmath.calculator.base import Calculator


def _exact_context() -> decimal.Context:
    return decimal.Context(
        prec=decimal.MAX_PREC,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Inexact, decimal.Rounded],
    )


class DecimalCalculator(Calculator):
    """Backend на базе libmpdec (C-реализация модуля decimal)."""

    name = "decimal"

    @classmethod
    def is_available(cls) -> bool:
        # Чистая Python-реализация (_pydecimal) не даёт выигрыша перед native
        return importlib.util.find_spec("_decimal") is not None

    def __init__(self) -> None:
        self._context = _exact_context()

    @staticmethod
    def _str(value: Decimal) -> str:
        if not value:
            return "0"
        return format(value, "f")

    def add(self, a: str, b: str) -> str:
        return self._str(self._context.add(Decimal(a), Decimal(b)))

    def sub(self, a: str, b: str) -> str:
        return self._str(self._context.subtract(Decimal(a), Decimal(b)))

    def mul(self, a: str, b: str) -> str:
        return self._str(self._context.multiply(Decimal(a), Decimal(b)))

    def div_q_r(self, a: str, b: str) -> tuple[str, str]:
        x = Decimal(a)
        y = Decimal(b)
        q = self._context.divide_int(x, y)
        r = self._context.remainder(x, y)
        return self._str(q), self._str(r)

    def pow(self, a: str, e: int) -> str:
        # decimal считает 0 ** 0 InvalidOperation
        if e == 0:
            return "1"
        return self._str(self._context.power(Decimal(a), Decimal(e)))

    def mod_pow(self, base: str, exp: str, mod: str) -> str:
        if exp == "0":
            return "0" if mod == "1" else "1"

        modulus = Decimal(mod)
        # Трёхаргументный power: остаток имеет знак основания
        result = self._context.power(Decimal(base), Decimal(exp), modulus)
        if result < 0:
            result = self._context.add(result, modulus)
        return self._str(result)

    def gcd(self, a: str, b: str) -> str:
        x = Decimal(a).copy_abs()
        y = Decimal(b).copy_abs()
        while y:
            x, y = y, self._context.remainder(x, y)
        return self._str(x)

    def sqrt(self, n: str) -> str:
        value = Decimal(n)
        if not value:
            return "0"

        # Оценка сверху: 10 ** ceil(digits / 2) > sqrt(n)
        x = self._context.power(Decimal(10), Decimal((len(n) + 1) // 2))
        two = Decimal(2)
        while True:
            y = self._context.divide_int(
                self._context.add(x, self._context.divide_int(value, x)), two
            )
            if y >= x:
                return self._str(x)
            x = y

    def cmp(self, a: str, b: str) -> int:
        return int(self._context.compare(Decimal(a), Decimal(b)))
