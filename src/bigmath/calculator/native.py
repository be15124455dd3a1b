"""
NativeCalculator — программная арифметика на limb-ах (Backend A)

Не использует никаких bignum-средств среды исполнения: модуль числа
разбивается на группы по 9 десятичных цифр (limb, основание 10**9),
хранящиеся little-endian в списке. Все промежуточные значения в
алгоритмах ограничены BASE**2, т.е. помещаются в 64-битное слово.

Алгоритмы:
- сложение / вычитание: школьный алгоритм с переносом / заёмом
- умножение: школьная свёртка O(n*m) с нормализацией переноса
- деление: короткое деление для однолимбового делителя,
  иначе алгоритм D (Knuth, TAOCP vol. 2, 4.3.1) с нормализацией
- степень: бинарное возведение (repeated squaring)
- модульная степень: square-and-multiply с редукцией на каждом шаге
- gcd: алгоритм Евклида через примитив деления
- sqrt: итерация Ньютона от оценки сверху, результат проверяется
  инвариантом root**2 <= n < (root + 1)**2
"""

from typing import Final

from src.bigmath.calculator.base import Calculator

# =============================================================================
# LIMB PARAMETERS
# =============================================================================

LIMB_DIGITS: Final[int] = 9
BASE: Final[int] = 10**LIMB_DIGITS

Limbs = list[int]


# =============================================================================
# КОНВЕРСИЯ СТРОКА <-> LIMBS
# =============================================================================


def _to_limbs(magnitude: str) -> Limbs:
    """Разбиение модуля (без знака) на little-endian limb-ы."""
    limbs = []
    end = len(magnitude)
    while end > 0:
        start = max(0, end - LIMB_DIGITS)
        limbs.append(int(magnitude[start:end]))
        end = start
    return _trim(limbs)


def _from_limbs(limbs: Limbs) -> str:
    """Сборка канонической строки модуля из limb-ов."""
    limbs = _trim(limbs)
    head = str(limbs[-1])
    tail = "".join(f"{limb:09d}" for limb in reversed(limbs[:-1]))
    return head + tail


def _trim(limbs: Limbs) -> Limbs:
    """Удаление старших нулевых limb-ов (ноль — это [0])."""
    while len(limbs) > 1 and limbs[-1] == 0:
        limbs.pop()
    if not limbs:
        limbs.append(0)
    return limbs


def _is_zero(limbs: Limbs) -> bool:
    return len(limbs) == 1 and limbs[0] == 0


# =============================================================================
# ОПЕРАЦИИ НАД МОДУЛЯМИ
# =============================================================================


def _cmp_limbs(a: Limbs, b: Limbs) -> int:
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1

    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1

    return 0


def _add_limbs(a: Limbs, b: Limbs) -> Limbs:
    if len(a) < len(b):
        a, b = b, a

    result = []
    carry = 0
    for i in range(len(a)):
        total = a[i] + (b[i] if i < len(b) else 0) + carry
        if total >= BASE:
            result.append(total - BASE)
            carry = 1
        else:
            result.append(total)
            carry = 0

    if carry:
        result.append(carry)

    return result


def _sub_limbs(a: Limbs, b: Limbs) -> Limbs:
    """a - b при условии |a| >= |b|."""
    result = []
    borrow = 0
    for i in range(len(a)):
        diff = a[i] - (b[i] if i < len(b) else 0) - borrow
        if diff < 0:
            result.append(diff + BASE)
            borrow = 1
        else:
            result.append(diff)
            borrow = 0

    return _trim(result)


def _mul_limbs(a: Limbs, b: Limbs) -> Limbs:
    if _is_zero(a) or _is_zero(b):
        return [0]

    result = [0] * (len(a) + len(b))
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        carry = 0
        for j, bj in enumerate(b):
            total = result[i + j] + ai * bj + carry
            carry, result[i + j] = divmod(total, BASE)
        k = i + len(b)
        while carry:
            total = result[k] + carry
            carry, result[k] = divmod(total, BASE)
            k += 1

    return _trim(result)


def _mul_small(a: Limbs, m: int) -> Limbs:
    """a * m, 0 <= m < BASE."""
    result = []
    carry = 0
    for limb in a:
        carry, digit = divmod(limb * m + carry, BASE)
        result.append(digit)
    if carry:
        result.append(carry)
    return _trim(result)


def _divmod_small(a: Limbs, d: int) -> tuple[Limbs, int]:
    """Короткое деление: a / d, 0 < d < BASE."""
    quotient = [0] * len(a)
    remainder = 0
    for i in range(len(a) - 1, -1, -1):
        current = remainder * BASE + a[i]
        quotient[i], remainder = divmod(current, d)
    return _trim(quotient), remainder


def _divmod_limbs(a: Limbs, b: Limbs) -> tuple[Limbs, Limbs]:
    """
    Деление модулей с остатком (b != 0).

    Knuth, алгоритм D. Делитель и делимое нормализуются множителем
    d = BASE // (b_top + 1), чтобы старший limb делителя был >= BASE / 2;
    тогда оценка qhat по двум старшим limb-ам ошибается не более чем на 2.
    """
    if _cmp_limbs(a, b) < 0:
        return [0], list(a)

    if len(b) == 1:
        quotient, remainder = _divmod_small(a, b[0])
        return quotient, [remainder]

    n = len(b)
    m = len(a) - n

    d = BASE // (b[-1] + 1)
    u = _mul_small(a, d) if d > 1 else list(a)
    v = _mul_small(b, d) if d > 1 else list(b)

    # u должен иметь ровно m + n + 1 limb-ов
    u = u + [0] * (m + n + 1 - len(u))

    v_top = v[n - 1]
    v_next = v[n - 2]
    quotient = [0] * (m + 1)

    for j in range(m, -1, -1):
        numerator = u[j + n] * BASE + u[j + n - 1]
        qhat, rhat = divmod(numerator, v_top)

        while qhat >= BASE or qhat * v_next > rhat * BASE + u[j + n - 2]:
            qhat -= 1
            rhat += v_top
            if rhat >= BASE:
                break

        # u[j .. j+n] -= qhat * v
        borrow = 0
        carry = 0
        for i in range(n):
            product = qhat * v[i] + carry
            carry, low = divmod(product, BASE)
            diff = u[i + j] - low - borrow
            if diff < 0:
                u[i + j] = diff + BASE
                borrow = 1
            else:
                u[i + j] = diff
                borrow = 0

        diff = u[j + n] - carry - borrow
        if diff < 0:
            # qhat оказался на единицу больше: откатываем добавлением v
            u[j + n] = diff + BASE
            qhat -= 1
            carry = 0
            for i in range(n):
                total = u[i + j] + v[i] + carry
                carry, u[i + j] = divmod(total, BASE)
            u[j + n] = (u[j + n] + carry) % BASE
        else:
            u[j + n] = diff

        quotient[j] = qhat

    remainder = _trim(u[:n])
    if d > 1:
        remainder, _ = _divmod_small(remainder, d)

    return _trim(quotient), remainder


def _pow_limbs(a: Limbs, e: int) -> Limbs:
    result = [1]
    base = a
    while e > 0:
        if e & 1:
            result = _mul_limbs(result, base)
        e >>= 1
        if e:
            base = _mul_limbs(base, base)
    return result


def _sqrt_limbs(n: Limbs) -> Limbs:
    """
    floor(sqrt(n)) итерацией Ньютона.

    Стартовая оценка x0 = BASE ** ceil(len(n) / 2) > sqrt(n); далее
    x_{k+1} = (x_k + n // x_k) // 2, пока последовательность убывает.
    """
    if _is_zero(n):
        return [0]

    x = [0] * ((len(n) + 1) // 2) + [1]
    while True:
        q, _ = _divmod_limbs(n, x)
        y, _ = _divmod_small(_add_limbs(x, q), 2)
        if _cmp_limbs(y, x) >= 0:
            break
        x = y

    return x


# =============================================================================
# CALCULATOR
# =============================================================================


class NativeCalculator(Calculator):
    """Программный backend: не зависит от внешних библиотек."""

    name = "native"

    @staticmethod
    def _split(a: str) -> tuple[bool, Limbs]:
        if a[0] == "-":
            return True, _to_limbs(a[1:])
        return False, _to_limbs(a)

    @staticmethod
    def _join(negative: bool, limbs: Limbs) -> str:
        magnitude = _from_limbs(limbs)
        if negative and magnitude != "0":
            return "-" + magnitude
        return magnitude

    def add(self, a: str, b: str) -> str:
        a_neg, a_mag = self._split(a)
        b_neg, b_mag = self._split(b)

        if a_neg == b_neg:
            return self._join(a_neg, _add_limbs(a_mag, b_mag))

        order = _cmp_limbs(a_mag, b_mag)
        if order == 0:
            return "0"
        if order > 0:
            return self._join(a_neg, _sub_limbs(a_mag, b_mag))
        return self._join(b_neg, _sub_limbs(b_mag, a_mag))

    def sub(self, a: str, b: str) -> str:
        return self.add(a, self.neg(b))

    def mul(self, a: str, b: str) -> str:
        a_neg, a_mag = self._split(a)
        b_neg, b_mag = self._split(b)
        return self._join(a_neg != b_neg, _mul_limbs(a_mag, b_mag))

    def div_q_r(self, a: str, b: str) -> tuple[str, str]:
        a_neg, a_mag = self._split(a)
        b_neg, b_mag = self._split(b)

        quotient, remainder = _divmod_limbs(a_mag, b_mag)

        return self._join(a_neg != b_neg, quotient), self._join(a_neg, remainder)

    def pow(self, a: str, e: int) -> str:
        negative, magnitude = self._split(a)
        return self._join(negative and e % 2 == 1, _pow_limbs(magnitude, e))

    def mod_pow(self, base: str, exp: str, mod: str) -> str:
        modulus = _to_limbs(mod)

        # Приводим основание к [0, mod)
        base_neg, base_mag = self._split(base)
        _, reduced = _divmod_limbs(base_mag, modulus)
        if base_neg and not _is_zero(reduced):
            reduced = _sub_limbs(modulus, reduced)

        # Двоичное представление показателя через повторное деление на 2
        exponent = _to_limbs(exp)
        bits = []
        while not _is_zero(exponent):
            exponent, bit = _divmod_small(exponent, 2)
            bits.append(bit)

        _, result = _divmod_limbs([1], modulus)
        for bit in reversed(bits):
            _, result = _divmod_limbs(_mul_limbs(result, result), modulus)
            if bit:
                _, result = _divmod_limbs(_mul_limbs(result, reduced), modulus)

        return _from_limbs(result)

    def gcd(self, a: str, b: str) -> str:
        _, x = self._split(a)
        _, y = self._split(b)

        while not _is_zero(y):
            _, r = _divmod_limbs(x, y)
            x, y = y, r

        return _from_limbs(x)

    def sqrt(self, n: str) -> str:
        return _from_limbs(_sqrt_limbs(_to_limbs(n)))

    def cmp(self, a: str, b: str) -> int:
        a_neg, a_mag = self._split(a)
        b_neg, b_mag = self._split(b)

        # "-0" не встречается, поэтому знак однозначно упорядочивает
        if a_neg != b_neg:
            return -1 if a_neg else 1

        order = _cmp_limbs(a_mag, b_mag)
        return -order if a_neg else order
