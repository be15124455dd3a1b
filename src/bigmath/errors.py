"""
Errors — таксономия исключений bigmath

Все ошибки синхронные и немедленные: операция либо возвращает точный
результат, либо бросает исключение. Частичных или молча усечённых
результатов не бывает.

Каждое исключение дополнительно наследует ближайший встроенный класс
(ValueError, ZeroDivisionError, ArithmeticError), поэтому вызывающий код
может ловить как MathError, так и привычные built-in исключения.
"""


class MathError(Exception):
    """Базовый класс всех ошибок bigmath."""

    pass


class NumberFormatError(MathError, ValueError):
    """
    Некорректная строка при парсинге числа.

    Примеры: пустая строка, одиночный знак, пробелы внутри,
    символы вне алфавита, цифра вне диапазона для заданного radix.
    """

    pass


class DivisionByZero(MathError, ZeroDivisionError):
    """Нулевой делитель в divide / quotient / remainder / mod."""

    pass


class InvalidExponent(MathError, ValueError):
    """Отрицательный показатель степени в power / mod_power."""

    pass


class RoundingNecessary(MathError, ArithmeticError):
    """
    Требуется округление, но запрошен RoundingMode.UNNECESSARY.

    Возникает, когда частное (или значение после set_scale) не
    представимо точно в запрошенном scale.
    """

    pass


class ArgumentError(MathError, ValueError):
    """
    Недопустимый аргумент или комбинация аргументов.

    Примеры: radix вне [2, 36], отрицательный scale, отрицательный модуль,
    квадратный корень из отрицательного числа, неизвестный backend.
    """

    pass
