"""
bigmath — точная арифметика произвольной точности

Value types:
- BigInteger: неизменяемое целое произвольной длины
- BigDecimal: неизменяемое десятичное (unscaled BigInteger + scale >= 0)
- RoundingMode / DivisionMode: правила округления и деления

Арифметика над модулями выполняется Calculator-ом процесса (см.
src.bigmath.calculator); выбор backend-а не влияет на результаты.
"""

from src.bigmath.big_decimal import BigDecimal
from src.bigmath.big_integer import BigInteger
from src.bigmath.calculator import (
    Calculator,
    CalculatorConfig,
    DecimalCalculator,
    GmpCalculator,
    NativeCalculator,
    detect_calculator,
    get_calculator,
    set_calculator,
    use_calculator,
)
from src.bigmath.errors import (
    ArgumentError,
    DivisionByZero,
    InvalidExponent,
    MathError,
    NumberFormatError,
    RoundingNecessary,
)
from src.bigmath.rounding import DivisionMode, RoundingMode

__all__ = [
    # Value types
    "BigInteger",
    "BigDecimal",
    "RoundingMode",
    "DivisionMode",
    # Calculator
    "Calculator",
    "CalculatorConfig",
    "NativeCalculator",
    "GmpCalculator",
    "DecimalCalculator",
    "detect_calculator",
    "get_calculator",
    "set_calculator",
    "use_calculator",
    # Errors
    "MathError",
    "NumberFormatError",
    "DivisionByZero",
    "InvalidExponent",
    "RoundingNecessary",
    "ArgumentError",
]
