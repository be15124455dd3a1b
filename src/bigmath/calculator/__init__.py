"""
Calculator backends и их выбор.

- NativeCalculator: программная реализация на limb-ах (всегда доступна)
- GmpCalculator: GMP через gmpy2
- DecimalCalculator: libmpdec через стандартный модуль decimal
"""

from src.bigmath.calculator.base import ALPHABET, MAX_RADIX, MIN_RADIX, Calculator
from src.bigmath.calculator.decimal_context import DecimalCalculator
from src.bigmath.calculator.gmp import GmpCalculator
from src.bigmath.calculator.native import NativeCalculator
from src.bigmath.calculator.resolver import (
    BACKENDS,
    ENV_CALCULATOR,
    CalculatorConfig,
    detect_calculator,
    get_calculator,
    set_calculator,
    use_calculator,
)

__all__ = [
    # Interface
    "Calculator",
    "ALPHABET",
    "MIN_RADIX",
    "MAX_RADIX",
    # Backends
    "NativeCalculator",
    "GmpCalculator",
    "DecimalCalculator",
    "BACKENDS",
    # Resolution
    "ENV_CALCULATOR",
    "CalculatorConfig",
    "detect_calculator",
    "get_calculator",
    "set_calculator",
    "use_calculator",
]
