"""
Calculator Resolution — выбор backend-а один раз на процесс

Стратегия:
1. Backend-ы перебираются в фиксированном порядке приоритета
   (по умолчанию: gmp → decimal → native)
2. Выбирается первый, чей is_available() вернул True
3. native доступен всегда и служит fallback
4. Выбранный экземпляр кэшируется на весь процесс и далее только читается

Переопределение (для детерминированных тестов по всем backend-ам):
- set_calculator(calc) — зафиксировать конкретный экземпляр
- set_calculator(None) — сбросить, следующий get_calculator() выполнит probe
- use_calculator(calc) — контекстный менеджер с восстановлением прежнего
"""

import logging
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final, Iterator, Mapping, Optional

from src.bigmath.calculator.base import Calculator
from src.bigmath.calculator.decimal_context import DecimalCalculator
from src.bigmath.calculator.gmp import GmpCalculator
from src.bigmath.calculator.native import NativeCalculator
from src.bigmath.errors import ArgumentError

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIG
# =============================================================================

# Переменная окружения с порядком backend-ов через запятую, например "decimal,native"
ENV_CALCULATOR: Final[str] = "BIGMATH_CALCULATOR"

BACKENDS: Final[dict[str, type[Calculator]]] = {
    GmpCalculator.name: GmpCalculator,
    DecimalCalculator.name: DecimalCalculator,
    NativeCalculator.name: NativeCalculator,
}


@dataclass(frozen=True)
class CalculatorConfig:
    """Конфигурация выбора backend-а.

    priority — имена backend-ов от самого быстрого к самому медленному.
    native добавляется в конец неявно, если его нет в списке.
    """

    priority: tuple[str, ...] = ("gmp", "decimal", "native")

    def __post_init__(self) -> None:
        unknown = [name for name in self.priority if name not in BACKENDS]
        if unknown:
            raise ArgumentError(
                f"Unknown calculator backend(s): {', '.join(unknown)}. "
                f"Expected one of: {', '.join(BACKENDS)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CalculatorConfig":
        """Конфигурация из BIGMATH_CALCULATOR (если задана), иначе default."""
        environ = os.environ if environ is None else environ
        raw = environ.get(ENV_CALCULATOR, "").strip()
        if not raw:
            return cls()

        names = tuple(part.strip().lower() for part in raw.split(",") if part.strip())
        return cls(priority=names)


# =============================================================================
# RESOLUTION
# =============================================================================


def detect_calculator(config: Optional[CalculatorConfig] = None) -> Calculator:
    """
    Probe backend-ов в порядке приоритета.

    Args:
        config: Конфигурация (default: CalculatorConfig.from_env())

    Returns:
        Новый экземпляр первого доступного backend-а
    """
    config = config or CalculatorConfig.from_env()

    priority = config.priority
    if NativeCalculator.name not in priority:
        priority = priority + (NativeCalculator.name,)

    for name in priority:
        backend = BACKENDS[name]
        if backend.is_available():
            logger.info("Using %s calculator backend", name)
            return backend()
        logger.debug("Calculator backend %s is not available, skipping", name)

    # native всегда доступен, сюда не доходим
    return NativeCalculator()


_instance: Optional[Calculator] = None
_lock = threading.Lock()


def get_calculator() -> Calculator:
    """Calculator процесса (probe при первом обращении)."""
    global _instance

    calculator = _instance
    if calculator is not None:
        return calculator

    with _lock:
        if _instance is None:
            _instance = detect_calculator()
        return _instance


def set_calculator(calculator: Optional[Calculator]) -> None:
    """
    Явное переопределение Calculator процесса.

    Args:
        calculator: Экземпляр backend-а или None для сброса
    """
    global _instance

    with _lock:
        _instance = calculator

    if calculator is not None:
        logger.info("Calculator backend overridden with %s", calculator.name)


@contextmanager
def use_calculator(calculator: Calculator) -> Iterator[Calculator]:
    """Временная подмена Calculator (восстанавливает прежний при выходе)."""
    global _instance

    with _lock:
        previous = _instance
        _instance = calculator

    try:
        yield calculator
    finally:
        with _lock:
            _instance = previous
