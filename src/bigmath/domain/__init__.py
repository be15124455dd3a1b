"""
Domain models для обмена точными числами.

Pydantic модели-обёртки над BigInteger / BigDecimal.
"""

from src.bigmath.domain.payloads import (
    CANONICAL_INTEGER_PATTERN,
    BigDecimalPayload,
    BigIntegerPayload,
)

__all__ = [
    "CANONICAL_INTEGER_PATTERN",
    "BigIntegerPayload",
    "BigDecimalPayload",
]
