"""
Contract Validation Module

Валидация JSON представлений BigInteger / BigDecimal по JSON Schema.
"""

from .validators import (
    BigDecimalValidator,
    BigIntegerValidator,
    ContractValidator,
    SchemaLoader,
    validate_big_decimal,
    validate_big_integer,
    validate_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BigIntegerValidator",
    "BigDecimalValidator",
    # Functions
    "validate_big_integer",
    "validate_big_decimal",
    "validate_payload",
]
