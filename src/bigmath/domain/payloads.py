"""
Payloads — модели обмена BigInteger / BigDecimal как простыми данными

Immutable Pydantic модели для передачи точных чисел через границы
системы (JSON, очереди, БД). Числа передаются строками: JSON number
не гарантирует точность за пределами double.

Соответствуют JSON Schema контрактам (contracts/schema/big_integer.json,
contracts/schema/big_decimal.json).
"""

from pydantic import BaseModel, Field, field_validator

from src.bigmath.big_decimal import BigDecimal
from src.bigmath.big_integer import BigInteger

# Каноническое десятичное целое со знаком (без ведущих нулей и "-0")
CANONICAL_INTEGER_PATTERN = r"^(0|-?[1-9][0-9]*)$"


class BigIntegerPayload(BaseModel):
    """
    BigInteger как строка в системе счисления radix.

    Пример: {"value": "-ff", "radix": 16}
    """

    # radix объявлен первым: валидатор value читает его из info.data
    radix: int = Field(10, ge=2, le=36, description="Основание системы счисления")
    value: str = Field(..., min_length=1, description="Цифры со знаком в системе radix")

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str, info) -> str:
        """Проверка, что строка разбирается в заданном radix"""
        radix = info.data.get("radix", 10)
        # NumberFormatError наследует ValueError: pydantic превращает его в ValidationError
        BigInteger.parse(v, radix)
        return v

    @classmethod
    def from_value(cls, value: BigInteger, radix: int = 10) -> "BigIntegerPayload":
        return cls(value=value.to_string(radix), radix=radix)

    def to_value(self) -> BigInteger:
        return BigInteger.parse(self.value, self.radix)


class BigDecimalPayload(BaseModel):
    """
    BigDecimal как пара (unscaled_value, scale).

    Пример: {"unscaled_value": "-150", "scale": 2} — это "-1.50"
    """

    unscaled_value: str = Field(
        ..., pattern=CANONICAL_INTEGER_PATTERN, description="Unscaled value (десятичное целое)"
    )
    scale: int = Field(..., ge=0, description="Число цифр после десятичной точки")

    model_config = {"frozen": True}

    @classmethod
    def from_value(cls, value: BigDecimal) -> "BigDecimalPayload":
        return cls(unscaled_value=str(value.unscaled_value), scale=value.scale)

    def to_value(self) -> BigDecimal:
        return BigDecimal.of_unscaled_value(BigInteger.parse(self.unscaled_value), self.scale)
