"""
Контракты JSON представлений точных чисел

BigInteger / BigDecimal пересекают границы системы (JSON, очереди, БД)
как простые данные. Форма этих данных зафиксирована JSON Schema
(Draft 2020-12) в каталоге schema/:

- big_integer.json: {"value": "-ff", "radix": 16}
- big_decimal.json: {"unscaled_value": "-150", "scale": 2}

Схема проверяет только форму. Цифры вне диапазона radix отлавливаются
при конверсии в BigInteger (см. domain.payloads).
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator, Mapping

import jsonschema
from jsonschema import Draft202012Validator
from pydantic import BaseModel

from src.bigmath.domain.payloads import BigDecimalPayload, BigIntegerPayload

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение и meta-валидация схем из каталога.

    Args:
        schema_dir: Каталог со схемами (default: schema/ рядом с модулем)

    Raises:
        RuntimeError: Каталог не существует
    """

    def __init__(self, schema_dir: Path | None = None):
        self.schema_dir = schema_dir or SCHEMA_DIR
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self.schema_dir}")

        self._cache: dict[str, dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> dict[str, Any]:
        """
        Схема по имени файла без расширения ('big_integer', 'big_decimal').

        Повторные вызовы возвращают тот же объект.

        Raises:
            FileNotFoundError: Файла схемы нет
            ValueError: Файл не является корректной JSON Schema
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"{path.name} is not a valid JSON Schema: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_DEFAULT_LOADER = SchemaLoader()


@lru_cache(maxsize=None)
def _compiled(schema_name: str) -> Draft202012Validator:
    return Draft202012Validator(_DEFAULT_LOADER.load_schema(schema_name))


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка данных по одной схеме из schema/."""

    schema_name: str = ""

    def __init__(self, schema_name: str | None = None):
        if schema_name is not None:
            self.schema_name = schema_name
        self.validator = _compiled(self.schema_name)

    @property
    def schema(self) -> dict[str, Any]:
        return self.validator.schema

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое (наиболее релевантное) нарушение
        """
        self.validator.validate(data)

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Mapping[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)

    def describe_errors(self, data: Mapping[str, Any]) -> list[str]:
        """
        Все нарушения в виде "<json path>: <сообщение>", отсортированные по пути.

        Пустой список — данные валидны.

        Examples:
            >>> BigDecimalValidator().describe_errors({"unscaled_value": "1", "scale": -1})
            ['$.scale: -1 is less than the minimum of 0']
        """
        errors = sorted(self.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
        return [f"{error.json_path}: {error.message}" for error in errors]


class BigIntegerValidator(ContractValidator):
    schema_name = "big_integer"


class BigDecimalValidator(ContractValidator):
    schema_name = "big_decimal"


_PAYLOAD_VALIDATORS: dict[type[BaseModel], type[ContractValidator]] = {
    BigIntegerPayload: BigIntegerValidator,
    BigDecimalPayload: BigDecimalValidator,
}


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_big_integer(data: Mapping[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Данные не соответствуют big_integer.json
    """
    BigIntegerValidator().validate(data)


def validate_big_decimal(data: Mapping[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Данные не соответствуют big_decimal.json
    """
    BigDecimalValidator().validate(data)


def validate_payload(payload: BaseModel) -> None:
    """
    Проверка сериализованной payload-модели по её контракту.

    Args:
        payload: BigIntegerPayload или BigDecimalPayload

    Raises:
        TypeError: Для модели нет контракта
        jsonschema.ValidationError: model_dump() не соответствует схеме
    """
    validator_cls = _PAYLOAD_VALIDATORS.get(type(payload))
    if validator_cls is None:
        raise TypeError(f"No contract is defined for {type(payload).__name__}")

    validator_cls().validate(payload.model_dump(mode="json"))
