"""
BulkOperator — пакетная вставка / удаление записей через DB-API 2.0

Операции накапливаются в буфере и выполняются одним запросом на
operations_per_query записей:

    INSERT INTO t (a, b) VALUES (?, ?), (?, ?), ...
    DELETE FROM t WHERE (a = ? AND b = ?) OR (a = ? AND b = ?) ...

Транзакции:
- queries_per_transaction > 0: commit после каждых N запросов и в flush()
- queries_per_transaction == 0: commit после каждого запроса

BigInteger / BigDecimal передаются в БД строкой в plain-нотации: драйверы
DB-API не знают этих типов, а строка сохраняет точность.

ВАЖНО: flush() обязателен после последнего queue(), иначе неполный
последний пакет и открытая транзакция будут потеряны.
"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Sequence

from src.bigmath import BigDecimal, BigInteger

logger = logging.getLogger(__name__)


def _bind(value: Any) -> Any:
    if isinstance(value, (BigInteger, BigDecimal)):
        return str(value)
    return value


class BulkOperator(ABC):
    """
    Базовый класс для BulkInserter и BulkDeleter.

    Args:
        connection: DB-API 2.0 соединение
        table: Имя таблицы
        fields: Имена полей
        operations_per_query: Число записей в одном запросе (>= 1)
        queries_per_transaction: Число запросов в транзакции (>= 0, 0 — без группировки)
        placeholder: Placeholder параметра для paramstyle драйвера ("?" или "%s")

    Raises:
        ValueError: Недопустимые operations_per_query / queries_per_transaction / fields
    """

    def __init__(
        self,
        connection: Any,
        table: str,
        fields: Sequence[str],
        operations_per_query: int = 1000,
        queries_per_transaction: int = sys.maxsize,
        placeholder: str = "?",
    ) -> None:
        if operations_per_query < 1:
            raise ValueError("The number of operations per query must be 1 or more.")

        if queries_per_transaction < 0:
            raise ValueError("The number of queries per transaction must be 0 or more.")

        if not fields:
            raise ValueError("At least one field is required.")

        self._connection = connection
        self.table = table
        self.fields = tuple(fields)
        self.placeholder = placeholder

        self._operations_per_query = operations_per_query
        self._queries_per_transaction = queries_per_transaction

        # Запрос для полного пакета строится один раз
        self._full_query = self.get_query(operations_per_query)

        self._buffer: list[Any] = []
        self._buffer_size = 0
        self._queries_in_transaction = 0
        self._row_count = 0

    @property
    def row_count(self) -> int:
        """Общее число затронутых строк."""
        return self._row_count

    def queue(self, *values: Any) -> bool:
        """
        Постановка операции в очередь.

        Returns:
            True, если пакет был синхронизирован с БД (для отображения прогресса)

        Raises:
            ValueError: Число значений не совпадает с числом полей
        """
        if len(values) != len(self.fields):
            raise ValueError("The number of values does not match the field count.")

        self._buffer.extend(_bind(value) for value in values)
        self._buffer_size += 1

        if self._buffer_size == self._operations_per_query:
            self._execute(self._full_query)
            return True

        return False

    def flush(self) -> None:
        """Выполнение оставшихся операций и commit текущей транзакции."""
        if self._buffer_size != 0:
            self._execute(self.get_query(self._buffer_size))

        if self._queries_in_transaction != 0:
            self._commit()

    def _execute(self, query: str) -> None:
        cursor = self._connection.cursor()
        try:
            cursor.execute(query, self._buffer)
            affected = cursor.rowcount
        finally:
            cursor.close()

        # rowcount == -1, если драйвер не может его определить
        if affected > 0:
            self._row_count += affected

        logger.debug(
            "Executed bulk query on %s: %d operation(s), %d row(s) affected",
            self.table,
            self._buffer_size,
            affected,
        )

        self._buffer = []
        self._buffer_size = 0

        if self._queries_per_transaction == 0:
            self._connection.commit()
            return

        self._queries_in_transaction += 1
        if self._queries_in_transaction == self._queries_per_transaction:
            self._commit()

    def _commit(self) -> None:
        self._connection.commit()
        logger.debug(
            "Committed %d bulk query(ies) on %s", self._queries_in_transaction, self.table
        )
        self._queries_in_transaction = 0

    def __enter__(self) -> "BulkOperator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.flush()

    @abstractmethod
    def get_query(self, num_records: int) -> str:
        """SQL запрос для num_records записей."""


class BulkInserter(BulkOperator):
    """Пакетная вставка: INSERT INTO t (a, b) VALUES (?, ?), (?, ?), ..."""

    def get_query(self, num_records: int) -> str:
        columns = ", ".join(self.fields)
        row = "(" + ", ".join([self.placeholder] * len(self.fields)) + ")"
        rows = ", ".join([row] * num_records)
        return f"INSERT INTO {self.table} ({columns}) VALUES {rows}"


class BulkDeleter(BulkOperator):
    """Пакетное удаление: DELETE FROM t WHERE (a = ? AND b = ?) OR (...)"""

    def get_query(self, num_records: int) -> str:
        condition = " AND ".join(f"{field} = {self.placeholder}" for field in self.fields)
        conditions = " OR ".join([f"({condition})"] * num_records)
        return f"DELETE FROM {self.table} WHERE {conditions}"
