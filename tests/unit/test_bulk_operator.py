"""
Тесты для BulkInserter / BulkDeleter

Проверяет:
1. Генерацию SQL для пакета записей
2. Выполнение пакета при заполнении буфера и flush() остатка
3. Группировку запросов в транзакции (commit каждые N запросов / каждый запрос)
4. Передачу BigInteger / BigDecimal строкой без потери точности
5. Валидацию аргументов

Используется sqlite3 (DB-API 2.0, paramstyle qmark).
"""

import logging
import sqlite3

import pytest

from src.bigmath import BigDecimal, BigInteger
from src.db import BulkDeleter, BulkInserter


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE ledger (id INTEGER, amount TEXT)")
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def database(tmp_path):
    """Файловая БД: второе соединение видит только закоммиченные строки"""
    path = tmp_path / "ledger.db"
    writer = sqlite3.connect(path)
    writer.execute("CREATE TABLE ledger (id INTEGER, amount TEXT)")
    writer.commit()
    reader = sqlite3.connect(path)
    yield writer, reader
    reader.close()
    writer.close()


def _count(conn) -> int:
    cursor = conn.execute("SELECT COUNT(*) FROM ledger")
    try:
        return cursor.fetchall()[0][0]
    finally:
        cursor.close()


# =============================================================================
# QUERIES
# =============================================================================


class TestQueries:
    """Тесты генерации SQL"""

    def test_insert_query(self, connection) -> None:
        inserter = BulkInserter(connection, "ledger", ["id", "amount"], operations_per_query=2)
        assert inserter.get_query(2) == "INSERT INTO ledger (id, amount) VALUES (?, ?), (?, ?)"
        assert inserter.get_query(1) == "INSERT INTO ledger (id, amount) VALUES (?, ?)"

    def test_delete_query(self, connection) -> None:
        deleter = BulkDeleter(connection, "ledger", ["id", "amount"])
        assert deleter.get_query(2) == (
            "DELETE FROM ledger WHERE (id = ? AND amount = ?) OR (id = ? AND amount = ?)"
        )

    def test_custom_placeholder(self, connection) -> None:
        inserter = BulkInserter(connection, "ledger", ["id"], placeholder="%s")
        assert inserter.get_query(3) == "INSERT INTO ledger (id) VALUES (%s), (%s), (%s)"


# =============================================================================
# ARGUMENTS
# =============================================================================


class TestArguments:
    """Тесты валидации аргументов"""

    def test_operations_per_query_must_be_positive(self, connection) -> None:
        with pytest.raises(ValueError):
            BulkInserter(connection, "ledger", ["id"], operations_per_query=0)

    def test_queries_per_transaction_non_negative(self, connection) -> None:
        with pytest.raises(ValueError):
            BulkInserter(connection, "ledger", ["id"], queries_per_transaction=-1)

    def test_fields_required(self, connection) -> None:
        with pytest.raises(ValueError):
            BulkInserter(connection, "ledger", [])

    def test_value_count_mismatch_keeps_buffer(self, connection) -> None:
        """Ошибочный queue() не портит буфер"""
        inserter = BulkInserter(connection, "ledger", ["id", "amount"], operations_per_query=2)
        inserter.queue(1, "a")

        with pytest.raises(ValueError):
            inserter.queue(2)

        assert inserter.queue(2, "b") is True
        assert _count(connection) == 2


# =============================================================================
# EXECUTION
# =============================================================================


class TestExecution:
    """Тесты выполнения пакетов"""

    def test_batches_and_flush(self, connection) -> None:
        inserter = BulkInserter(connection, "ledger", ["id", "amount"], operations_per_query=3)

        assert inserter.queue(1, "a") is False
        assert inserter.queue(2, "b") is False
        assert inserter.queue(3, "c") is True
        assert _count(connection) == 3

        assert inserter.queue(4, "d") is False
        assert _count(connection) == 3

        inserter.flush()
        assert _count(connection) == 4
        assert inserter.row_count == 4

    def test_flush_without_pending_operations(self, connection) -> None:
        inserter = BulkInserter(connection, "ledger", ["id"])
        inserter.flush()
        assert inserter.row_count == 0

    def test_exact_values_stored_as_text(self, connection) -> None:
        """BigInteger / BigDecimal попадают в БД в plain-нотации"""
        huge = BigInteger(10).power(40).add(1)
        with BulkInserter(connection, "ledger", ["id", "amount"]) as inserter:
            inserter.queue(1, BigDecimal("1.50"))
            inserter.queue(2, BigDecimal("-0.000001"))
            inserter.queue(3, huge)

        rows = connection.execute("SELECT amount FROM ledger ORDER BY id").fetchall()
        assert [row[0] for row in rows] == [
            "1.50",
            "-0.000001",
            "10000000000000000000000000000000000000001",
        ]
        assert BigDecimal(rows[0][0]).is_identical(BigDecimal("1.50"))

    def test_context_manager_skips_flush_on_error(self, connection) -> None:
        with pytest.raises(RuntimeError):
            with BulkInserter(connection, "ledger", ["id"]) as inserter:
                inserter.queue(1)
                raise RuntimeError("abort")

        assert _count(connection) == 0

    def test_deleter(self, connection) -> None:
        with BulkInserter(connection, "ledger", ["id", "amount"]) as inserter:
            for i in range(5):
                inserter.queue(i, str(i))

        deleter = BulkDeleter(connection, "ledger", ["id", "amount"], operations_per_query=2)
        deleter.queue(0, "0")
        deleter.queue(2, "2")
        deleter.queue(4, "4")
        deleter.queue(9, "9")
        deleter.flush()

        assert deleter.row_count == 3
        remaining = [row[0] for row in connection.execute("SELECT id FROM ledger ORDER BY id")]
        assert remaining == [1, 3]

    def test_logs_executed_queries(self, connection, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="src.db.bulk_operator")
        with BulkInserter(connection, "ledger", ["id"]) as inserter:
            inserter.queue(1)

        assert "Executed bulk query on ledger: 1 operation(s), 1 row(s) affected" in caplog.text


# =============================================================================
# TRANSACTIONS
# =============================================================================


class TestTransactions:
    """Тесты группировки запросов в транзакции"""

    def test_commit_every_n_queries(self, database) -> None:
        writer, reader = database
        inserter = BulkInserter(
            writer, "ledger", ["id"], operations_per_query=1, queries_per_transaction=2
        )

        inserter.queue(1)
        assert _count(reader) == 0

        inserter.queue(2)
        assert _count(reader) == 2

        inserter.queue(3)
        assert _count(reader) == 2

        inserter.flush()
        assert _count(reader) == 3

    def test_commit_every_query(self, database) -> None:
        """queries_per_transaction == 0: commit после каждого запроса"""
        writer, reader = database
        inserter = BulkInserter(
            writer, "ledger", ["id"], operations_per_query=2, queries_per_transaction=0
        )

        inserter.queue(1)
        assert _count(reader) == 0

        inserter.queue(2)
        assert _count(reader) == 2

    def test_single_transaction_until_flush(self, database) -> None:
        writer, reader = database
        inserter = BulkInserter(writer, "ledger", ["id"], operations_per_query=1)

        for i in range(4):
            inserter.queue(i)
        assert _count(reader) == 0

        inserter.flush()
        assert _count(reader) == 4
