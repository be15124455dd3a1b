"""DB — пакетные операции записи через DB-API 2.0."""

from .bulk_operator import BulkDeleter, BulkInserter, BulkOperator

__all__ = [
    "BulkOperator",
    "BulkInserter",
    "BulkDeleter",
]
