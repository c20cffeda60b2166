"""Version store implementations and database sessions."""

from schemaseq.storage.factory import create_adapter
from schemaseq.storage.sqlite_session import SQLiteSession, open_sqlite_session
from schemaseq.storage.table_adapter import (
    TableAdapter,
    TableAdapterConfig,
    mysql_adapter,
    postgresql_adapter,
    sqlite_adapter,
)

__all__ = [
    "SQLiteSession",
    "TableAdapter",
    "TableAdapterConfig",
    "create_adapter",
    "mysql_adapter",
    "open_sqlite_session",
    "postgresql_adapter",
    "sqlite_adapter",
]
