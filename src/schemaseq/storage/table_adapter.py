"""Table-based schema version tracking.

Version transitions are appended to a single table. The current version is
read from the row with the highest ``seq``, a monotonic sequence column, so
a downgrade followed by an upgrade is tracked by recency rather than by the
largest version number. Dialect differences are pure data held in
TableAdapterConfig.
"""

import re
from typing import Any

from loguru import logger
from pydantic import BaseModel, field_validator

from schemaseq.errors import StorageError
from schemaseq.models.state import SchemaVersionRecord
from schemaseq.ports.db_session import DbSessionPort
from schemaseq.ports.version_adapter import LogFunc

DEFAULT_TABLE_NAME = "schema_versions"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def validate_table_name(name: str) -> str:
    """Only allow plain (optionally schema-qualified) identifiers."""
    if not _IDENTIFIER.match(name):
        raise ValueError(f"invalid table name: {name!r}")
    return name


class TableAdapterConfig(BaseModel):
    """Dialect settings for TableAdapter."""

    table_name: str = DEFAULT_TABLE_NAME

    # Column definition for the monotonic ``seq`` primary key.
    sequence_column: str = "INTEGER PRIMARY KEY AUTOINCREMENT"

    # Arbitrary SQL appended to the CREATE TABLE statement
    # (a MySQL engine and charset, for instance).
    create_table_options: str = ""

    # Placeholders for the three INSERT values, in order:
    # version, upgrade flag, comment.
    placeholder_version: str = "?"
    placeholder_upgrade: str = "?"
    placeholder_comment: str = "?"

    model_config = {"frozen": True}

    @field_validator("table_name")
    @classmethod
    def check_table_name(cls, v: str) -> str:
        return validate_table_name(v)


class TableAdapter:
    """
    Version adapter backed by an append-only table.

    A row is inserted for every transition, in both directions. Rows are
    never updated or deleted.
    """

    def __init__(
        self, config: TableAdapterConfig | None = None, log: LogFunc | None = None
    ) -> None:
        self.config = config or TableAdapterConfig()
        self._log_func = log

    @property
    def table_name(self) -> str:
        return self.config.table_name

    def log(self, message: str, *args: Any) -> None:
        """Pass a message to the log function, if one was given."""
        if self._log_func is None:
            return
        try:
            self._log_func(message, *args)
        except Exception:
            logger.opt(exception=True).warning("Migration log sink raised; message dropped")

    def create_table_sql(self) -> str:
        cfg = self.config
        return f"""
            CREATE TABLE IF NOT EXISTS {cfg.table_name} (
                seq {cfg.sequence_column},
                version INT NOT NULL,
                created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                upgrade SMALLINT NOT NULL,
                comment TEXT NOT NULL
            ){cfg.create_table_options}
        """

    def select_version_sql(self) -> str:
        return f"SELECT version FROM {self.table_name} ORDER BY seq DESC LIMIT 1"

    def insert_version_sql(self) -> str:
        cfg = self.config
        return (
            f"INSERT INTO {cfg.table_name} (version, upgrade, comment) "
            f"VALUES ({cfg.placeholder_version}, {cfg.placeholder_upgrade}, "
            f"{cfg.placeholder_comment})"
        )

    async def ensure_store(self, db: DbSessionPort) -> None:
        """Create the version table if it does not exist."""
        try:
            async with db.transaction():
                await db.execute(self.create_table_sql())
        except Exception as e:
            raise StorageError(f"error creating table {self.table_name}: {e}") from e

    async def current_version(self, db: DbSessionPort) -> int:
        """Return the version from the most recently inserted row, or 0."""
        try:
            row = await db.fetchone(self.select_version_sql())
        except Exception as e:
            raise StorageError(f"error querying table {self.table_name}: {e}") from e
        if row is None:
            return 0
        return int(row[0])

    async def record_version(
        self, db: DbSessionPort, version: int, upgrade: bool, comment: str
    ) -> None:
        """Insert a row recording a transition to ``version``."""
        try:
            async with db.transaction():
                await db.execute(
                    self.insert_version_sql(),
                    [version, 1 if upgrade else 0, comment],
                )
        except Exception as e:
            raise StorageError(
                f"error inserting into table {self.table_name}: {e}", version=version
            ) from e

    async def history(self, db: DbSessionPort) -> list[SchemaVersionRecord]:
        """Return every recorded transition, oldest first."""
        try:
            rows = await db.fetchall(
                f"SELECT seq, version, created_at, upgrade, comment "
                f"FROM {self.table_name} ORDER BY seq"
            )
        except Exception as e:
            raise StorageError(f"error reading history from {self.table_name}: {e}") from e
        return [
            SchemaVersionRecord(
                seq=row[0],
                version=row[1],
                created_at=row[2],
                upgrade=bool(row[3]),
                comment=row[4],
            )
            for row in rows
        ]


def postgresql_adapter(
    log: LogFunc | None = None, table_name: str = DEFAULT_TABLE_NAME
) -> TableAdapter:
    """Create a TableAdapter for PostgreSQL drivers using ``$n`` placeholders."""
    return TableAdapter(
        TableAdapterConfig(
            table_name=table_name,
            sequence_column="BIGSERIAL PRIMARY KEY",
            placeholder_version="$1",
            placeholder_upgrade="$2",
            placeholder_comment="$3",
        ),
        log=log,
    )


def mysql_adapter(
    log: LogFunc | None = None, table_name: str = DEFAULT_TABLE_NAME
) -> TableAdapter:
    """Create a TableAdapter for MySQL, using InnoDB and a utf8mb4 charset."""
    return TableAdapter(
        TableAdapterConfig(
            table_name=table_name,
            sequence_column="BIGINT NOT NULL AUTO_INCREMENT PRIMARY KEY",
            create_table_options=" ENGINE=InnoDB DEFAULT CHARSET=utf8mb4",
        ),
        log=log,
    )


def sqlite_adapter(
    log: LogFunc | None = None, table_name: str = DEFAULT_TABLE_NAME
) -> TableAdapter:
    """Create a TableAdapter for SQLite."""
    return TableAdapter(TableAdapterConfig(table_name=table_name), log=log)
