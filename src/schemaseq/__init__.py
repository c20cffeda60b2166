"""schemaseq: in-code SQL schema migrations applied at application startup.

Migrations are an ordered list of async up/down steps. The sequencer walks
that list against a version store kept in the database, so calling it on
every startup only applies what is missing.
"""

from loguru import logger

from schemaseq.errors import ConfigurationError, MigrationError, SchemaSeqError, StorageError
from schemaseq.models import Migration, MigrationFunc
from schemaseq.sequencer import downgrade_to, exec_statements, upgrade, upgrade_to
from schemaseq.storage import (
    TableAdapter,
    TableAdapterConfig,
    mysql_adapter,
    postgresql_adapter,
    sqlite_adapter,
)

__version__ = "0.1.0"

# Silent until the application opts in via configure_logging().
logger.disable("schemaseq")

__all__ = [
    "ConfigurationError",
    "Migration",
    "MigrationError",
    "MigrationFunc",
    "SchemaSeqError",
    "StorageError",
    "TableAdapter",
    "TableAdapterConfig",
    "__version__",
    "downgrade_to",
    "exec_statements",
    "mysql_adapter",
    "postgresql_adapter",
    "sqlite_adapter",
    "upgrade",
    "upgrade_to",
]
