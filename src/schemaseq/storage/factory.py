"""Version adapter factory.

Instantiates the TableAdapter preset matching config.migration.dialect.
"""

from typing import TYPE_CHECKING

from schemaseq.ports.version_adapter import LogFunc
from schemaseq.storage.table_adapter import (
    TableAdapter,
    mysql_adapter,
    postgresql_adapter,
    sqlite_adapter,
)

if TYPE_CHECKING:
    from schemaseq.config.models import Config

_PRESETS = {
    "postgresql": postgresql_adapter,
    "mysql": mysql_adapter,
    "sqlite": sqlite_adapter,
}


def create_adapter(config: "Config", log: LogFunc | None = None) -> TableAdapter:
    """Create the version adapter for the configured dialect.

    Args:
        config: Root configuration.
        log: Optional log sink passed through to the adapter.

    Returns:
        A TableAdapter using the dialect's placeholders and table options.
    """
    preset = _PRESETS[config.migration.dialect]
    return preset(log=log, table_name=config.migration.table_name)
