"""Domain models for schemaseq."""

from schemaseq.models.migration import Migration, MigrationFunc
from schemaseq.models.state import Direction, SchemaVersionRecord

__all__ = [
    "Direction",
    "Migration",
    "MigrationFunc",
    "SchemaVersionRecord",
]
