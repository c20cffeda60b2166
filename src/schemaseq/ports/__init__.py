"""Port interfaces for schemaseq.

Ports define the contracts the sequencer depends on. The database session
is owned by the application; version adapters decide how schema versions
are persisted for a given database engine.
"""

from schemaseq.ports.db_session import DbSessionPort
from schemaseq.ports.version_adapter import LogFunc, VersionAdapterPort

__all__ = [
    "DbSessionPort",
    "LogFunc",
    "VersionAdapterPort",
]
