"""Port interface for schema version tracking."""

from collections.abc import Callable
from typing import Any, Protocol

from schemaseq.ports.db_session import DbSessionPort

LogFunc = Callable[..., None]
"""Log sink taking a ``str.format`` style message and positional args."""


class VersionAdapterPort(Protocol):
    """Protocol for persisting and querying the schema version.

    Implementations raise StorageError from the three database
    operations. ``log`` must never raise.
    """

    def log(self, message: str, *args: Any) -> None:
        """Emit a diagnostic message to the configured sink, if any."""
        ...

    async def ensure_store(self, db: DbSessionPort) -> None:
        """Create the version store if it does not exist yet."""
        ...

    async def current_version(self, db: DbSessionPort) -> int:
        """Return the version of the most recent transition, or 0."""
        ...

    async def record_version(
        self, db: DbSessionPort, version: int, upgrade: bool, comment: str
    ) -> None:
        """Append a record of a version transition."""
        ...
