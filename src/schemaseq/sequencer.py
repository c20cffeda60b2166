"""Migration sequencing.

Walks an ordered list of migrations against the version recorded by a
version adapter, running each pending step and recording the new version
after it succeeds. The first failure stops the walk, so the recorded
version always names the last step that completed.

Precondition: a single writer. Nothing here locks the version store, so
two processes migrating the same database at once can race.
"""

import asyncio
from collections.abc import Awaitable, Sequence
from typing import TypeVar

from loguru import logger

from schemaseq.errors import MigrationError, StorageError
from schemaseq.models.migration import Migration, MigrationFunc
from schemaseq.ports.db_session import DbSessionPort
from schemaseq.ports.version_adapter import VersionAdapterPort

T = TypeVar("T")


async def _bounded(awaitable: Awaitable[T], timeout: float | None) -> T:
    """Await with an optional deadline in seconds."""
    if timeout is None:
        return await awaitable
    async with asyncio.timeout(timeout):
        return await awaitable


def _check_target(target_version: int) -> None:
    if target_version < 0:
        raise ValueError(f"target version must be >= 0, got {target_version}")


async def _prepare(db: DbSessionPort, adapter: VersionAdapterPort, timeout: float | None) -> int:
    """Ensure the version store exists and return the current version."""
    try:
        await _bounded(adapter.ensure_store(db), timeout)
    except Exception as e:
        raise StorageError(f"error preparing schema versions: {e}") from e

    try:
        current_version = await _bounded(adapter.current_version(db), timeout)
    except Exception as e:
        raise StorageError(f"error querying current schema version: {e}") from e

    adapter.log("Current database version is {}", current_version)
    return current_version


def exec_statements(statements: Sequence[str]) -> MigrationFunc:
    """
    Build a migration function from a list of SQL statements.

    The returned function executes each statement in order. The first
    failure raises MigrationError carrying the zero-based index of the
    statement; earlier statements are not rolled back.

    Args:
        statements: SQL statements to execute.

    Returns:
        An async function usable as Migration.up or Migration.down.
    """
    queries = list(statements)

    async def run(db: DbSessionPort) -> None:
        for i, query in enumerate(queries):
            try:
                await db.execute(query)
            except Exception as e:
                raise MigrationError(f"error with query {i}: {e}", statement_index=i) from e

    return run


async def upgrade(
    db: DbSessionPort,
    adapter: VersionAdapterPort,
    migrations: Sequence[Migration],
    *,
    timeout: float | None = None,
) -> None:
    """Upgrade the database to the last migration in the list."""
    await upgrade_to(db, adapter, len(migrations), migrations, timeout=timeout)


async def upgrade_to(
    db: DbSessionPort,
    adapter: VersionAdapterPort,
    target_version: int,
    migrations: Sequence[Migration],
    *,
    timeout: float | None = None,
) -> None:
    """
    Upgrade the database to ``target_version``.

    Migrations at or below the current version are skipped. A target past
    the end of the list runs everything available.

    Args:
        db: Caller-owned database session.
        adapter: Version adapter for the database engine.
        target_version: Version to stop at (inclusive).
        migrations: Ordered migrations; version N is ``migrations[N - 1]``.
        timeout: Optional deadline in seconds for each database operation
            and each migration body.

    Raises:
        StorageError: The version store could not be prepared, read, or
            written.
        MigrationError: A migration's ``up`` failed; ``version`` is the
            step that failed.
    """
    _check_target(target_version)
    current_version = await _prepare(db, adapter, timeout)

    for i, migration in enumerate(migrations):
        version = i + 1
        if version <= current_version:
            continue
        if version > target_version:
            logger.debug("Reached target version {}", target_version)
            break

        adapter.log("Upgrading database to version {}", version)
        try:
            await _bounded(migration.up(db), timeout)
        except Exception as e:
            raise MigrationError(
                f"error upgrading database to version {version}: {e}", version=version
            ) from e

        try:
            await _bounded(
                adapter.record_version(db, version, True, migration.comment), timeout
            )
        except Exception as e:
            # The step already ran; a later run will apply it again.
            raise StorageError(
                f"error inserting schema version for version {version}: {e}", version=version
            ) from e
        logger.debug("Recorded schema version {} ({})", version, migration.comment)


async def downgrade_to(
    db: DbSessionPort,
    adapter: VersionAdapterPort,
    target_version: int,
    migrations: Sequence[Migration],
    *,
    timeout: float | None = None,
) -> None:
    """
    Downgrade the database to ``target_version``.

    There is deliberately no "downgrade everything" shortcut; pass 0 to
    revert every migration.

    Each reverted step is logged as "Downgrading database from version N"
    and recorded as a transition to version N-1, with the reverted
    migration's comment.

    A database recorded at a version past the end of ``migrations`` is
    refused before any step runs: the unknown steps cannot be reverted,
    so no record could describe the resulting schema.

    Args:
        db: Caller-owned database session.
        adapter: Version adapter for the database engine.
        target_version: Version to stop at; its migration stays applied.
        migrations: Ordered migrations; version N is ``migrations[N - 1]``.
        timeout: Optional deadline in seconds for each database operation
            and each migration body.

    Raises:
        StorageError: The version store could not be prepared, read, or
            written.
        MigrationError: A migration's ``down`` failed; ``version`` is the
            step that was being reverted, or the current version when the
            database is newer than the known migrations.
    """
    _check_target(target_version)
    current_version = await _prepare(db, adapter, timeout)

    if current_version > len(migrations) and current_version > target_version:
        raise MigrationError(
            f"database version {current_version} is newer than the {len(migrations)} "
            f"known migrations; cannot downgrade to version {target_version}",
            version=current_version,
        )

    for i in range(len(migrations) - 1, -1, -1):
        migration = migrations[i]
        version = i + 1
        if version > current_version:
            continue
        if version <= target_version:
            logger.debug("Reached target version {}", target_version)
            break

        adapter.log("Downgrading database from version {}", version)
        try:
            await _bounded(migration.down(db), timeout)
        except Exception as e:
            raise MigrationError(
                f"error downgrading database from version {version}: {e}", version=version
            ) from e

        try:
            await _bounded(
                adapter.record_version(db, version - 1, False, migration.comment), timeout
            )
        except Exception as e:
            raise StorageError(
                f"error inserting schema version for downgrade of version {version}: {e}",
                version=version,
            ) from e
        logger.debug("Recorded schema version {} (reverted {!r})", version - 1, migration.comment)
