"""Migration step definition."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from schemaseq.ports.db_session import DbSessionPort

MigrationFunc = Callable[[DbSessionPort], Awaitable[None]]
"""Async operation run against the caller's database session."""


@dataclass(frozen=True)
class Migration:
    """
    A single step in an ordered migration list.

    The step's version is its 1-based position in the list, so it is never
    stored on the object. Reordering or removing entries changes the version
    of every later step.

    Attributes:
        comment: Human description, stored with each version record.
        up: Applies the step (previous version -> this version).
        down: Reverts the step (this version -> previous version).
    """

    comment: str
    up: MigrationFunc
    down: MigrationFunc
