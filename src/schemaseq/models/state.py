"""Version store records."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class Direction(StrEnum):
    """Direction of a recorded version transition."""

    UP = "up"
    DOWN = "down"


class SchemaVersionRecord(BaseModel):
    """
    One row of the version store.

    Rows are append-only. The current schema version is the ``version`` of
    the row with the highest ``seq``, not the highest ``version``.
    """

    seq: int
    version: int = Field(ge=0)
    created_at: datetime | None = None
    upgrade: bool
    comment: str = ""

    model_config = {"frozen": True}

    @property
    def direction(self) -> Direction:
        """Direction of the transition that produced this row."""
        return Direction.UP if self.upgrade else Direction.DOWN
