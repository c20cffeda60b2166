"""Pydantic configuration models for schemaseq."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from schemaseq.storage.table_adapter import DEFAULT_TABLE_NAME, validate_table_name


class MigrationConfig(BaseModel):
    """Migration run configuration."""

    dialect: Literal["postgresql", "mysql", "sqlite"] = "sqlite"
    table_name: str = DEFAULT_TABLE_NAME
    timeout_seconds: float | None = Field(default=None, gt=0.0, le=3600.0)

    @field_validator("table_name")
    @classmethod
    def check_table_name(cls, v: str) -> str:
        return validate_table_name(v)


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["console", "json"] = "console"
    file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"


class Config(BaseSettings):
    """Root configuration for schemaseq."""

    migration: MigrationConfig = Field(default_factory=MigrationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "SCHEMASEQ_",
        "env_nested_delimiter": "__",
    }
