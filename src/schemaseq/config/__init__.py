"""Configuration management for schemaseq."""

from schemaseq.config.loader import load_config
from schemaseq.config.models import Config, LoggingConfig, MigrationConfig

__all__ = ["Config", "LoggingConfig", "MigrationConfig", "load_config"]
