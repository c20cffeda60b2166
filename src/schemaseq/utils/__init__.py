"""schemaseq utility modules."""

from schemaseq.utils.logging import configure_logging, loguru_log_func

__all__ = [
    "configure_logging",
    "loguru_log_func",
]
