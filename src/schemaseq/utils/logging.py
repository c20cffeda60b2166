"""Logging configuration using loguru.

The package logger is disabled on import so that running migrations
stays silent in applications that never configure it. Calling
configure_logging() enables it and routes stdlib logging through
loguru as well.
"""

import logging
import sys
from typing import Any

from loguru import logger

from schemaseq.config.models import LoggingConfig
from schemaseq.ports.version_adapter import LogFunc


class _InterceptHandler(logging.Handler):
    """Route standard library logging through loguru.

    Database drivers (asyncpg, aiomysql, etc.) log through the stdlib
    logging module; this keeps their output in the same sinks.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Map stdlib level to loguru level
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller frame (skip logging internals)
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(config: LoggingConfig) -> None:
    """
    Configure loguru logger based on configuration.

    This is an application-level switch. It replaces every loguru handler
    and every handler on the stdlib root logger (``basicConfig(force=True)``)
    with one that forwards to loguru, so call it once at startup and only
    when loguru should own all log output.

    Args:
        config: LoggingConfig with level, format, and file settings.
    """
    # Remove default handler
    logger.remove()

    # Determine format
    if config.format == "json":
        fmt = "{message}"
        serialize = True
    else:
        fmt = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )
        serialize = False

    logger.add(
        sys.stderr,
        format=fmt,
        level=config.level,
        serialize=serialize,
        colorize=config.format == "console",
    )

    if config.file:
        logger.add(
            config.file,
            format=fmt,
            level=config.level,
            serialize=serialize,
            rotation=config.rotation,
            retention=config.retention,
            compression="gz",
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    logger.enable("schemaseq")
    logger.debug("Logging configured: level={} format={}", config.level, config.format)


def loguru_log_func(level: str = "INFO") -> LogFunc:
    """
    Build an adapter log sink that writes to loguru.

    Messages use loguru's ``{}`` formatting, so sequencer messages
    such as ``"Upgrading database to version {}"`` render as-is. Records
    are attributed to the schemaseq caller, so they are only emitted once
    the package logger is enabled (see configure_logging).

    Args:
        level: loguru level name for every message.

    Returns:
        A LogFunc suitable for TableAdapter and the presets.
    """
    sink = logger.opt(depth=2)

    def log(message: str, *args: Any) -> None:
        sink.log(level, message, *args)

    return log
