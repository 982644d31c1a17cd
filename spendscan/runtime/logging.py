"""Centralized logging configuration for spendscan.

Usage:
    from spendscan.runtime import get_logger
    logger = get_logger(__name__)

    logger.debug("Fallback applied")
    logger.info("Service call finished")

Pure modules (domain, receipt, analytics) log through logging.getLogger(__name__);
their names already sit under the "spendscan" namespace, so the handler
installed here covers them too.

Environment variables:
    SPENDSCAN_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO

LOG_NAMESPACE = "spendscan"
LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_handler: logging.Handler | None = None


def parse_log_level(value: str | int | None) -> int:
    """Map a level name (case-insensitive) or number to a logging level.

    Unknown names and None give DEFAULT_LOG_LEVEL.
    """
    if isinstance(value, int):
        return value
    if value is None:
        return DEFAULT_LOG_LEVEL
    return LEVEL_NAMES.get(value.strip().upper(), DEFAULT_LOG_LEVEL)


def _formatter(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: str | int | None = None) -> None:
    """Install the stderr handler on the spendscan namespace (once).

    Args:
        level: Level name or number. If None, reads SPENDSCAN_LOG_LEVEL.
    """
    global _handler

    if _handler is not None:
        return

    if level is None:
        level = os.environ.get("SPENDSCAN_LOG_LEVEL")
    resolved = parse_log_level(level)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(_formatter(resolved))

    namespace_logger = logging.getLogger(LOG_NAMESPACE)
    namespace_logger.setLevel(resolved)
    namespace_logger.addHandler(_handler)
    namespace_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the spendscan namespace, configuring logging on first use."""
    configure_logging()

    if name == LOG_NAMESPACE or name.startswith(f"{LOG_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOG_NAMESPACE}.{name}")


def set_log_level(level: str | int) -> None:
    """Change the log level at runtime (e.g. from the CLI --log-level flag)."""
    configure_logging()
    resolved = parse_log_level(level)
    logging.getLogger(LOG_NAMESPACE).setLevel(resolved)
    if _handler is not None:
        _handler.setFormatter(_formatter(resolved))
