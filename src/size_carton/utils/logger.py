"""Logging setup shared by every size_carton module."""

import logging
import os

from size_carton.core.errors import ConfigError

LOG_LEVEL = os.getenv("SIZE_CARTON_LOG_LEVEL", "INFO").upper()
ROOT_LOGGER = "size_carton"

formatter = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)


def check_level(level: str) -> str:
    """Normalise a level name, raising ConfigError for unknown names."""
    name = str(level).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigError(f"Unknown log level: {level!r}")
    return name


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a logger under the size_carton hierarchy.

    The console handler is attached once, to the package root logger, so
    module loggers (``get_logger(__name__)``) propagate to it.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.setLevel(LOG_LEVEL if isinstance(logging.getLevelName(LOG_LEVEL), int) else "INFO")
        root.addHandler(console_handler)
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Change the package log level at runtime (CLI ``--log-level``).

    Raises:
        ConfigError: ``level`` is not a logging level name.
    """
    logging.getLogger(ROOT_LOGGER).setLevel(check_level(level))
