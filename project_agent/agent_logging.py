"""Logging setup for the project agent."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "project_agent"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> logging.Logger:
    """Configure the package logger once.

    Args:
        level: Logging level name (e.g., "DEBUG", "INFO")
        log_file: Optional file to mirror log output to

    Returns:
        The package root logger
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if _configured:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _configured = True
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger or one of its children."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
