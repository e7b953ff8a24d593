"""
Logging setup for the csfstudio command.

Only the command line logs. Library modules never configure logging, so
handlers are attached to the "csfstudio" package logger and not to root.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "csfstudio"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def parse_level(level: str) -> int:
    """Map "debug", "INFO", ... to a logging level number."""
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Send csfstudio log records to stderr, and to `log_file` when given.

    Handlers left by an earlier call are closed and replaced.

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(parse_level(level))
    return logger
