"""
Logging helpers for the invoicer backend.

Every module obtains its logger through ``get_logger(__name__)`` so output
shares one format. Log high-level events (user signed up, invoice saved,
migration applied) and ids only: never passwords, hashes, or bearer tokens.
"""

import logging
from typing import Optional

PACKAGE_LOGGER = "invoicer"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger for the given module.

    Args:
        name: Module name (typically __name__)
        level: Optional explicit level; otherwise inherited from the package logger

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger and set its level."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate handlers when create_app runs more than once (tests)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
