"""Logging configuration for bulkledger."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure and return the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env
            BULKLEDGER_LOG_LEVEL or WARNING.

    Returns:
        The configured "bulkledger" logger
    """
    log_level = (level or os.getenv("BULKLEDGER_LOG_LEVEL", "WARNING")).upper()
    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: '{log_level}'")

    logger = logging.getLogger("bulkledger")
    logger.setLevel(numeric_level)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    return logger
