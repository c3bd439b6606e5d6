"""
Package logger.

All diagnostics go to stderr so that stdout only carries simulated responses.
"""

import logging
import os

LOG_FORMAT = "%(levelname)s %(message)s"

logger = logging.getLogger("mock_code")


def configure_logging(level: str = None) -> logging.Logger:
    """
    Attach the stderr handler and set the level.

    Args:
        level: Level name; falls back to MOCK_CODE_LOG_LEVEL, then WARNING
    """
    level = (level or os.getenv("MOCK_CODE_LOG_LEVEL") or "WARNING").upper()
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
