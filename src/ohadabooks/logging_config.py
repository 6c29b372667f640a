"""Logging configuration for the command-line interface.

Environment variables:
- OHADABOOKS_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> None:
    """Send ohadabooks logs to stderr at the requested level.

    Args:
        level: Level name; falls back to OHADABOOKS_LOG_LEVEL, then WARNING
    """
    level_name = (level or os.environ.get("OHADABOOKS_LOG_LEVEL") or "WARNING").upper()
    log_level = getattr(logging, level_name, None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: '{level_name}'")

    global _handler
    logger = logging.getLogger("ohadabooks")
    logger.setLevel(log_level)
    if _handler is not None:
        logger.removeHandler(_handler)
    # Bind to the current stderr, which click swaps out under test.
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
