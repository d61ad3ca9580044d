"""
Logging setup shared by every module.
"""

import logging
import sys

from chatty.core.config import get_settings

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a logger configured with the application's handler and level.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger
    """
    settings = get_settings()
    named_logger = logging.getLogger(name)
    if not named_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        named_logger.addHandler(handler)
        named_logger.propagate = False
    named_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    return named_logger


logger = setup_logger("chatty")
