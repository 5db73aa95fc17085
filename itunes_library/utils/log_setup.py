#!/usr/bin/env python3
"""
Loguru sink configuration for command-line use.
"""

import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with one at the requested level.

    Args:
        level: Minimum level written to stderr.
        log_file: Optional file that receives DEBUG and above, rotated at 10 MB.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    if log_file:
        logger.add(log_file, level="DEBUG", rotation="10 MB", encoding="utf-8")
