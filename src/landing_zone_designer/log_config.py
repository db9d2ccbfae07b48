"""Loguru sink setup for the command-line runner."""

import os
import sys

from loguru import logger

DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(level: str = "") -> None:
    """Replace loguru's default handler with one stderr sink at the requested level."""
    level = (level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}")
