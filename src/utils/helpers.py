"""
Utility Helper Functions
========================

Common utility functions used across the project.
"""

import sys
from datetime import datetime
from typing import Optional

from loguru import logger

from config import LOGS_DIR, get_config


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days"
):
    """
    Setup logging configuration.

    Level and log file default to the ``logging`` section of config.yaml.

    Args:
        level: Logging level
        log_file: Optional log file name, written under logs/
        rotation: Log rotation setting
        retention: Log retention setting
    """
    log_config = get_config().get("logging", {})
    level = level or log_config.get("level", "INFO")
    log_file = log_file or log_config.get("log_file")

    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    # Add file handler if specified
    if log_file:
        log_path = LOGS_DIR / log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation=rotation,
            retention=retention,
            compression="zip"
        )

    logger.info(f"Logging configured at {level} level")


def format_timestamp(value: datetime, format_str: str = "%d %b %Y, %I:%M %p") -> str:
    """Render a datetime for people reading a report or the result panel."""
    return value.strftime(format_str)
