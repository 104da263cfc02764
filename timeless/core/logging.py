"""
Logging configuration
"""

import sys

from loguru import logger

from timeless.core.config import settings

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> | {extra}"
)


def setup_logging(level: str = None, json_logs: bool = None):
    """Replace loguru's default handler with one driven by settings"""
    logger.remove()

    level = level or settings.log_level
    json_logs = settings.log_json if json_logs is None else json_logs

    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=TEXT_FORMAT, colorize=True)


# Create logger instance
log = logger
