"""
Logging Configuration
Loguru sinks shared by the command line scripts
"""

import os
import sys
from typing import Optional
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Replace loguru's default sink

    Args:
        level: Console level (defaults to $LOG_LEVEL or INFO)
        log_file: Optional rotating file sink
    """
    level = level or os.getenv('LOG_LEVEL', 'INFO')

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or '.', exist_ok=True)
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
