"""
Logging Configuration
Sets up the package logger for scripts and demos.
"""
import logging
import sys
from typing import Optional

from .runtime import settings


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'cachematrix' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG). Falls back to
            CACHEMATRIX_LOG_LEVEL, then logging.INFO.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = settings.log_level()
    if level is None:
        level = logging.INFO

    logger = logging.getLogger("cachematrix")
    logger.setLevel(level)

    # Avoid duplicate output when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
