"""
Logging configuration for charforge.

Color-coded console output via colorama, optional plain-text file output.
"""

import logging
import sys
from typing import Optional
from colorama import Fore, Back, Style, init

init(autoreset=True)

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ('httpx', 'httpcore', 'werkzeug')


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level name.

    Colors:
    - DEBUG: Cyan
    - INFO: Green
    - WARNING: Yellow
    - ERROR: Red
    - CRITICAL: Red on white background
    """

    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, '')
        original_levelname = record.levelname
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            # Other handlers share the record
            record.levelname = original_levelname


def setup_logging(
    level: str = 'INFO',
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    use_colors: bool = True
) -> logging.Logger:
    """
    Configure the root logger for charforge.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        format_string: Optional custom format string
        use_colors: Whether to color console output (default: True)

    Returns:
        Configured root logger

    Example:
        logger = setup_logging(level='DEBUG', log_file='charforge.log')
    """
    if format_string is None:
        format_string = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    if use_colors:
        console_handler.setFormatter(ColoredFormatter(format_string))
    else:
        console_handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console_handler)

    # No colors in file output
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(file_handler)

    if numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger


def setup_logging_from_config(config) -> logging.Logger:
    """Configure logging from a charforge Config instance."""
    return setup_logging(level=config.log_level, log_file=config.log_file)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Logger name (usually __name__)
    """
    return logging.getLogger(name)


# Default logger for direct imports
logger = get_logger('charforge')


__all__ = ['setup_logging', 'setup_logging_from_config', 'get_logger', 'logger', 'ColoredFormatter']
