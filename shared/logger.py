"""
Logging configuration
"""

import logging
import sys
from pathlib import Path

from shared.config import Settings, settings

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Lowest level at which library loggers are shown
LIBRARY_LEVELS = {
    'asyncpg': logging.WARNING,
    'aiogram': logging.INFO,
    'aiohttp.access': logging.WARNING,
}


def resolve_level(config: Settings) -> int:
    """DEBUG=true wins over LOG_LEVEL; unknown names fall back to INFO"""
    name = 'DEBUG' if config.DEBUG else config.LOG_LEVEL.upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: Settings = settings) -> int:
    """
    Setup application logging

    Console output always, plus a file when LOG_FILE is set.

    Args:
        config: Settings to read DEBUG, LOG_LEVEL and LOG_FILE from

    Returns:
        Effective root level
    """
    level = resolve_level(config)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    handlers = [console_handler]

    if config.LOG_FILE:
        log_path = Path(config.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(level)
    for handler in handlers:
        root_logger.addHandler(handler)

    for name, library_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(max(library_level, level))

    logging.getLogger(__name__).info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"file={config.LOG_FILE or 'none'}, environment={config.ENVIRONMENT}"
    )
    return level
