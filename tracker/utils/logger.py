import logging
import sys
from datetime import datetime
from pathlib import Path

from tracker.config import Config

PACKAGE_LOGGER = 'tracker'

def _configure_package_logger(package_logger: logging.Logger):
    log_level = logging.DEBUG if Config.DEBUG else logging.INFO
    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    # One file per day; the file always records debug output
    log_dir = Path(Config.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(
        log_dir / f'tracker_{datetime.now().strftime("%Y%m%d")}.log',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    package_logger.addHandler(file_handler)

def setup_logger(name: str) -> logging.Logger:
    """
    Get a logger for a tracker module.

    The first call attaches the stdout and daily file handlers to the
    'tracker' package logger. Every tracker.* logger, including the plain
    logging.getLogger(__name__) loggers in services and cogs, propagates to it.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        _configure_package_logger(package_logger)

    return logging.getLogger(name)
