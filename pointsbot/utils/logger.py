import logging
import sys
from datetime import datetime
from pathlib import Path

from pointsbot.config import Config

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _file_handler(formatter: logging.Formatter):
    """Daily log file under Config.LOG_DIR, or None when file logging is off."""
    if not Config.LOG_DIR:
        return None

    log_dir = Path(Config.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(
        log_dir / f'points_bot_{datetime.now().strftime("%Y%m%d")}.log',
        encoding='utf-8'
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name: str) -> logging.Logger:
    """Setup a logger with console output and an optional daily file"""
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = logging.DEBUG if Config.DEBUG else logging.INFO
    logger.setLevel(log_level)
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = _file_handler(formatter)
    if file_handler:
        logger.addHandler(file_handler)

    return logger
