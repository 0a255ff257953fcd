"""
Logging setup - console + rotating file
"""
import logging
from logging.handlers import RotatingFileHandler
import os

from .config import settings

_configured = False


def setup_logging(level: int = logging.INFO) -> None:
    """Install console and rotating file handlers on the root logger (once)"""
    global _configured
    if _configured:
        return

    os.makedirs(settings.LOGS_PATH, exist_ok=True)

    # 10MB per file, keep 7 files
    file_handler = RotatingFileHandler(
        os.path.join(settings.LOGS_PATH, "warehouse.log"),
        maxBytes=10*1024*1024,
        backupCount=7,
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))

    # Disable noisy loggers BEFORE basicConfig
    logging.getLogger('sqlalchemy').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('apscheduler').setLevel(logging.WARNING)

    logging.basicConfig(level=level, handlers=[file_handler, console_handler])
    _configured = True
