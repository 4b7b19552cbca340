"""Настройка логгера приложения 'app'.

Логгер пишет в консоль с цветами colorama и в файл
`logs/working.log` с ротацией.
"""
import logging
from logging.handlers import RotatingFileHandler
import os
import sys

from colorama import init

from shareit.common.logging.filters import UserFilter
from shareit.common.logging.formatters import ColoredFormatter
from shareit.config import COUNT_FILES, LOGS_DIR, MAX_BYTES


LOG_FORMAT = '%(asctime)s | %(levelname)s | {user} | %(message)s'
DATE_FORMAT = '%d-%m-%Y %H:%M:%S'
LEVEL_NAMES = {
    logging.WARNING: '⚠️ WARNING',
    logging.ERROR: '🛑 ERROR',
    logging.CRITICAL: '💀CRITICAL💀',
}


def _force_colors() -> None:
    """Оставляет цвета при выводе не в терминал, например в docker logs."""
    init(strip=False, autoreset=True)
    if not sys.stdout.isatty():
        os.environ.setdefault('FORCE_COLOR', '1')
        os.environ.setdefault('CLICOLOR_FORCE', '1')
        os.environ.setdefault('TERM', 'xterm-256color')


def _file_handler() -> logging.Handler:
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        LOGS_DIR / 'working.log',
        maxBytes=MAX_BYTES,
        backupCount=COUNT_FILES,
        encoding='utf-8',
    )
    handler.setFormatter(
        logging.Formatter(
            fmt=LOG_FORMAT.format(user='%(user_plain)s'),
            datefmt=DATE_FORMAT,
        ),
    )
    return handler


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ColoredFormatter(
            fmt=LOG_FORMAT.format(user='%(user_colored)s'),
            datefmt=DATE_FORMAT,
        ),
    )
    return handler


def setup_logger(name: str = 'app') -> logging.Logger:
    """Создаёт и настраивает логгер с консольным и файловым выводом."""
    _force_colors()
    for level, level_name in LEVEL_NAMES.items():
        logging.addLevelName(level, level_name)

    result = logging.getLogger(name)
    result.setLevel(logging.INFO)
    result.propagate = False
    if not result.handlers:
        result.addHandler(_file_handler())
        result.addHandler(_console_handler())
        result.addFilter(UserFilter())
    return result


logger = setup_logger()
