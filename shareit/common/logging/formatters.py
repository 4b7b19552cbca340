import logging

from colorama import Fore, Style


class ColoredFormatter(logging.Formatter):
    """Подсвечивает уровень записи в консоли."""

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA,
    }

    def format(self, record: logging.LogRecord) -> str:
        # Красим копию: исходная запись уходит и в файловый хендлер.
        painted = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, Fore.WHITE)
        painted.levelname = f'{color}{record.levelname}{Style.RESET_ALL}'
        return super().format(painted)
