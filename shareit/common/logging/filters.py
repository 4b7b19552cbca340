import logging

from colorama import Fore, Style


def _paint(text: str, color: str) -> str:
    return f'{color}{text}{Style.RESET_ALL}'


class UserFilter(logging.Filter):
    """Добавляет в запись поля user_plain и user_colored.

    Пользователь приходит в `extra={'user': 'USER #<id>'}`, без него
    запись помечается как SYSTEM.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        user = getattr(record, 'user', None)
        if isinstance(user, str) and user.strip() not in ('', 'SYSTEM'):
            record.user_plain = user.strip()
            record.user_colored = _paint(record.user_plain, Fore.CYAN)
        else:
            record.user_plain = 'SYSTEM'
            record.user_colored = _paint('SYSTEM', Fore.MAGENTA)
        return True
