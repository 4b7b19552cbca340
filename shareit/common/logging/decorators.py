import functools
import inspect
from typing import Any, Callable

from shareit.common.logging.config import logger


USER_KEYS = (
    'requester_id',
    'booker_id',
    'owner_id',
    'author_id',
    'user_id',
)
SERVICE_KEYS = frozenset({'session', 'cache', 'item', 'now'})


def _describe_call(kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Возвращает метку пользователя и параметры вызова для лога.

    Пользователь ищется по первому заполненному ключу из USER_KEYS,
    pydantic-схемы раскрываются в словари, служебные аргументы
    отбрасываются.
    """
    user = next(
        (
            f'USER #{kwargs[key]}'
            for key in USER_KEYS
            if kwargs.get(key) is not None
        ),
        'SYSTEM',
    )
    params = {
        key: (
            value.model_dump(exclude_none=True)
            if hasattr(value, 'model_dump') else value
        )
        for key, value in kwargs.items()
        if key not in SERVICE_KEYS
    }
    return user, params


class _ActionLog:
    """Записи начала, успеха и неудачи одного действия."""

    def __init__(
        self,
        action: str,
        kwargs: dict[str, Any],
        only_errors: bool,
    ) -> None:
        self.action = action
        self.only_errors = only_errors
        self.user, self.params = _describe_call(kwargs)

    def started(self) -> None:
        if self.only_errors:
            return
        suffix = f' | параметры: {self.params}' if self.params else ''
        logger.info(
            'Запуск 🚀 %s%s',
            self.action,
            suffix,
            extra={'user': self.user},
        )

    def succeeded(self) -> None:
        if not self.only_errors:
            logger.info(
                'Успешно ✅ %s',
                self.action,
                extra={'user': self.user},
            )

    def failed(self, error: Exception) -> None:
        logger.warning(
            'Неудача ❌ %s | %s',
            self.action,
            error,
            extra={'user': self.user},
        )


def log_action(action: str, only_errors: bool = False) -> Callable:
    """Декоратор логирования операций сервисного слоя.

    Пользователь и параметры берутся только из именованных аргументов,
    поэтому методы сервисов принимают их после `*`.

    Args:
        action: Описание действия для лога
        only_errors: Не логировать старт и успех

    Example:
        @log_action('Создание бронирования')
        async def add_booking(self, *, booking_in, booker_id, now=None):
            ...

    """

    def wrapper(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_inner(*args: Any, **kwargs: Any) -> Any:
                log = _ActionLog(action, kwargs, only_errors)
                log.started()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    log.failed(e)
                    raise
                log.succeeded()
                return result

            return async_inner

        @functools.wraps(func)
        def sync_inner(*args: Any, **kwargs: Any) -> Any:
            log = _ActionLog(action, kwargs, only_errors)
            log.started()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.failed(e)
                raise
            log.succeeded()
            return result

        return sync_inner

    return wrapper
