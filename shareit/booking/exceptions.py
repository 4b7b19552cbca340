import logging
from typing import NoReturn, Optional

from redis.exceptions import LockError
from sqlalchemy.exc import DatabaseError, IntegrityError

from shareit.booking.constants import (
    ERROR_MESSAGES,
    ERROR_STATUS,
    BookingError,
)
from shareit.common.exceptions import (
    AppException,
    ConflictException,
    HTTPAppException,
    InternalServerException,
)


logger = logging.getLogger('app')


class BookingException(AppException):
    """Отказ в операции с бронированием."""

    def __init__(
        self,
        reason: BookingError,
        message: Optional[str] = None,
    ) -> None:
        """Статус ответа определяется причиной отказа."""
        status = ERROR_STATUS[reason]
        super().__init__(
            status_code=status,
            code=status,
            message=message or ERROR_MESSAGES[reason],
            error=reason.value,
        )
        self.reason = reason


# Порядок важен: IntegrityError - наследник DatabaseError.
_INFRASTRUCTURE_ERRORS: tuple[
    tuple[type[Exception], str, type[HTTPAppException], str, str], ...
] = (
    (
        LockError,
        'Не удалось захватить блокировку при %s брони: %s',
        ConflictException,
        'Вещь сейчас бронируется другим запросом. Повторите попытку.',
        'Conflict',
    ),
    (
        IntegrityError,
        'Ошибка целостности данных при %s брони: %s',
        ConflictException,
        'Конфликт данных: возможно, нарушение ограничений.',
        'Conflict',
    ),
    (
        DatabaseError,
        'Ошибка базы данных при %s брони: %s',
        InternalServerException,
        'Временная ошибка базы данных. Попробуйте позже.',
        'DatabaseError',
    ),
)


def handle_booking_exceptions(
    e: Exception,
    user_id: int,
    action: str,
) -> NoReturn:
    """Переводит инфраструктурную ошибку в ответ API и логирует её.

    Args:
        e: Возникшее исключение.
        user_id: ID пользователя для логирования.
        action: Действие в предложном падеже ('создании', 'подтверждении').

    """
    extra = {'user': f'USER #{user_id}'}
    for error_type, template, exc_class, message, code in (
        _INFRASTRUCTURE_ERRORS
    ):
        if isinstance(e, error_type):
            logger.error(template, action, e, extra=extra)
            raise exc_class(message=message, error=code) from e

    logger.critical(
        'Неожиданная ошибка при %s брони: %s',
        action,
        e,
        extra=extra,
        exc_info=True,
    )
    raise InternalServerException() from e
