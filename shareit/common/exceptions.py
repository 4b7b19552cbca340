"""Исключения приложения.

Каждое исключение несёт HTTP-статус, машинный код ошибки и сообщение
для клиента. Обработчик из `exception_handlers` превращает их в ответ
`CustomErrorResponse`.
"""
from dataclasses import dataclass
from http import HTTPStatus
from typing import ClassVar, Optional


@dataclass
class AppException(Exception):
    """Базовое исключение приложения."""

    status_code: int
    code: int
    message: str
    error: str = 'AppException'

    def __str__(self) -> str:
        return f'{self.error}: {self.message}'


class HTTPAppException(AppException):
    """Исключение с фиксированным статусом и сообщением по умолчанию.

    Наследники переопределяют только атрибуты класса.
    """

    status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: ClassVar[str] = 'Внутренняя ошибка сервера.'
    default_error: ClassVar[str] = 'InternalServerError'

    def __init__(
        self,
        message: Optional[str] = None,
        error: Optional[str] = None,
    ) -> None:
        super().__init__(
            status_code=self.status,
            code=self.status,
            message=message or self.default_message,
            error=error or self.default_error,
        )


class InternalServerException(HTTPAppException):
    """Сбой на стороне сервера (HTTP 500)."""


class BadRequestException(HTTPAppException):
    """Ошибка в параметрах запроса (HTTP 400)."""

    status = HTTPStatus.BAD_REQUEST
    default_message = 'Ошибка в параметрах запроса'
    default_error = 'BadRequest'


class ForbiddenException(HTTPAppException):
    """Действие запрещено для этого пользователя (HTTP 403)."""

    status = HTTPStatus.FORBIDDEN
    default_message = 'Доступ запрещен'
    default_error = 'Forbidden'


class NotFoundException(HTTPAppException):
    status = HTTPStatus.NOT_FOUND
    default_message = 'Данные не найдены'
    default_error = 'NotFound'


class ConflictException(HTTPAppException):
    """Конфликт с текущим состоянием данных (HTTP 409)."""

    status = HTTPStatus.CONFLICT
    default_message = 'Конфликт данных'
    default_error = 'Conflict'


class UserNotFoundException(NotFoundException):
    def __init__(self, user_id: int, context: str = 'получения') -> None:
        super().__init__(
            message=(
                f'Ошибка {context}: пользователь с id={user_id} '
                'не существует.'
            ),
            error='UserNotFound',
        )


class ItemNotFoundException(NotFoundException):
    def __init__(self, item_id: int) -> None:
        super().__init__(
            message=f'Ошибка получения: вещь с id={item_id} не найдена.',
            error='ItemNotFound',
        )


class RequestNotFoundException(NotFoundException):
    def __init__(self, request_id: int) -> None:
        super().__init__(
            message=f'Запрос с id={request_id} на добавление вещи не найден.',
            error='RequestNotFound',
        )
