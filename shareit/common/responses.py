"""Описания ошибочных ответов для OpenAPI-схемы эндпоинтов."""

from http import HTTPStatus
from typing import Any, Dict

from shareit.common.schemas import CustomErrorResponse


Responses = Dict[int | str, Dict[str, Any]]

ERROR_DESCRIPTIONS: dict[HTTPStatus, str] = {
    HTTPStatus.BAD_REQUEST: 'Ошибка в параметрах запроса',
    HTTPStatus.FORBIDDEN: 'Доступ запрещен',
    HTTPStatus.NOT_FOUND: 'Данные не найдены',
    HTTPStatus.CONFLICT: 'Конфликт с текущим состоянием данных',
    HTTPStatus.UNPROCESSABLE_ENTITY: 'Ошибка валидации данных',
}


def error_responses(*statuses: HTTPStatus) -> Responses:
    """Собирает `responses` для декоратора эндпоинта.

    Ошибка валидации (422) возможна у любого эндпоинта и добавляется
    всегда.
    """
    return {
        status.value: {
            'description': ERROR_DESCRIPTIONS[status],
            'model': CustomErrorResponse,
        }
        for status in (*statuses, HTTPStatus.UNPROCESSABLE_ENTITY)
    }


def create_responses() -> Responses:
    return error_responses(
        HTTPStatus.BAD_REQUEST,
        HTTPStatus.NOT_FOUND,
        HTTPStatus.CONFLICT,
    )


def retrieve_responses() -> Responses:
    return error_responses(HTTPStatus.NOT_FOUND)


def list_responses() -> Responses:
    return error_responses(HTTPStatus.BAD_REQUEST, HTTPStatus.NOT_FOUND)


def update_responses() -> Responses:
    return error_responses(
        HTTPStatus.BAD_REQUEST,
        HTTPStatus.FORBIDDEN,
        HTTPStatus.NOT_FOUND,
    )
