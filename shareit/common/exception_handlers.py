"""Обработчики исключений FastAPI.

Все ошибки API отдаются в едином формате `CustomErrorResponse`.
"""
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shareit.common.exceptions import AppException
from shareit.common.logging import logger
from shareit.common.schemas import CustomErrorResponse

JSON_DECODE_ERRORS = frozenset({'json_invalid', 'value_error.jsondecode'})


def _error_response(status: int, error: str, message: str) -> JSONResponse:
    body = CustomErrorResponse(code=status, error=error, message=message)
    return JSONResponse(status_code=status, content=body.model_dump())


async def app_exception_handler(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    """Ответ на исключение, поднятое сервисным слоем."""
    logger.debug('%s %s -> %s', request.method, request.url.path, exc)
    return _error_response(int(exc.status_code), exc.error, exc.message)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Битый JSON -> 400, непрошедшая валидацию схема -> 422."""
    if any(err.get('type') in JSON_DECODE_ERRORS for err in exc.errors()):
        return _error_response(
            HTTPStatus.BAD_REQUEST,
            'BadRequest',
            'Ошибка в параметрах запроса, проверьте JSON',
        )
    return _error_response(
        HTTPStatus.UNPROCESSABLE_ENTITY,
        'ValidationError',
        'Ошибка валидации данных',
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Регистрирует обработчики в приложении."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,
    )
