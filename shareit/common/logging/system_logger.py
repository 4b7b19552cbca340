"""Системный журнал событий в формате JSON Lines.

Отдельно от логгера 'app' пишет структурированные записи о запросах к
API и изменениях данных в `logs/system/system_events.log`.
"""
from datetime import datetime, timezone
import logging
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

import orjson

from shareit.config import COUNT_FILES, LOGS_DIR, MAX_BYTES

STRUCTURED_FIELDS = (
    'operation',
    'model',
    'object_id',
    'endpoint',
    'status_code',
    'response_time_ms',
)


class SystemJsonFormatter(logging.Formatter):
    """Одна запись - один JSON-объект в строке."""

    def format(self, record: logging.LogRecord) -> str:
        user_id = getattr(record, 'user_id', None)
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(
                record.created,
                timezone.utc,
            ).isoformat(
                timespec='seconds',
            ),
            'level': record.levelname,
            'component': getattr(record, 'component', 'system'),
            'message': record.getMessage(),
            'user': {'id': user_id} if user_id is not None else 'SYSTEM',
        }
        entry.update(
            (name, getattr(record, name))
            for name in STRUCTURED_FIELDS
            if hasattr(record, name)
        )
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return orjson.dumps(entry, default=str).decode()


def _build_system_logger() -> logging.Logger:
    log_dir = LOGS_DIR / 'system'
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_dir / 'system_events.log',
        maxBytes=MAX_BYTES,
        backupCount=COUNT_FILES,
        encoding='utf-8',
    )
    handler.setFormatter(SystemJsonFormatter())

    result = logging.getLogger('shareit_system')
    result.setLevel(logging.INFO)
    result.propagate = False
    result.addHandler(handler)
    return result


system_logger = _build_system_logger()


def _emit(
    level: int,
    message: str,
    component: str,
    user_id: Optional[int],
    **fields: Any,
) -> None:
    extra = {'component': component, **fields}
    if user_id is not None:
        extra['user_id'] = user_id
    system_logger.log(level, message, extra=extra)


def log_system_crud(
    operation: str,
    model: str,
    object_id: Optional[Any] = None,
    user_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Фиксирует изменение данных.

    Args:
        operation: Тип операции ('create', 'update', 'delete').
        model: Имя сущности.
        object_id: ID затронутого объекта.
        user_id: ID пользователя, выполнившего операцию.
        details: Дополнительные параметры для текста сообщения.

    """
    message = f'{operation} {model}'
    fields: Dict[str, Any] = {'operation': operation.lower(), 'model': model}
    if object_id is not None:
        message += f' #{object_id}'
        fields['object_id'] = object_id
    if details:
        message += ' с параметрами: ' + ', '.join(
            f'{key}={value}' for key, value in details.items()
        )
    _emit(logging.INFO, message, 'crud', user_id, **fields)


def log_system_api_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_ms: float,
    user_id: Optional[int] = None,
) -> None:
    """Фиксирует обработанный запрос, уровень зависит от статуса ответа."""
    if status_code >= 500:
        level = logging.ERROR
    elif status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO

    _emit(
        level,
        f'{method} {endpoint} -> {status_code} ({duration_ms:.0f}ms)',
        'api',
        user_id,
        endpoint=endpoint,
        status_code=status_code,
        response_time_ms=round(duration_ms, 2),
    )
