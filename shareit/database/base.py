"""Декларативная база моделей и единые часы сервиса.

Все даты хранятся и сравниваются как UTC без часового пояса (naive).
"""

from datetime import datetime, timezone
import re

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    declared_attr,
    mapped_column,
)

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def now_utc() -> datetime:
    """Текущий момент по часам сервиса."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_service_clock(value: datetime) -> datetime:
    """Переводит дату с часовым поясом в UTC и отбрасывает пояс.

    Naive-значения считаются уже заданными в UTC.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def resolve_table_name(class_name: str) -> str:
    """'BookingRequest' -> 'booking_request'."""
    return _CAMEL_BOUNDARY.sub('_', class_name).lower()


class Base(DeclarativeBase):
    """База моделей: целочисленный ID и метки создания и изменения.

    ID растут монотонно и не переиспользуются после удаления строк.
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=now_utc,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=now_utc,
        onupdate=now_utc,
        server_default=func.now(),
        nullable=False,
    )

    @declared_attr.directive
    def __tablename__(cls) -> str:  # noqa: N805
        return resolve_table_name(cls.__name__)

    @declared_attr.directive
    def __table_args__(cls) -> dict:  # noqa: N805
        # Без AUTOINCREMENT SQLite может выдать ID удалённой строки.
        return {'sqlite_autoincrement': True}
