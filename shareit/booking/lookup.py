"""Фильтры списков бронирований по статусу."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import or_

from shareit.booking.constants import (
    LIST_FILTERS,
    BookingError,
    BookingStatus,
)
from shareit.booking.models import Booking
from shareit.items.models import Item


def parse_status(token: Optional[str]) -> BookingStatus | BookingError:
    """Разбирает фильтр статуса без учёта регистра.

    Отсутствующий фильтр означает ALL. APPROVED не является фильтром
    списка.
    """
    if token is None or not token.strip():
        return BookingStatus.ALL
    try:
        status = BookingStatus(token.strip().upper())
    except ValueError:
        return BookingError.ILLEGAL_ARGUMENT
    if status not in LIST_FILTERS:
        return BookingError.ILLEGAL_ARGUMENT
    return status


def participant_condition(
    booker_id: Optional[int],
    owner_id: Optional[int],
) -> Any:
    """Бронирования, где пользователь автор или владелец вещи."""
    conditions = []
    if booker_id is not None:
        conditions.append(Booking.booker_id == booker_id)
    if owner_id is not None:
        conditions.append(Item.owner_id == owner_id)
    return or_(*conditions)


def status_conditions(status: BookingStatus, now: datetime) -> list[Any]:
    """Условия отбора для фильтра статуса."""
    if status == BookingStatus.WAITING:
        return [Booking.approved.is_(None)]
    if status == BookingStatus.REJECTED:
        return [Booking.approved.is_(False)]
    if status == BookingStatus.PAST:
        return [Booking.approved.is_(True), Booking.end_time < now]
    if status == BookingStatus.FUTURE:
        return [Booking.start_time > now]
    if status == BookingStatus.CURRENT:
        return [Booking.start_time < now, Booking.end_time > now]
    return []
