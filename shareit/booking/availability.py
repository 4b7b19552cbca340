"""Проверка свободы временного окна вещи.

Кандидат на бронь проверяется проходом по активным бронированиям вещи,
отсортированным по началу. Курсор `left` стартует с текущего момента и
сдвигается по занятым интервалам. Кандидат принимается, если целиком
помещается в промежуток между курсором и началом очередной брони, или
после последней брони остаётся открытый промежуток.
"""

from datetime import datetime
from typing import Optional, Protocol, Sequence

from shareit.booking.constants import BookingError
from shareit.config import SweepBoundary


class TimeWindow(Protocol):
    """Занятый интервал [start_time, end_time)."""

    start_time: datetime
    end_time: datetime


def _advance(
    left: datetime,
    booking: TimeWindow,
    boundary: SweepBoundary,
) -> datetime:
    """Сдвигает курсор за очередную бронь."""
    if boundary == SweepBoundary.START:
        return booking.start_time
    return max(left, booking.end_time)


def is_time_window_free(
    active: Sequence[TimeWindow],
    start: datetime,
    end: datetime,
    now: datetime,
    boundary: SweepBoundary = SweepBoundary.END,
) -> bool:
    """Проверяет, что интервал [start, end) не занят.

    Args:
        active: Активные брони вещи, отсортированные по началу
        start: Начало кандидата
        end: Окончание кандидата
        now: Текущий момент по часам сервиса
        boundary: Какой границей брони сдвигать курсор

    Returns:
        True, если интервал свободен

    """
    if not active:
        return True

    left = now
    for booking in active:
        right = booking.start_time
        if left < start and right > end:
            return True
        if left > end:
            return False
        left = _advance(left, booking, boundary)

    return left < start


def check_window(start: datetime, end: datetime) -> Optional[BookingError]:
    """Окончание должно быть строго позже начала."""
    if end <= start:
        return BookingError.END_BEFORE_OR_EQUALS_START
    return None


def check_reservation(
    *,
    owner_id: int,
    available: bool,
    booker_id: int,
    start: datetime,
    end: datetime,
    active: Sequence[TimeWindow],
    now: datetime,
    boundary: SweepBoundary = SweepBoundary.END,
) -> Optional[BookingError]:
    """Проверяет возможность брони, первая найденная причина отказа побеждает.

    Returns:
        Причина отказа или None, если бронь можно создать

    """
    error = check_window(start, end)
    if error is not None:
        return error
    if owner_id == booker_id:
        return BookingError.CANT_BOOK_OWNED_ITEM
    if not available:
        return BookingError.ITEM_NOT_AVAILABLE
    if not is_time_window_free(active, start, end, now, boundary):
        return BookingError.TIME_WINDOW_OCCUPIED
    return None
