"""Жизненный цикл одобрения: NULL -> TRUE | FALSE, один раз."""

from typing import Optional, Protocol

from shareit.booking.constants import BookingError, BookingStatus


class Approvable(Protocol):
    approved: Optional[bool]


def determine_status(booking: Approvable) -> BookingStatus:
    """Статус отдельного бронирования по решению владельца."""
    if booking.approved is None:
        return BookingStatus.WAITING
    if booking.approved is False:
        return BookingStatus.REJECTED
    return BookingStatus.APPROVED


def approval_error(
    booking: Approvable,
    owner_id: int,
    requester_id: int,
) -> Optional[BookingError]:
    """Проверяет, может ли пользователь принять решение по брони.

    Args:
        booking: Бронирование
        owner_id: Владелец бронируемой вещи
        requester_id: Пользователь, принимающий решение

    Returns:
        Причина отказа или None

    """
    if owner_id != requester_id:
        return BookingError.WRONG_USER_UPDATING_BOOKING
    if booking.approved is not None:
        return BookingError.APPROVAL_ALREADY_SET
    return None
