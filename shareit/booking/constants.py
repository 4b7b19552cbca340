from enum import StrEnum
from http import HTTPStatus


class BookingStatus(StrEnum):
    """Статус бронирования.

    Для отдельного бронирования вычисляются только WAITING, APPROVED и
    REJECTED. Остальные значения используются как фильтры списков.
    """

    WAITING = 'WAITING'  # ожидает решения владельца
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    CURRENT = 'CURRENT'
    PAST = 'PAST'
    FUTURE = 'FUTURE'
    ALL = 'ALL'  # только фильтр


LIST_FILTERS: frozenset[BookingStatus] = frozenset({
    BookingStatus.ALL,
    BookingStatus.WAITING,
    BookingStatus.REJECTED,
    BookingStatus.CURRENT,
    BookingStatus.PAST,
    BookingStatus.FUTURE,
})


class BookingError(StrEnum):
    """Причины отказа в операциях с бронированием."""

    END_BEFORE_OR_EQUALS_START = 'EndBeforeOrEqualsStart'
    CANT_BOOK_OWNED_ITEM = 'CantBookOwnedItem'
    ITEM_NOT_AVAILABLE = 'ItemNotAvailableForBooking'
    TIME_WINDOW_OCCUPIED = 'TimeWindowOccupied'
    BOOKING_NOT_FOUND = 'BookingNotFound'
    WRONG_USER_UPDATING_BOOKING = 'WrongUserUpdatingBooking'
    APPROVAL_ALREADY_SET = 'ApprovalAlreadySet'
    CANT_VIEW_UNRELATED_BOOKING = 'CantViewUnrelatedBooking'
    ILLEGAL_ARGUMENT = 'IllegalArgument'


ERROR_MESSAGES: dict[BookingError, str] = {
    BookingError.END_BEFORE_OR_EQUALS_START: (
        'Окончание бронирования должно быть строго позже начала.'
    ),
    BookingError.CANT_BOOK_OWNED_ITEM: (
        'Владелец не может бронировать собственную вещь.'
    ),
    BookingError.ITEM_NOT_AVAILABLE: 'Вещь недоступна для бронирования.',
    BookingError.TIME_WINDOW_OCCUPIED: (
        'Выбранный интервал пересекается с существующим бронированием.'
    ),
    BookingError.BOOKING_NOT_FOUND: 'Бронирование не найдено.',
    BookingError.WRONG_USER_UPDATING_BOOKING: (
        'Изменить статус одобрения может только владелец вещи.'
    ),
    BookingError.APPROVAL_ALREADY_SET: (
        'Статус одобрения бронирования уже был изменен ранее.'
    ),
    BookingError.CANT_VIEW_UNRELATED_BOOKING: (
        'Бронирование доступно только автору и владельцу вещи.'
    ),
    BookingError.ILLEGAL_ARGUMENT: 'Unknown state: {token}',
}

ERROR_STATUS: dict[BookingError, HTTPStatus] = {
    BookingError.END_BEFORE_OR_EQUALS_START: HTTPStatus.BAD_REQUEST,
    BookingError.ILLEGAL_ARGUMENT: HTTPStatus.BAD_REQUEST,
    BookingError.ITEM_NOT_AVAILABLE: HTTPStatus.BAD_REQUEST,
    BookingError.APPROVAL_ALREADY_SET: HTTPStatus.BAD_REQUEST,
    BookingError.BOOKING_NOT_FOUND: HTTPStatus.NOT_FOUND,
    BookingError.CANT_VIEW_UNRELATED_BOOKING: HTTPStatus.NOT_FOUND,
    BookingError.WRONG_USER_UPDATING_BOOKING: HTTPStatus.NOT_FOUND,
    BookingError.CANT_BOOK_OWNED_ITEM: HTTPStatus.NOT_FOUND,
    BookingError.TIME_WINDOW_OCCUPIED: HTTPStatus.CONFLICT,
}
