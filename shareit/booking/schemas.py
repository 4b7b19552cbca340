from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shareit.booking.approval import determine_status
from shareit.booking.constants import BookingStatus
from shareit.booking.models import Booking
from shareit.database.base import to_service_clock
from shareit.users.schemas import UserShortInfo


class ItemShortInfo(BaseModel):
    """Краткая информация о вещи."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class BookingCreate(BaseModel):
    """Схема для создания бронирования.

    Порядок start < end проверяется сервисом, чтобы ошибка имела
    собственный тип EndBeforeOrEqualsStart.
    """

    item_id: int = Field(gt=0)
    start: datetime
    end: datetime

    model_config = ConfigDict(extra='forbid')

    @field_validator('start', 'end')
    @classmethod
    def normalize_clock(cls, value: datetime) -> datetime:
        """Приводит время к единым часам сервиса."""
        return to_service_clock(value)


class BookingInfo(BaseModel):
    """Полное представление бронирования."""

    id: int
    start: datetime
    end: datetime
    status: BookingStatus
    booker: UserShortInfo
    item: ItemShortInfo

    @classmethod
    def from_booking(cls, booking: Booking) -> 'BookingInfo':
        """Строит представление по модели бронирования."""
        return cls(
            id=booking.id,
            start=booking.start_time,
            end=booking.end_time,
            status=determine_status(booking),
            booker=UserShortInfo.model_validate(booking.booker),
            item=ItemShortInfo.model_validate(booking.item),
        )


class BookingShortInfo(BaseModel):
    """Краткое представление бронирования для карточки вещи."""

    id: int
    booker_id: int

    model_config = ConfigDict(from_attributes=True)
