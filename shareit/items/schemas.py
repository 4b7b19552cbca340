from datetime import datetime
from typing import Annotated, List, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shareit.booking.schemas import BookingShortInfo
from shareit.config import (
    MAX_COMMENT_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    MIN_TEXT_LENGTH,
)
from shareit.items.models import Comment


ItemNameStr = Annotated[
    str,
    Field(
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_NAME_LENGTH,
        examples=['Дрель'],
    ),
]

ItemDescriptionStr = Annotated[
    str,
    Field(
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_DESCRIPTION_LENGTH,
        examples=['Простая дрель'],
    ),
]


class ItemCreate(BaseModel):
    """Схема для создания вещи."""

    name: ItemNameStr
    description: ItemDescriptionStr
    available: bool
    request_id: Optional[int] = Field(
        None,
        gt=0,
        description='ID запроса вещи, на который это ответ',
    )

    model_config = ConfigDict(extra='forbid')


class ItemUpdate(BaseModel):
    """Схема для частичного обновления вещи."""

    name: Optional[ItemNameStr] = None
    description: Optional[ItemDescriptionStr] = None
    available: Optional[bool] = None

    model_config = ConfigDict(extra='forbid')

    @model_validator(mode='after')
    def forbid_nulls(self) -> Self:
        """Проверка полей на null."""
        for field in ('name', 'description', 'available'):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f'Поле {field} не может быть null')
        return self


class ItemInfo(BaseModel):
    """Схема для чтения вещи."""

    id: int
    name: str
    description: str
    available: bool
    request_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    """Схема для создания отзыва."""

    text: str = Field(
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_COMMENT_LENGTH,
    )

    model_config = ConfigDict(extra='forbid')


class CommentInfo(BaseModel):
    """Отзыв о вещи."""

    id: int
    text: str
    author_name: str
    created: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> 'CommentInfo':
        """Строит представление по модели отзыва."""
        return cls(
            id=comment.id,
            text=comment.text,
            author_name=comment.author.name,
            created=comment.created_at,
        )


class ItemDetailInfo(ItemInfo):
    """Вещь с последней и ближайшей бронью и отзывами.

    Брони видит только владелец вещи.
    """

    last_booking: Optional[BookingShortInfo] = None
    next_booking: Optional[BookingShortInfo] = None
    comments: List[CommentInfo] = Field(default_factory=list)
