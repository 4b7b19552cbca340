from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.config import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
from shareit.database import Base

if TYPE_CHECKING:
    from shareit.users.models import User


class Item(Base):
    """Модель вещи, которую владелец сдаёт в пользование."""

    owner_id: Mapped[int] = mapped_column(
        ForeignKey('user.id', ondelete='CASCADE'),
        nullable=False,
        comment='ID владельца вещи',
    )
    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=False,
    )
    available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment='Доступна ли вещь для бронирования',
    )
    request_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey('item_request.id', ondelete='SET NULL'),
        nullable=True,
        comment='ID запроса, в ответ на который добавлена вещь',
    )

    __table_args__ = (
        Index('ix_item_owner_id', owner_id),
        {'sqlite_autoincrement': True},
    )


class Comment(Base):
    """Отзыв пользователя о вещи, которой он пользовался."""

    item_id: Mapped[int] = mapped_column(
        ForeignKey('item.id', ondelete='CASCADE'),
        nullable=False,
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey('user.id', ondelete='CASCADE'),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped['User'] = relationship(lazy='selectin')

    __table_args__ = (
        Index('ix_comment_item_id', item_id),
        {'sqlite_autoincrement': True},
    )
