from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.database import Base

if TYPE_CHECKING:
    from shareit.items.models import Item
    from shareit.users.models import User


class Booking(Base):
    """Модель бронирования.

    Бронь занимает полуоткрытый интервал [start_time, end_time) на одной
    вещи. Поле `approved` трёхзначное: NULL - владелец ещё не принял
    решение, TRUE - одобрено, FALSE - отклонено. Решение принимается
    один раз и больше не меняется.

    Relationships:
        item (Item): Бронируемая вещь.
        booker (User): Пользователь, создавший бронь.
    """

    item_id: Mapped[int] = mapped_column(
        ForeignKey('item.id', ondelete='CASCADE'),
        nullable=False,
        comment='ID бронируемой вещи',
    )
    booker_id: Mapped[int] = mapped_column(
        ForeignKey('user.id', ondelete='CASCADE'),
        nullable=False,
        comment='ID пользователя, который создал бронь',
    )
    start_time: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment='Начало брони (UTC)',
    )
    end_time: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment='Окончание брони (UTC), не входит в интервал',
    )
    approved: Mapped[Optional[bool]] = mapped_column(
        Boolean,
        nullable=True,
        default=None,
        comment='Решение владельца: NULL - не принято',
    )

    # --- связи ---
    item: Mapped['Item'] = relationship(lazy='selectin')
    booker: Mapped['User'] = relationship(lazy='selectin')

    __table_args__ = (
        CheckConstraint(
            'start_time < end_time',
            name='check_booking_start_before_end',
        ),
        Index('ix_booking_item_start', item_id, start_time),
        Index('ix_booking_booker_start', booker_id, start_time),
        {'sqlite_autoincrement': True},
    )
