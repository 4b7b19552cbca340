from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import exists, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shareit.booking.constants import BookingStatus
from shareit.booking.lookup import participant_condition, status_conditions
from shareit.booking.models import Booking
from shareit.database.base import now_utc
from shareit.items.models import Item


class BookingCRUD:
    """Слой доступа к данным для бронирований."""

    def __init__(self, db: AsyncSession) -> None:
        """Инициализация CRUD с асинхронной сессией."""
        self.db = db

    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        """Получить бронирование по ID вместе с вещью и автором."""
        result = await self.db.execute(
            select(Booking)
            .where(Booking.id == booking_id)
            .options(
                selectinload(Booking.item),
                selectinload(Booking.booker),
            )
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_active_bookings(
        self,
        item_id: int,
        now: datetime,
    ) -> Sequence[Booking]:
        """Неотклонённые брони вещи, которые ещё не закончились."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.item_id == item_id,
                or_(Booking.approved.is_(None), Booking.approved.is_(True)),
                Booking.end_time > now,
            )
            .order_by(Booking.start_time.asc(), Booking.id.asc()),
        )
        return result.scalars().all()

    async def get_last_past_booking(
        self,
        item_id: int,
        now: datetime,
    ) -> Optional[Booking]:
        """Последняя завершившаяся бронь вещи, решение не учитывается."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.item_id == item_id,
                Booking.end_time < now,
            )
            .order_by(Booking.start_time.desc(), Booking.id.desc())
            .limit(1),
        )
        return result.scalars().first()

    async def create_booking(
        self,
        *,
        item_id: int,
        booker_id: int,
        start: datetime,
        end: datetime,
    ) -> Booking:
        """Создать новую бронь без решения владельца."""
        booking = Booking(
            item_id=item_id,
            booker_id=booker_id,
            start_time=start,
            end_time=end,
            approved=None,
        )
        self.db.add(booking)
        await self.db.flush()
        return booking

    async def set_approval_if_unset(
        self,
        booking_id: int,
        approved: bool,
    ) -> bool:
        """Атомарно записывает решение, если оно ещё не принято.

        Returns:
            True, если решение записано этим вызовом

        """
        result = await self.db.execute(
            update(Booking)
            .where(
                Booking.id == booking_id,
                Booking.approved.is_(None),
            )
            .values(approved=approved, updated_at=now_utc())
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def get_bookings(
        self,
        *,
        booker_id: Optional[int],
        owner_id: Optional[int],
        status: BookingStatus,
        now: datetime,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[Booking]:
        """Брони автора или владельца, от новых к старым."""
        query = (
            select(Booking)
            .join(Booking.item)
            .where(
                participant_condition(booker_id, owner_id),
                *status_conditions(status, now),
            )
            .order_by(Booking.start_time.desc(), Booking.id.desc())
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def has_approved_started_booking(
        self,
        *,
        booker_id: int,
        item_id: int,
        now: datetime,
    ) -> bool:
        """Есть ли у пользователя одобренная и уже начавшаяся бронь вещи."""
        result = await self.db.execute(
            select(
                exists().where(
                    Booking.booker_id == booker_id,
                    Booking.item_id == item_id,
                    Booking.approved.is_(True),
                    Booking.start_time < now,
                ),
            ),
        )
        return bool(result.scalar())
