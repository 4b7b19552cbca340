from datetime import datetime
from typing import Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.booking.approval import approval_error
from shareit.booking.availability import check_reservation, check_window
from shareit.booking.constants import ERROR_MESSAGES, BookingError
from shareit.booking.crud import BookingCRUD
from shareit.booking.exceptions import (
    BookingException,
    handle_booking_exceptions,
)
from shareit.booking.lookup import parse_status
from shareit.booking.models import Booking
from shareit.booking.schemas import BookingCreate
from shareit.booking.selector import select_last_and_next
from shareit.cache import RedisCache, key_item_lock
from shareit.common.exceptions import AppException, ItemNotFoundException
from shareit.common.logging import log_action, log_system_crud
from shareit.config import SweepBoundary, settings
from shareit.database.base import now_utc
from shareit.items.crud import item_crud
from shareit.items.models import Item
from shareit.users.services import UserService


class BookingService:
    """Сервис бронирований.

    Проверки возвращают причину отказа значением `BookingError`, сервис
    превращает её в `BookingException` на выходе из операции.
    """

    def __init__(
        self,
        session: AsyncSession,
        cache: RedisCache,
        sweep_boundary: Optional[SweepBoundary] = None,
    ) -> None:
        """Инициализирует сервис с сессией БД и кэшем."""
        self.session = session
        self.cache = cache
        self.crud = BookingCRUD(session)
        self.users = UserService(session=session, cache=cache)
        self.sweep_boundary = (
            sweep_boundary or settings.booking.SWEEP_BOUNDARY
        )

    @log_action('Создание бронирования')
    async def add_booking(
        self,
        *,
        booking_in: BookingCreate,
        booker_id: int,
        now: Optional[datetime] = None,
    ) -> Booking:
        """Создаёт бронь, если интервал свободен.

        Проверка свободы и вставка выполняются под блокировкой вещи,
        чтобы параллельные запросы не создали пересекающиеся брони.

        Raises:
            BookingException: Отказ в бронировании
            ItemNotFoundException: Вещь не найдена
            UserNotFoundException: Автор брони не найден

        """
        now = now or now_utc()
        error = check_window(booking_in.start, booking_in.end)
        if error is not None:
            raise BookingException(error)

        try:
            async with self.cache.lock(key_item_lock(booking_in.item_id)):
                item = await item_crud.get_for_update(
                    self.session,
                    booking_in.item_id,
                )
                if item is None:
                    raise ItemNotFoundException(booking_in.item_id)
                await self.users.ensure_user_exists(
                    booker_id,
                    'бронирования',
                )

                active = await self.crud.get_active_bookings(item.id, now)
                error = check_reservation(
                    owner_id=item.owner_id,
                    available=item.available,
                    booker_id=booker_id,
                    start=booking_in.start,
                    end=booking_in.end,
                    active=active,
                    now=now,
                    boundary=self.sweep_boundary,
                )
                if error is not None:
                    raise BookingException(error)

                booking = await self.crud.create_booking(
                    item_id=item.id,
                    booker_id=booker_id,
                    start=booking_in.start,
                    end=booking_in.end,
                )
                await self.session.commit()
        except AppException:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            handle_booking_exceptions(e, booker_id, 'создании')

        log_system_crud(
            'create',
            'booking',
            object_id=booking.id,
            user_id=booker_id,
        )
        return await self._reload(booking.id)

    @log_action('Получение бронирования', only_errors=True)
    async def get_booking(
        self,
        *,
        booking_id: int,
        requester_id: int,
    ) -> Booking:
        """Бронь доступна её автору и владельцу вещи."""
        booking = await self.crud.get_booking(booking_id)
        if booking is None:
            raise BookingException(BookingError.BOOKING_NOT_FOUND)
        if requester_id not in (booking.booker_id, booking.item.owner_id):
            raise BookingException(BookingError.CANT_VIEW_UNRELATED_BOOKING)
        return booking

    @log_action('Получение списка бронирований', only_errors=True)
    async def list_bookings(
        self,
        *,
        booker_id: Optional[int] = None,
        owner_id: Optional[int] = None,
        state: Optional[str] = None,
        offset: int = 0,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Sequence[Booking]:
        """Брони автора или владельца с фильтром по статусу.

        Args:
            booker_id: Автор брони
            owner_id: Владелец вещи
            state: Фильтр статуса, по умолчанию ALL
            offset: Сколько записей пропустить
            limit: Максимум записей
            now: Текущий момент по часам сервиса

        Returns:
            Брони от новых к старым

        """
        if booker_id is None and owner_id is None:
            return []

        if owner_id is not None:
            await self.users.ensure_user_exists(
                owner_id,
                'получения бронирований по владельцу вещи',
            )
        if booker_id is not None:
            await self.users.ensure_user_exists(
                booker_id,
                'получения бронирований по автору',
            )

        status = parse_status(state)
        if isinstance(status, BookingError):
            raise BookingException(
                status,
                ERROR_MESSAGES[status].format(token=state),
            )

        return await self.crud.get_bookings(
            booker_id=booker_id,
            owner_id=owner_id,
            status=status,
            now=now or now_utc(),
            skip=offset,
            limit=limit,
        )

    @log_action('Изменение статуса одобрения бронирования')
    async def set_approval(
        self,
        *,
        booking_id: int,
        approved: bool,
        requester_id: int,
    ) -> Booking:
        """Записывает решение владельца, допустимо ровно один раз."""
        booking = await self.crud.get_booking(booking_id)
        if booking is None:
            raise BookingException(BookingError.BOOKING_NOT_FOUND)

        error = approval_error(booking, booking.item.owner_id, requester_id)
        if error is not None:
            raise BookingException(error)

        try:
            if not await self.crud.set_approval_if_unset(booking_id, approved):
                raise BookingException(BookingError.APPROVAL_ALREADY_SET)
            await self.session.commit()
        except AppException:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            handle_booking_exceptions(e, requester_id, 'обновлении')

        log_system_crud(
            'update',
            'booking',
            object_id=booking_id,
            user_id=requester_id,
            details={'approved': approved},
        )
        return await self._reload(booking_id)

    async def get_last_and_next(
        self,
        item: Item,
        requester_id: int,
        now: Optional[datetime] = None,
    ) -> Tuple[Optional[Booking], Optional[Booking]]:
        """Последняя и ближайшая брони вещи, видны только владельцу."""
        if requester_id != item.owner_id:
            return None, None

        now = now or now_utc()
        active = await self.crud.get_active_bookings(item.id, now)
        selection = select_last_and_next(active, now)

        last = selection.last
        if selection.needs_past_lookup:
            last = await self.crud.get_last_past_booking(item.id, now)
        return last, selection.next

    async def has_used_item(
        self,
        *,
        author_id: int,
        item_id: int,
        now: Optional[datetime] = None,
    ) -> bool:
        """Пользовался ли автор вещью по одобренной брони."""
        return await self.crud.has_approved_started_booking(
            booker_id=author_id,
            item_id=item_id,
            now=now or now_utc(),
        )

    async def _reload(self, booking_id: int) -> Booking:
        booking = await self.crud.get_booking(booking_id)
        if booking is None:
            raise BookingException(BookingError.BOOKING_NOT_FOUND)
        return booking
