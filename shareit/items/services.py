from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.booking.schemas import BookingShortInfo
from shareit.booking.services import BookingService
from shareit.cache import RedisCache
from shareit.common.exceptions import (
    BadRequestException,
    ForbiddenException,
    ItemNotFoundException,
    RequestNotFoundException,
)
from shareit.common.logging import log_action, log_system_crud
from shareit.database.base import now_utc
from shareit.items.crud import comment_crud, item_crud
from shareit.items.models import Comment, Item
from shareit.items.schemas import (
    CommentCreate,
    CommentInfo,
    ItemCreate,
    ItemDetailInfo,
    ItemUpdate,
)
from shareit.requests.crud import item_request_crud
from shareit.requests.models import ItemRequest
from shareit.users.services import UserService


class ItemService:
    """Сервис вещей и отзывов."""

    def __init__(self, session: AsyncSession, cache: RedisCache) -> None:
        """Инициализирует сервис с сессией БД и кэшем."""
        self.session = session
        self.users = UserService(session=session, cache=cache)
        self.bookings = BookingService(session=session, cache=cache)

    @log_action('Создание вещи')
    async def create_item(
        self,
        *,
        item_in: ItemCreate,
        owner_id: int,
    ) -> Item:
        """Создаёт вещь, владелец и указанный запрос должны существовать."""
        await self.users.ensure_user_exists(owner_id, 'создания вещи')
        if item_in.request_id is not None and not await item_request_crud.exists(
            self.session,
            ItemRequest.id == item_in.request_id,
        ):
            raise RequestNotFoundException(item_in.request_id)
        item = await item_crud.create(
            self.session,
            obj_in=item_in,
            owner_id=owner_id,
        )
        log_system_crud('create', 'item', object_id=item.id, user_id=owner_id)
        return item

    @log_action('Обновление вещи')
    async def update_item(
        self,
        *,
        item_id: int,
        item_in: ItemUpdate,
        requester_id: int,
    ) -> Item:
        """Частично обновляет вещь. Менять вещь может только владелец."""
        if not item_in.model_fields_set:
            raise BadRequestException(
                'Пустой запрос: нет полей для обновления.',
            )
        item = await self.get_item(item_id)
        if item.owner_id != requester_id:
            raise ForbiddenException(
                message=(
                    f'Пользователь с id={requester_id} не является '
                    f'владельцем вещи с id={item_id}.'
                ),
                error='WrongOwnerUpdatingItem',
            )
        item = await item_crud.update(
            self.session,
            db_obj=item,
            obj_in=item_in,
        )
        log_system_crud(
            'update',
            'item',
            object_id=item.id,
            user_id=requester_id,
            details=item_in.model_dump(exclude_unset=True),
        )
        return item

    async def get_item(self, item_id: int) -> Item:
        """Возвращает вещь или поднимает ItemNotFound."""
        item = await item_crud.get(self.session, id=item_id)
        if item is None:
            raise ItemNotFoundException(item_id)
        return item

    async def get_item_detail(
        self,
        *,
        item_id: int,
        requester_id: int,
        now: Optional[datetime] = None,
    ) -> ItemDetailInfo:
        """Вещь с бронями (для владельца) и отзывами."""
        item = await self.get_item(item_id)
        comments = await comment_crud.get_by_item(self.session, item.id)
        return await self._detail(item, requester_id, comments, now)

    async def get_owner_items(
        self,
        *,
        owner_id: int,
        offset: int = 0,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[ItemDetailInfo]:
        """Вещи владельца с последней и ближайшей бронью."""
        await self.users.ensure_user_exists(owner_id, 'получения вещей')
        items = await item_crud.get_owner_items(
            self.session,
            owner_id,
            skip=offset,
            limit=limit,
        )
        result = []
        for item in items:
            comments = await comment_crud.get_by_item(self.session, item.id)
            result.append(await self._detail(item, owner_id, comments, now))
        return result

    async def search_items(
        self,
        *,
        text: str,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Item]:
        """Поиск доступных вещей. Пустой запрос ничего не находит."""
        if not text or not text.strip():
            return []
        return list(
            await item_crud.search(
                self.session,
                text.strip(),
                skip=offset,
                limit=limit,
            ),
        )

    @log_action('Добавление отзыва')
    async def add_comment(
        self,
        *,
        item_id: int,
        comment_in: CommentCreate,
        author_id: int,
        now: Optional[datetime] = None,
    ) -> Comment:
        """Оставить отзыв можно только после начала одобренной брони."""
        await self.users.ensure_user_exists(author_id, 'добавления отзыва')
        item = await self.get_item(item_id)
        used = await self.bookings.has_used_item(
            author_id=author_id,
            item_id=item.id,
            now=now or now_utc(),
        )
        if not used:
            raise BadRequestException(
                message=(
                    f'Пользователь с id={author_id} не брал вещь '
                    f'с id={item_id} в аренду.'
                ),
                error='CommenterDontHaveBooking',
            )
        comment = await comment_crud.create(
            self.session,
            obj_in=comment_in,
            item_id=item.id,
            author_id=author_id,
        )
        await self.session.refresh(comment, attribute_names=['author'])
        log_system_crud(
            'create',
            'comment',
            object_id=comment.id,
            user_id=author_id,
        )
        return comment

    async def _detail(
        self,
        item: Item,
        requester_id: int,
        comments: List[Comment],
        now: Optional[datetime],
    ) -> ItemDetailInfo:
        last, next_ = await self.bookings.get_last_and_next(
            item,
            requester_id,
            now,
        )
        return ItemDetailInfo(
            id=item.id,
            name=item.name,
            description=item.description,
            available=item.available,
            request_id=item.request_id,
            last_booking=(
                BookingShortInfo.model_validate(last) if last else None
            ),
            next_booking=(
                BookingShortInfo.model_validate(next_) if next_ else None
            ),
            comments=[CommentInfo.from_comment(c) for c in comments],
        )
