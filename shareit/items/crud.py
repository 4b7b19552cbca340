from typing import Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.database import DatabaseService
from shareit.items.models import Comment, Item
from shareit.items.schemas import CommentCreate, ItemCreate, ItemUpdate


class ItemCRUD(DatabaseService[Item, ItemCreate, ItemUpdate]):
    """CRUD для модели Item."""

    async def get_for_update(
        self,
        session: AsyncSession,
        item_id: int,
    ) -> Optional[Item]:
        """Получает вещь с блокировкой строки до конца транзакции."""
        result = await session.execute(
            select(Item)
            .where(Item.id == item_id)
            .with_for_update()
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_owner_items(
        self,
        session: AsyncSession,
        owner_id: int,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[Item]:
        """Вещи владельца по порядку создания."""
        return await self.get_multi(
            session,
            filters=[Item.owner_id == owner_id],
            skip=skip,
            limit=limit,
        )

    async def search(
        self,
        session: AsyncSession,
        text: str,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[Item]:
        """Доступные вещи, в названии или описании которых есть текст."""
        pattern = f'%{text}%'
        return await self.get_multi(
            session,
            filters=[
                Item.available.is_(True),
                or_(
                    Item.name.ilike(pattern),
                    Item.description.ilike(pattern),
                ),
            ],
            skip=skip,
            limit=limit,
        )

    async def get_by_requests(
        self,
        session: AsyncSession,
        request_ids: Sequence[int],
    ) -> Sequence[Item]:
        """Вещи, добавленные в ответ на указанные запросы."""
        if not request_ids:
            return []
        return await self.get_multi(
            session,
            filters=[Item.request_id.in_(request_ids)],
        )


class CommentCRUD(DatabaseService[Comment, CommentCreate, CommentCreate]):
    """CRUD для модели Comment."""

    async def get_by_item(
        self,
        session: AsyncSession,
        item_id: int,
    ) -> Sequence[Comment]:
        """Отзывы о вещи, от старых к новым."""
        return await self.get_multi(
            session,
            filters=[Comment.item_id == item_id],
            order_by=[Comment.created_at.asc(), Comment.id.asc()],
            limit=None,
        )


item_crud = ItemCRUD(Item)
comment_crud = CommentCRUD(Comment)
