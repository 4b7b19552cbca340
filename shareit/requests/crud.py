from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.database import DatabaseService
from shareit.requests.models import ItemRequest
from shareit.requests.schemas import ItemRequestCreate


class ItemRequestCRUD(
    DatabaseService[ItemRequest, ItemRequestCreate, ItemRequestCreate],
):
    """CRUD для модели ItemRequest. Списки идут от новых к старым."""

    NEWEST_FIRST = (ItemRequest.created_at.desc(), ItemRequest.id.desc())

    async def get_own(
        self,
        session: AsyncSession,
        requester_id: int,
    ) -> Sequence[ItemRequest]:
        return await self.get_multi(
            session,
            filters=[ItemRequest.requester_id == requester_id],
            order_by=self.NEWEST_FIRST,
        )

    async def get_others(
        self,
        session: AsyncSession,
        requester_id: int,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[ItemRequest]:
        """Запросы всех пользователей, кроме указанного."""
        return await self.get_multi(
            session,
            filters=[ItemRequest.requester_id != requester_id],
            order_by=self.NEWEST_FIRST,
            skip=skip,
            limit=limit,
        )


item_request_crud = ItemRequestCRUD(ItemRequest)
