from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.cache import RedisCache, get_cache
from shareit.database import get_async_session
from shareit.items.services import ItemService


async def get_item_service(
    session: AsyncSession = Depends(get_async_session),
    cache: RedisCache = Depends(get_cache),
) -> ItemService:
    """Возвращает экземпляр ItemService с внедрёнными зависимостями."""
    return ItemService(session=session, cache=cache)
