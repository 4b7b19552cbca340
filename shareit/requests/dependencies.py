from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.cache import RedisCache, get_cache
from shareit.database import get_async_session
from shareit.requests.services import ItemRequestService


async def get_item_request_service(
    session: AsyncSession = Depends(get_async_session),
    cache: RedisCache = Depends(get_cache),
) -> ItemRequestService:
    return ItemRequestService(session=session, cache=cache)
