from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.cache import RedisCache, get_cache
from shareit.database import get_async_session
from shareit.users.services import UserService


USER_ID_HEADER = 'X-Sharer-User-Id'


async def get_requester_id(
    requester_id: int = Header(
        alias=USER_ID_HEADER,
        description='ID пользователя, выполняющего запрос',
    ),
) -> int:
    """Возвращает ID пользователя из заголовка запроса.

    Аутентификации нет: ID передаётся граничным слоем как есть.
    """
    return requester_id


async def get_user_service(
    session: AsyncSession = Depends(get_async_session),
    cache: RedisCache = Depends(get_cache),
) -> UserService:
    """Возвращает экземпляр UserService с внедрёнными зависимостями."""
    return UserService(session=session, cache=cache)
