from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shareit.database.engine import engine


# Объекты остаются доступны после commit: ответ строится из них же.
session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def get_async_session() -> AsyncIterator[AsyncSession]:
    """Сессия на время запроса, незавершённая транзакция откатывается."""
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
