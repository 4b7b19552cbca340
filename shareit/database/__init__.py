from shareit.database.base import Base, now_utc
from shareit.database.service import DatabaseService
from shareit.database.sessions import get_async_session

__all__ = ['Base', 'DatabaseService', 'get_async_session', 'now_utc']
