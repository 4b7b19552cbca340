from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from shareit.config import DatabaseSettings, settings


def pool_options(url: str, db: DatabaseSettings) -> dict[str, Any]:
    """Параметры пула соединений, у SQLite их нет."""
    if make_url(url).get_backend_name() == 'sqlite':
        return {}
    return {
        'pool_size': db.POOL_SIZE,
        'max_overflow': db.MAX_OVERFLOW,
        'pool_timeout': db.POOL_TIMEOUT,
        'pool_recycle': db.POOL_RECYCLE,
        'pool_pre_ping': db.POOL_PING,
    }


def create_db_engine(url: str) -> AsyncEngine:
    db = settings.database
    return create_async_engine(
        url,
        echo=db.ECHO_SQL,
        **pool_options(url, db),
    )


engine = create_db_engine(settings.database.URL)
