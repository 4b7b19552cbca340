"""Клиент Redis для кэша и блокировок.

Redis здесь необязателен: без него кэш всегда пуст, а блокировки
действуют только внутри процесса.
"""
import asyncio
from contextlib import asynccontextmanager
import logging
from typing import AsyncIterator, Union
from weakref import WeakValueDictionary

import orjson
from redis.asyncio import ConnectionPool, Redis
from redis.asyncio.lock import Lock
from redis.exceptions import LockError, RedisError

from shareit.config import settings


logger = logging.getLogger('app')

CacheValue = Union[dict, list, str, int, float, bool]


class RedisCache:
    """Асинхронный Redis клиент поверх общего пула соединений."""

    def __init__(self) -> None:
        self._pool: ConnectionPool | None = None
        self._client: Redis | None = None
        self._local_locks: WeakValueDictionary[str, asyncio.Lock] = (
            WeakValueDictionary()
        )

    @property
    def is_available(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Открывает пул и проверяет соединение командой PING.

        При ошибке клиент остаётся отключённым, приложение продолжает
        работать без кэша.
        """
        redis_conf = settings.redis
        pool = ConnectionPool.from_url(
            redis_conf.URL,
            password=redis_conf.PASSWORD or None,
            max_connections=redis_conf.MAX_CONNECTIONS,
            socket_connect_timeout=redis_conf.SOCKET_CONNECTION_TIMEOUT,
            socket_timeout=redis_conf.SOCKET_TIMEOUT,
            retry_on_timeout=redis_conf.RETRY_ON_TIMEOUT,
        )
        client = Redis(connection_pool=pool)
        try:
            await client.ping()
        except (RedisError, OSError) as e:
            logger.warning('⚠️ Redis недоступен, работаем без кэша: %s', e)
            await client.aclose()
            await pool.aclose()
            return

        self._pool, self._client = pool, client
        logger.info(
            '✅ Redis подключен (pool: %d connections)',
            redis_conf.MAX_CONNECTIONS,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
        if self._pool is not None:
            await self._pool.aclose()
        self._client = self._pool = None
        logger.info('Соединение с Redis закрыто')

    async def get(self, key: str) -> CacheValue | None:
        """Значение по ключу, None при промахе или ошибке Redis."""
        if not self.is_available:
            return None
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            logger.debug('Ошибка чтения кэша %s: %s', key, e)
            return None
        return orjson.loads(raw) if raw else None

    async def set(self, key: str, value: CacheValue, ttl: int = 300) -> bool:
        """Кладёт значение на ttl секунд, True при успехе."""
        if not self.is_available:
            return False
        try:
            await self._client.setex(key, ttl, orjson.dumps(value))
        except RedisError as e:
            logger.debug('Ошибка записи кэша %s: %s', key, e)
            return False
        return True

    async def delete(self, *keys: str) -> int:
        """Удаляет ключи и возвращает их число."""
        if not self.is_available or not keys:
            return 0
        try:
            return await self._client.delete(*keys)
        except RedisError as e:
            logger.debug('Ошибка удаления из кэша %s: %s', keys, e)
            return 0

    @asynccontextmanager
    async def lock(self, name: str) -> AsyncIterator[None]:
        """Эксклюзивная блокировка по имени на время блока `async with`.

        С Redis блокировка общая для всех процессов сервиса, и если её
        не удалось взять за LOCK_BLOCKING_TIMEOUT секунд, поднимается
        redis.exceptions.LockError. Без Redis используется asyncio.Lock.

        Ошибка освобождения (блокировка истекла по LOCK_TIMEOUT) только
        логируется: к этому моменту работа под блокировкой уже
        завершена, и её результат не должен превращаться в ошибку.
        """
        if self.is_available:
            redis_lock = self._client.lock(
                name,
                timeout=settings.redis.LOCK_TIMEOUT,
                blocking_timeout=settings.redis.LOCK_BLOCKING_TIMEOUT,
            )
            if not await redis_lock.acquire():
                raise LockError(f'Не удалось захватить блокировку {name}')
            try:
                yield
            finally:
                await self._release(redis_lock, name)
            return

        local_lock = self._local_locks.get(name)
        if local_lock is None:
            local_lock = self._local_locks[name] = asyncio.Lock()
        async with local_lock:
            yield

    @staticmethod
    async def _release(redis_lock: Lock, name: str) -> None:
        try:
            await redis_lock.release()
        except LockError as e:
            logger.warning(
                '⚠️ Блокировка %s истекла до освобождения: %s',
                name,
                e,
            )


cache = RedisCache()


async def get_cache() -> RedisCache:
    """Зависимость FastAPI с общим экземпляром кэша."""
    return cache
