"""Redis: кэш проверок существования и именованные блокировки."""

from shareit.cache.client import RedisCache, get_cache
from shareit.cache.keys import key_item_lock, key_user_exists


__all__ = [
    'RedisCache',
    'get_cache',
    'key_item_lock',
    'key_user_exists',
]
