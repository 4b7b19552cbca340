"""Генераторы ключей Redis: кэш и блокировки."""

PREFIX_USER = 'user'
PREFIX_LOCK = 'lock'


def key_user_exists(user_id: int) -> str:
    """Ключ кэша факта существования пользователя."""
    return f'{PREFIX_USER}:exists:{user_id}'


def key_item_lock(item_id: int) -> str:
    """Ключ блокировки бронирования вещи."""
    return f'{PREFIX_LOCK}:item:{item_id}'
