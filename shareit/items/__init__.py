from shareit.items.models import Comment as Comment, Item as Item
# Внешний ключ item.request_id ссылается на эту таблицу.
from shareit.requests.models import ItemRequest  # noqa: F401


__all__ = ['Comment', 'Item']
