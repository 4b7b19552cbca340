from shareit.requests.models import ItemRequest as ItemRequest


__all__ = ['ItemRequest']
