from fastapi import Query

from shareit.config import settings


class Pagination:
    """Параметры постраничного вывода `from` и `size`."""

    def __init__(
        self,
        offset: int = Query(
            0,
            alias='from',
            ge=0,
            description='Сколько записей пропустить',
        ),
        size: int = Query(
            settings.booking.DEFAULT_PAGE_SIZE,
            ge=1,
            le=settings.booking.MAX_PAGE_SIZE,
            description='Размер страницы',
        ),
    ) -> None:
        self.offset = offset
        self.limit = size
