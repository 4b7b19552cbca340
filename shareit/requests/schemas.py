from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from shareit.config import MAX_DESCRIPTION_LENGTH, MIN_TEXT_LENGTH
from shareit.items.schemas import ItemInfo


class ItemRequestCreate(BaseModel):
    """Схема для создания запроса вещи."""

    description: str = Field(
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_DESCRIPTION_LENGTH,
        examples=['Нужна дрель на выходные'],
    )

    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)


class ItemRequestInfo(BaseModel):
    """Запрос вещи с вещами, добавленными в ответ на него."""

    id: int
    description: str
    created: datetime
    items: List[ItemInfo] = Field(default_factory=list)
