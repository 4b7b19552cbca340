from typing import Annotated, Optional, Self

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from shareit.config import MAX_NAME_LENGTH, MIN_TEXT_LENGTH


NameStr = Annotated[
    str,
    Field(
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_NAME_LENGTH,
        description='Имя пользователя',
        examples=['Иван'],
    ),
]


class UserCreate(BaseModel):
    """Схема для создания пользователя."""

    name: NameStr
    email: EmailStr = Field(examples=['user@example.com'])

    model_config = ConfigDict(extra='forbid')


class UserUpdate(BaseModel):
    """Схема для частичного обновления пользователя."""

    name: Optional[NameStr] = None
    email: Optional[EmailStr] = None

    model_config = ConfigDict(extra='forbid')

    @model_validator(mode='after')
    def forbid_nulls(self) -> Self:
        """Проверка полей на null."""
        for field in ('name', 'email'):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f'Поле {field} не может быть null')
        return self


class UserInfo(BaseModel):
    """Схема для чтения данных пользователя."""

    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserShortInfo(BaseModel):
    """Краткая информация о пользователе для вывода в бронированиях."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
