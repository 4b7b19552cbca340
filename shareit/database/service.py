"""Обобщённый CRUD поверх async-сессии SQLAlchemy."""

from typing import Any, Generic, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.database.base import Base

ModelType = TypeVar('ModelType', bound=Base)
CreateSchemaType = TypeVar('CreateSchemaType', bound=BaseModel)
UpdateSchemaType = TypeVar('UpdateSchemaType', bound=BaseModel)


class DatabaseService(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Базовые операции с одной моделью.

    Фильтры передаются готовыми выражениями SQLAlchemy, например
    `item_crud.get_multi(session, filters=[Item.owner_id == owner_id])`.
    """

    def __init__(self, model: Type[ModelType]) -> None:
        self.model = model

    async def get(
        self,
        session: AsyncSession,
        *,
        id: int,
    ) -> ModelType | None:
        """Объект по ID или None."""
        return await session.get(self.model, id)

    async def get_multi(
        self,
        session: AsyncSession,
        *,
        filters: Sequence[Any] = (),
        order_by: Sequence[Any] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[ModelType]:
        """Список объектов по условиям, по умолчанию в порядке ID.

        Args:
            session: Асинхронная сессия БД
            filters: Условия отбора
            order_by: Сортировка
            skip: Сколько записей пропустить
            limit: Максимум записей, None - без ограничения

        """
        stmt = (
            select(self.model)
            .where(*filters)
            .order_by(*(order_by or (self.model.id,)))
            .offset(skip)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def create(
        self,
        session: AsyncSession,
        *,
        obj_in: CreateSchemaType,
        **extra_fields: Any,
    ) -> ModelType:
        """Создаёт объект из схемы и полей, которых в схеме нет.

        Например, `owner_id` вещи берётся из заголовка запроса, а не из
        тела.
        """
        db_obj = self.model(**obj_in.model_dump(), **extra_fields)
        session.add(db_obj)
        await session.commit()
        await session.refresh(db_obj)
        return db_obj

    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType,
    ) -> ModelType:
        """Применяет к объекту только явно переданные поля."""
        for field, value in obj_in.model_dump(exclude_unset=True).items():
            setattr(db_obj, field, value)
        await session.commit()
        await session.refresh(db_obj)
        return db_obj

    async def exists(self, session: AsyncSession, *conditions: Any) -> bool:
        """Есть ли хотя бы одна запись, подходящая под условия."""
        result = await session.execute(
            select(exists().where(*conditions)),
        )
        return bool(result.scalar())
