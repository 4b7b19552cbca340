from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.booking.models import Booking
from shareit.database import DatabaseService
from shareit.items.models import Comment, Item
from shareit.requests.models import ItemRequest
from shareit.users.models import User
from shareit.users.schemas import UserCreate, UserUpdate


class UserCRUD(DatabaseService[User, UserCreate, UserUpdate]):
    """CRUD для модели User."""

    async def get_by_email(
        self,
        session: AsyncSession,
        email: str,
    ) -> User | None:
        """Получает пользователя по email без учёта регистра."""
        result = await session.execute(
            select(self.model).where(
                self.model.email.ilike(email),
            ),
        )
        return result.scalars().first()

    async def remove_with_dependents(
        self,
        session: AsyncSession,
        user_id: int,
    ) -> None:
        """Удаляет пользователя вместе с его вещами, бронями и отзывами.

        Каскад выполняется явно: SQLite без `PRAGMA foreign_keys` не
        применяет ON DELETE. Вещи других владельцев, добавленные в ответ
        на запросы пользователя, остаются без ссылки на запрос. Коммит
        выполняет вызывающий.
        """
        owned_items = select(Item.id).where(Item.owner_id == user_id)
        own_requests = select(ItemRequest.id).where(
            ItemRequest.requester_id == user_id,
        )
        statements = (
            delete(Booking).where(or_(
                Booking.booker_id == user_id,
                Booking.item_id.in_(owned_items),
            )),
            delete(Comment).where(or_(
                Comment.author_id == user_id,
                Comment.item_id.in_(owned_items),
            )),
            delete(Item).where(Item.owner_id == user_id),
            update(Item)
            .where(Item.request_id.in_(own_requests))
            .values(request_id=None),
            delete(ItemRequest).where(ItemRequest.requester_id == user_id),
            delete(User).where(User.id == user_id),
        )
        for stmt in statements:
            await session.execute(
                stmt.execution_options(synchronize_session=False),
            )


user_crud = UserCRUD(User)
