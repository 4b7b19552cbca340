from typing import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.cache import RedisCache, key_user_exists
from shareit.common.exceptions import (
    BadRequestException,
    ConflictException,
    UserNotFoundException,
)
from shareit.common.logging import log_action, log_system_crud
from shareit.config import settings
from shareit.users.crud import user_crud
from shareit.users.models import User
from shareit.users.schemas import UserCreate, UserUpdate


class UserService:
    """Сервис пользователей.

    Отвечает за регистрацию, изменение и удаление пользователей, а также
    за проверку их существования для остальных доменов.
    """

    def __init__(self, session: AsyncSession, cache: RedisCache) -> None:
        """Инициализирует сервис с сессией БД и кэшем."""
        self.session = session
        self.cache = cache

    @log_action('Создание пользователя')
    async def create_user(self, *, user_in: UserCreate) -> User:
        """Создаёт пользователя, email должен быть уникальным."""
        if await user_crud.get_by_email(self.session, user_in.email):
            raise self._duplicate_email(user_in.email)

        try:
            user = await user_crud.create(self.session, obj_in=user_in)
        except IntegrityError as e:
            await self.session.rollback()
            raise self._duplicate_email(user_in.email) from e

        log_system_crud('create', 'user', object_id=user.id)
        return user

    async def get_user(
        self,
        *,
        user_id: int,
        context: str = 'получения',
    ) -> User:
        """Возвращает пользователя или поднимает UserNotFound."""
        user = await user_crud.get(self.session, id=user_id)
        if user is None:
            raise UserNotFoundException(user_id, context)
        return user

    async def list_users(self) -> Sequence[User]:
        return await user_crud.get_multi(self.session)

    @log_action('Изменение пользователя')
    async def update_user(
        self,
        *,
        user_id: int,
        user_in: UserUpdate,
    ) -> User:
        """Частично обновляет пользователя.

        Raises:
            BadRequestException: Нет полей для обновления
            UserNotFoundException: Пользователь не найден
            ConflictException: Email занят другим пользователем

        """
        if not user_in.model_fields_set:
            raise BadRequestException(
                'Пустой запрос: нет полей для обновления.',
                error='EmptyUserPatchRequest',
            )
        user = await self.get_user(user_id=user_id, context='обновления')

        if user_in.email is not None:
            holder = await user_crud.get_by_email(self.session, user_in.email)
            if holder is not None and holder.id != user_id:
                raise self._duplicate_email(user_in.email)

        try:
            user = await user_crud.update(
                self.session,
                db_obj=user,
                obj_in=user_in,
            )
        except IntegrityError as e:
            await self.session.rollback()
            raise self._duplicate_email(user_in.email) from e

        log_system_crud(
            'update',
            'user',
            object_id=user_id,
            user_id=user_id,
            details=user_in.model_dump(exclude_unset=True),
        )
        return user

    @log_action('Удаление пользователя')
    async def delete_user(self, *, user_id: int) -> None:
        """Удаляет пользователя, его вещи, брони, отзывы и запросы."""
        if not await user_crud.exists(self.session, User.id == user_id):
            raise UserNotFoundException(user_id, 'удаления')

        try:
            await user_crud.remove_with_dependents(self.session, user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.cache.delete(key_user_exists(user_id))
        log_system_crud('delete', 'user', object_id=user_id, user_id=user_id)

    async def user_exists(self, user_id: int) -> bool:
        """Проверяет существование пользователя.

        Кэшируется только положительный результат: отрицательный ответ
        может устареть сразу после регистрации. Удаление пользователя
        сбрасывает ключ.
        """
        key = key_user_exists(user_id)
        if await self.cache.get(key):
            return True

        found = await user_crud.exists(self.session, User.id == user_id)
        if found:
            await self.cache.set(
                key,
                True,
                ttl=settings.cache.TTL_USER_EXISTS,
            )
        return found

    async def ensure_user_exists(
        self,
        user_id: int,
        context: str = 'получения',
    ) -> None:
        """Поднимает UserNotFound, если пользователя нет."""
        if not await self.user_exists(user_id):
            raise UserNotFoundException(user_id, context)

    @staticmethod
    def _duplicate_email(email: str) -> ConflictException:
        return ConflictException(
            message=f'Пользователь с email {email} уже существует.',
            error='DuplicateEmail',
        )
