from typing import List, Sequence

from fastapi import APIRouter, Depends, status

from shareit.common.responses import create_responses, retrieve_responses
from shareit.users.dependencies import get_user_service
from shareit.users.models import User
from shareit.users.schemas import UserCreate, UserInfo, UserUpdate
from shareit.users.services import UserService


router = APIRouter()


@router.post(
    '',
    response_model=UserInfo,
    status_code=status.HTTP_201_CREATED,
    summary='Регистрация нового пользователя',
    responses=create_responses(),
)
async def create_user(
    user_create: UserCreate,
    service: UserService = Depends(get_user_service),
) -> User:
    """Регистрирует пользователя. Email должен быть уникальным."""
    return await service.create_user(user_in=user_create)


@router.get(
    '',
    response_model=List[UserInfo],
    status_code=status.HTTP_200_OK,
    summary='Список всех пользователей',
)
async def list_users(
    service: UserService = Depends(get_user_service),
) -> Sequence[User]:
    return await service.list_users()


@router.get(
    '/{user_id}',
    response_model=UserInfo,
    status_code=status.HTTP_200_OK,
    summary='Получение данных пользователя по id',
    responses=retrieve_responses(),
)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> User:
    """Возвращает пользователя по id."""
    return await service.get_user(user_id=user_id)


@router.patch(
    '/{user_id}',
    response_model=UserInfo,
    status_code=status.HTTP_200_OK,
    summary='Изменение имени или email пользователя',
    responses=create_responses(),
)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> User:
    """Обновляет переданные поля. Новый email должен быть свободен."""
    return await service.update_user(user_id=user_id, user_in=user_update)


@router.delete(
    '/{user_id}',
    status_code=status.HTTP_200_OK,
    summary='Удаление пользователя',
    responses=retrieve_responses(),
)
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> None:
    """Удаляет пользователя вместе с его вещами, бронями и запросами."""
    await service.delete_user(user_id=user_id)
