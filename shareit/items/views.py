from typing import List

from fastapi import APIRouter, Depends, Query, status

from shareit.common.dependencies import Pagination
from shareit.common.responses import (
    create_responses,
    list_responses,
    retrieve_responses,
    update_responses,
)
from shareit.items.dependencies import get_item_service
from shareit.items.models import Item
from shareit.items.schemas import (
    CommentCreate,
    CommentInfo,
    ItemCreate,
    ItemDetailInfo,
    ItemInfo,
    ItemUpdate,
)
from shareit.items.services import ItemService
from shareit.users.dependencies import get_requester_id


router = APIRouter()


@router.post(
    '',
    response_model=ItemInfo,
    status_code=status.HTTP_201_CREATED,
    summary='Добавить вещь',
    responses=create_responses(),
)
async def create_item(
    item_data: ItemCreate,
    requester_id: int = Depends(get_requester_id),
    service: ItemService = Depends(get_item_service),
) -> Item:
    """Добавляет вещь пользователя."""
    return await service.create_item(item_in=item_data, owner_id=requester_id)


@router.get(
    '',
    response_model=List[ItemDetailInfo],
    summary='Вещи владельца',
    responses=list_responses(),
)
async def get_owner_items(
    page: Pagination = Depends(),
    requester_id: int = Depends(get_requester_id),
    service: ItemService = Depends(get_item_service),
) -> List[ItemDetailInfo]:
    """Вещи пользователя с последней и ближайшей бронью."""
    return await service.get_owner_items(
        owner_id=requester_id,
        offset=page.offset,
        limit=page.limit,
    )


@router.get(
    '/search',
    response_model=List[ItemInfo],
    summary='Поиск вещей',
    description='Доступные вещи, в названии или описании которых '
    'встречается текст. Регистр не учитывается.',
)
async def search_items(
    text: str = Query('', description='Текст для поиска'),
    page: Pagination = Depends(),
    service: ItemService = Depends(get_item_service),
) -> List[Item]:
    """Обработчик GET /items/search."""
    return await service.search_items(
        text=text,
        offset=page.offset,
        limit=page.limit,
    )


@router.get(
    '/{item_id}',
    response_model=ItemDetailInfo,
    summary='Получение вещи по ID',
    description='Последняя и ближайшая брони видны только владельцу.',
    responses=retrieve_responses(),
)
async def get_item(
    item_id: int,
    requester_id: int = Depends(get_requester_id),
    service: ItemService = Depends(get_item_service),
) -> ItemDetailInfo:
    """Обработчик GET /items/{item_id}."""
    return await service.get_item_detail(
        item_id=item_id,
        requester_id=requester_id,
    )


@router.patch(
    '/{item_id}',
    response_model=ItemInfo,
    summary='Частичное обновление вещи',
    responses=update_responses(),
)
async def update_item(
    item_id: int,
    item_data: ItemUpdate,
    requester_id: int = Depends(get_requester_id),
    service: ItemService = Depends(get_item_service),
) -> Item:
    """Частично обновляет вещь. Доступно только владельцу."""
    return await service.update_item(
        item_id=item_id,
        item_in=item_data,
        requester_id=requester_id,
    )


@router.post(
    '/{item_id}/comment',
    response_model=CommentInfo,
    status_code=status.HTTP_201_CREATED,
    summary='Оставить отзыв о вещи',
    responses=create_responses(),
)
async def add_comment(
    item_id: int,
    comment_data: CommentCreate,
    requester_id: int = Depends(get_requester_id),
    service: ItemService = Depends(get_item_service),
) -> CommentInfo:
    """Отзыв может оставить пользователь, бравший вещь в аренду."""
    comment = await service.add_comment(
        item_id=item_id,
        comment_in=comment_data,
        author_id=requester_id,
    )
    return CommentInfo.from_comment(comment)
