from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from shareit.common.responses import (
    create_responses,
    list_responses,
    retrieve_responses,
)
from shareit.config import settings
from shareit.requests.dependencies import get_item_request_service
from shareit.requests.schemas import ItemRequestCreate, ItemRequestInfo
from shareit.requests.services import ItemRequestService
from shareit.users.dependencies import get_requester_id


router = APIRouter()


@router.post(
    '',
    response_model=ItemRequestInfo,
    status_code=status.HTTP_201_CREATED,
    summary='Создать запрос вещи',
    responses=create_responses(),
)
async def create_request(
    request_data: ItemRequestCreate,
    requester_id: int = Depends(get_requester_id),
    service: ItemRequestService = Depends(get_item_request_service),
) -> ItemRequestInfo:
    return await service.add_request(
        request_in=request_data,
        requester_id=requester_id,
    )


@router.get(
    '',
    response_model=List[ItemRequestInfo],
    summary='Собственные запросы',
    description='Запросы пользователя с ответами на них, от новых к старым.',
    responses=list_responses(),
)
async def get_own_requests(
    requester_id: int = Depends(get_requester_id),
    service: ItemRequestService = Depends(get_item_request_service),
) -> List[ItemRequestInfo]:
    return await service.get_own_requests(requester_id=requester_id)


@router.get(
    '/all',
    response_model=List[ItemRequestInfo],
    summary='Запросы других пользователей',
    description='Без параметра size возвращаются все запросы.',
    responses=list_responses(),
)
async def get_other_requests(
    offset: int = Query(0, alias='from', ge=0),
    size: Optional[int] = Query(
        None,
        ge=1,
        le=settings.booking.MAX_PAGE_SIZE,
    ),
    requester_id: int = Depends(get_requester_id),
    service: ItemRequestService = Depends(get_item_request_service),
) -> List[ItemRequestInfo]:
    return await service.get_other_requests(
        requester_id=requester_id,
        offset=offset,
        limit=size,
    )


@router.get(
    '/{request_id}',
    response_model=ItemRequestInfo,
    summary='Получение запроса по ID',
    responses=retrieve_responses(),
)
async def get_request(
    request_id: int,
    requester_id: int = Depends(get_requester_id),
    service: ItemRequestService = Depends(get_item_request_service),
) -> ItemRequestInfo:
    return await service.get_request(
        request_id=request_id,
        requester_id=requester_id,
    )
