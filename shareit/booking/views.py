from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from shareit.booking.dependencies import get_booking_service
from shareit.booking.schemas import BookingCreate, BookingInfo
from shareit.booking.services import BookingService
from shareit.common.dependencies import Pagination
from shareit.common.responses import (
    create_responses,
    list_responses,
    retrieve_responses,
    update_responses,
)
from shareit.users.dependencies import get_requester_id


router = APIRouter()


@router.post(
    '',
    response_model=BookingInfo,
    status_code=status.HTTP_201_CREATED,
    summary='Создать бронирование',
    description='Создать бронирование вещи на интервал [start, end). '
    'Владелец вещи не может бронировать её сам.',
    responses=create_responses(),
)
async def create_booking(
    booking_data: BookingCreate,
    requester_id: int = Depends(get_requester_id),
    service: BookingService = Depends(get_booking_service),
) -> BookingInfo:
    """Создаёт новое бронирование в статусе WAITING."""
    booking = await service.add_booking(
        booking_in=booking_data,
        booker_id=requester_id,
    )
    return BookingInfo.from_booking(booking)


@router.get(
    '',
    response_model=List[BookingInfo],
    summary='Бронирования пользователя',
    description='Бронирования, созданные пользователем, от новых к старым.',
    responses=list_responses(),
)
async def get_booker_bookings(
    state: Optional[str] = Query(
        None,
        description='ALL, WAITING, REJECTED, CURRENT, PAST или FUTURE',
    ),
    page: Pagination = Depends(),
    requester_id: int = Depends(get_requester_id),
    service: BookingService = Depends(get_booking_service),
) -> List[BookingInfo]:
    """Обработчик GET /bookings."""
    bookings = await service.list_bookings(
        booker_id=requester_id,
        state=state,
        offset=page.offset,
        limit=page.limit,
    )
    return [BookingInfo.from_booking(b) for b in bookings]


@router.get(
    '/owner',
    response_model=List[BookingInfo],
    summary='Бронирования вещей владельца',
    description='Бронирования вещей пользователя, от новых к старым.',
    responses=list_responses(),
)
async def get_owner_bookings(
    state: Optional[str] = Query(
        None,
        description='ALL, WAITING, REJECTED, CURRENT, PAST или FUTURE',
    ),
    page: Pagination = Depends(),
    requester_id: int = Depends(get_requester_id),
    service: BookingService = Depends(get_booking_service),
) -> List[BookingInfo]:
    """Обработчик GET /bookings/owner."""
    bookings = await service.list_bookings(
        owner_id=requester_id,
        state=state,
        offset=page.offset,
        limit=page.limit,
    )
    return [BookingInfo.from_booking(b) for b in bookings]


@router.get(
    '/{booking_id}',
    response_model=BookingInfo,
    summary='Получение информации о бронировании по ID',
    description='Бронирование доступно его автору и владельцу вещи.',
    responses=retrieve_responses(),
)
async def get_booking_by_id(
    booking_id: int,
    requester_id: int = Depends(get_requester_id),
    service: BookingService = Depends(get_booking_service),
) -> BookingInfo:
    """Получает бронирование по ID с учётом прав доступа."""
    booking = await service.get_booking(
        booking_id=booking_id,
        requester_id=requester_id,
    )
    return BookingInfo.from_booking(booking)


@router.patch(
    '/{booking_id}',
    response_model=BookingInfo,
    summary='Одобрение или отклонение бронирования',
    description='Решение принимает владелец вещи, один раз.',
    responses=update_responses(),
)
async def set_booking_approval(
    booking_id: int,
    approved: bool = Query(..., description='true - одобрить'),
    requester_id: int = Depends(get_requester_id),
    service: BookingService = Depends(get_booking_service),
) -> BookingInfo:
    """Записывает решение владельца по бронированию."""
    booking = await service.set_approval(
        booking_id=booking_id,
        approved=approved,
        requester_id=requester_id,
    )
    return BookingInfo.from_booking(booking)
