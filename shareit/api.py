from fastapi import APIRouter

from shareit.booking.views import router as booking_router
from shareit.items.views import router as item_router
from shareit.requests.views import router as request_router
from shareit.users.views import router as user_router


main_router = APIRouter()

main_router.include_router(user_router, prefix='/users', tags=['Пользователи'])
main_router.include_router(item_router, prefix='/items', tags=['Вещи'])
main_router.include_router(
    booking_router,
    prefix='/bookings',
    tags=['Бронирования'],
)
main_router.include_router(
    request_router,
    prefix='/requests',
    tags=['Запросы вещей'],
)
