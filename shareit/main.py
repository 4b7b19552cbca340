from contextlib import asynccontextmanager
import time
from typing import AsyncGenerator, Awaitable, Callable

from fastapi import FastAPI, Request, Response

from shareit.api import main_router
from shareit.cache.client import cache
from shareit.common.exception_handlers import add_exception_handlers
from shareit.common.logging import log_system_api_request
from shareit.users.dependencies import USER_ID_HEADER


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Управляет жизненным циклом FastAPI-приложения."""
    await cache.connect()
    yield
    await cache.close()


app = FastAPI(title='ShareIt', lifespan=lifespan)

app.include_router(main_router)
add_exception_handlers(app)


@app.middleware('http')
async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Пишет каждый запрос в системный журнал."""
    started = time.perf_counter()
    response = await call_next(request)
    user_id = request.headers.get(USER_ID_HEADER)
    log_system_api_request(
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
        user_id=int(user_id) if user_id and user_id.isdigit() else None,
    )
    return response
