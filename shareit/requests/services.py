from collections import defaultdict
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.cache import RedisCache
from shareit.common.exceptions import RequestNotFoundException
from shareit.common.logging import log_action, log_system_crud
from shareit.items.crud import item_crud
from shareit.items.schemas import ItemInfo
from shareit.requests.crud import item_request_crud
from shareit.requests.models import ItemRequest
from shareit.requests.schemas import ItemRequestCreate, ItemRequestInfo
from shareit.users.services import UserService


class ItemRequestService:
    """Сервис запросов вещей.

    Запрос видят все пользователи; владелец, добавляя вещь, может
    указать ID запроса, и вещь появится в ответе на него.
    """

    def __init__(self, session: AsyncSession, cache: RedisCache) -> None:
        self.session = session
        self.users = UserService(session=session, cache=cache)

    @log_action('Создание запроса вещи')
    async def add_request(
        self,
        *,
        request_in: ItemRequestCreate,
        requester_id: int,
    ) -> ItemRequestInfo:
        await self.users.ensure_user_exists(
            requester_id,
            'создания запроса вещи',
        )
        request = await item_request_crud.create(
            self.session,
            obj_in=request_in,
            requester_id=requester_id,
        )
        log_system_crud(
            'create',
            'item_request',
            object_id=request.id,
            user_id=requester_id,
        )
        return (await self._with_items([request]))[0]

    async def get_request(
        self,
        *,
        request_id: int,
        requester_id: int,
    ) -> ItemRequestInfo:
        await self.users.ensure_user_exists(
            requester_id,
            'получения запроса вещи',
        )
        request = await item_request_crud.get(self.session, id=request_id)
        if request is None:
            raise RequestNotFoundException(request_id)
        return (await self._with_items([request]))[0]

    async def get_own_requests(
        self,
        *,
        requester_id: int,
    ) -> List[ItemRequestInfo]:
        """Собственные запросы пользователя, от новых к старым."""
        await self.users.ensure_user_exists(
            requester_id,
            'получения собственных запросов вещей',
        )
        requests = await item_request_crud.get_own(self.session, requester_id)
        return await self._with_items(requests)

    async def get_other_requests(
        self,
        *,
        requester_id: int,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[ItemRequestInfo]:
        """Запросы других пользователей, от новых к старым."""
        await self.users.ensure_user_exists(
            requester_id,
            'получения запросов других пользователей',
        )
        requests = await item_request_crud.get_others(
            self.session,
            requester_id,
            skip=offset,
            limit=limit,
        )
        return await self._with_items(requests)

    async def _with_items(
        self,
        requests: Sequence[ItemRequest],
    ) -> List[ItemRequestInfo]:
        items = await item_crud.get_by_requests(
            self.session,
            [request.id for request in requests],
        )
        by_request = defaultdict(list)
        for item in items:
            by_request[item.request_id].append(ItemInfo.model_validate(item))
        return [
            ItemRequestInfo(
                id=request.id,
                description=request.description,
                created=request.created_at,
                items=by_request[request.id],
            )
            for request in requests
        ]
