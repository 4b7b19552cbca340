import asyncio
from datetime import timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from shareit.booking.approval import determine_status
from shareit.booking.constants import BookingError, BookingStatus
from shareit.booking.exceptions import BookingException
from shareit.booking.schemas import BookingCreate
from shareit.booking.services import BookingService
from shareit.cache import RedisCache
from shareit.common.exceptions import (
    ItemNotFoundException,
    UserNotFoundException,
)
from shareit.config import SweepBoundary
from shareit.database import Base, now_utc
from tests.factories import create_booking, create_item, create_user
from tests.fakes import ExpiringLock, FakeRedis


HOUR = timedelta(hours=1)
DAY = timedelta(days=1)


@pytest_asyncio.fixture
async def world(db_session):  # noqa
    owner = await create_user(db_session, 'owner')
    booker = await create_user(db_session, 'booker')
    other = await create_user(db_session, 'other')
    item = await create_item(db_session, owner)
    return {'owner': owner, 'booker': booker, 'other': other, 'item': item}


@pytest.fixture
def service(db_session, cache):  # noqa
    return BookingService(session=db_session, cache=cache)


def booking_in(item, start, end):  # noqa
    return BookingCreate(item_id=item.id, start=start, end=end)


async def assert_rejected(coro, reason):  # noqa
    with pytest.raises(BookingException) as exc_info:
        await coro
    assert exc_info.value.reason == reason
    return exc_info.value


@pytest.mark.asyncio
async def test_booking_free_item(service, world):  # noqa
    now = now_utc()
    booking = await service.add_booking(
        booking_in=booking_in(
            world['item'],
            now + timedelta(minutes=1),
            now + DAY,
        ),
        booker_id=world['booker'].id,
    )
    assert booking.id is not None
    assert booking.approved is None
    assert determine_status(booking) == BookingStatus.WAITING
    assert booking.item.name == world['item'].name
    assert booking.booker.id == world['booker'].id


@pytest.mark.asyncio
async def test_nested_booking_rejected(service, world, db_session):  # noqa
    now = now_utc()
    await create_booking(
        db_session, world['item'], world['other'], now + HOUR, now + 2 * HOUR,
    )
    error = await assert_rejected(
        service.add_booking(
            booking_in=booking_in(
                world['item'],
                now + 1.5 * HOUR,
                now + 1.75 * HOUR,
            ),
            booker_id=world['booker'].id,
        ),
        BookingError.TIME_WINDOW_OCCUPIED,
    )
    assert error.status_code == 409


@pytest.mark.asyncio
async def test_nested_booking_accepted_by_start_boundary(  # noqa
    db_session, cache, world,
):
    now = now_utc()
    await create_booking(
        db_session, world['item'], world['other'], now + HOUR, now + 2 * HOUR,
    )
    service = BookingService(
        session=db_session,
        cache=cache,
        sweep_boundary=SweepBoundary.START,
    )
    booking = await service.add_booking(
        booking_in=booking_in(
            world['item'],
            now + 1.5 * HOUR,
            now + 1.75 * HOUR,
        ),
        booker_id=world['booker'].id,
    )
    assert booking.id is not None


@pytest.mark.asyncio
async def test_booking_after_approved_booking(service, world):  # noqa
    now = now_utc()
    first = await service.add_booking(
        booking_in=booking_in(world['item'], now + HOUR, now + 2 * HOUR),
        booker_id=world['booker'].id,
    )
    await service.set_approval(
        booking_id=first.id,
        approved=True,
        requester_id=world['owner'].id,
    )
    second = await service.add_booking(
        booking_in=booking_in(world['item'], now + 3 * HOUR, now + 4 * HOUR),
        booker_id=world['other'].id,
    )
    assert second.id > first.id


@pytest.mark.asyncio
async def test_rejected_booking_does_not_block(  # noqa
    service, world, db_session,
):
    now = now_utc()
    await create_booking(
        db_session,
        world['item'],
        world['other'],
        now + HOUR,
        now + 2 * HOUR,
        approved=False,
    )
    booking = await service.add_booking(
        booking_in=booking_in(
            world['item'],
            now + 1.5 * HOUR,
            now + 1.75 * HOUR,
        ),
        booker_id=world['booker'].id,
    )
    assert booking.approved is None


@pytest.mark.asyncio
async def test_owner_cannot_book_own_item(service, world):  # noqa
    now = now_utc()
    error = await assert_rejected(
        service.add_booking(
            booking_in=booking_in(world['item'], now + HOUR, now + 2 * HOUR),
            booker_id=world['owner'].id,
        ),
        BookingError.CANT_BOOK_OWNED_ITEM,
    )
    assert error.status_code == 404


@pytest.mark.asyncio
async def test_end_checked_before_item_lookup(service, world):  # noqa
    now = now_utc()
    with pytest.raises(BookingException) as exc_info:
        await service.add_booking(
            booking_in=BookingCreate(item_id=999, start=now + HOUR, end=now),
            booker_id=world['booker'].id,
        )
    assert exc_info.value.reason == BookingError.END_BEFORE_OR_EQUALS_START
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_missing_item_and_booker(service, world):  # noqa
    # Откат после отказа сбрасывает загруженные объекты, ID читаем заранее.
    now = now_utc()
    item_id = world['item'].id
    booker_id = world['booker'].id
    with pytest.raises(ItemNotFoundException):
        await service.add_booking(
            booking_in=BookingCreate(
                item_id=999,
                start=now + HOUR,
                end=now + 2 * HOUR,
            ),
            booker_id=booker_id,
        )
    with pytest.raises(UserNotFoundException):
        await service.add_booking(
            booking_in=BookingCreate(
                item_id=item_id,
                start=now + HOUR,
                end=now + 2 * HOUR,
            ),
            booker_id=999,
        )


@pytest.mark.asyncio
async def test_unavailable_item(service, world, db_session):  # noqa
    now = now_utc()
    item = await create_item(db_session, world['owner'], available=False)
    await assert_rejected(
        service.add_booking(
            booking_in=booking_in(item, now + HOUR, now + 2 * HOUR),
            booker_id=world['booker'].id,
        ),
        BookingError.ITEM_NOT_AVAILABLE,
    )


@pytest.mark.asyncio
async def test_concurrent_bookings_for_same_window(tmp_path, cache):  # noqa
    engine = create_async_engine(f'sqlite+aiosqlite:///{tmp_path}/race.db')
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)

    async with factory() as session:
        owner = await create_user(session, 'owner')
        first = await create_user(session, 'first')
        second = await create_user(session, 'second')
        item = await create_item(session, owner)

    now = now_utc()

    async def reserve(user_id):  # noqa
        async with factory() as session:
            service = BookingService(session=session, cache=cache)
            booking = await service.add_booking(
                booking_in=booking_in(item, now + HOUR, now + 2 * HOUR),
                booker_id=user_id,
            )
            return booking.id

    results = await asyncio.gather(
        reserve(first.id),
        reserve(second.id),
        return_exceptions=True,
    )
    await engine.dispose()

    created = [r for r in results if isinstance(r, int)]
    rejected = [r for r in results if isinstance(r, BookingException)]
    assert len(created) == 1
    assert len(rejected) == 1
    assert rejected[0].reason == BookingError.TIME_WINDOW_OCCUPIED


@pytest.mark.asyncio
async def test_approval_is_set_once(service, world, db_session):  # noqa
    now = now_utc()
    booking = await create_booking(
        db_session, world['item'], world['booker'], now + HOUR, now + 2 * HOUR,
    )
    approved = await service.set_approval(
        booking_id=booking.id,
        approved=True,
        requester_id=world['owner'].id,
    )
    assert determine_status(approved) == BookingStatus.APPROVED

    for decision in (True, False):
        await assert_rejected(
            service.set_approval(
                booking_id=booking.id,
                approved=decision,
                requester_id=world['owner'].id,
            ),
            BookingError.APPROVAL_ALREADY_SET,
        )


@pytest.mark.asyncio
async def test_reject_booking(service, world, db_session):  # noqa
    now = now_utc()
    booking = await create_booking(
        db_session, world['item'], world['booker'], now + HOUR, now + 2 * HOUR,
    )
    rejected = await service.set_approval(
        booking_id=booking.id,
        approved=False,
        requester_id=world['owner'].id,
    )
    assert determine_status(rejected) == BookingStatus.REJECTED


@pytest.mark.asyncio
async def test_approval_by_not_owner(service, world, db_session):  # noqa
    now = now_utc()
    booking = await create_booking(
        db_session, world['item'], world['booker'], now + HOUR, now + 2 * HOUR,
    )
    error = await assert_rejected(
        service.set_approval(
            booking_id=booking.id,
            approved=True,
            requester_id=world['booker'].id,
        ),
        BookingError.WRONG_USER_UPDATING_BOOKING,
    )
    assert error.status_code == 404
    await assert_rejected(
        service.set_approval(
            booking_id=999,
            approved=True,
            requester_id=world['owner'].id,
        ),
        BookingError.BOOKING_NOT_FOUND,
    )


@pytest.mark.asyncio
async def test_get_booking_visibility(service, world, db_session):  # noqa
    now = now_utc()
    booking = await create_booking(
        db_session, world['item'], world['booker'], now + HOUR, now + 2 * HOUR,
    )
    for requester in (world['booker'], world['owner']):
        found = await service.get_booking(
            booking_id=booking.id,
            requester_id=requester.id,
        )
        assert found.id == booking.id

    await assert_rejected(
        service.get_booking(
            booking_id=booking.id,
            requester_id=world['other'].id,
        ),
        BookingError.CANT_VIEW_UNRELATED_BOOKING,
    )


@pytest_asyncio.fixture
async def timeline(world, db_session):  # noqa
    now = now_utc()
    item, booker = world['item'], world['booker']
    return now, {
        'past': await create_booking(
            db_session, item, booker, now - 3 * DAY, now - 2 * DAY, True,
        ),
        'current': await create_booking(
            db_session, item, booker, now - HOUR, now + HOUR, True,
        ),
        'future': await create_booking(
            db_session, item, booker, now + DAY, now + 2 * DAY,
        ),
        'rejected': await create_booking(
            db_session, item, booker, now + 3 * DAY, now + 4 * DAY, False,
        ),
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ('state', 'expected'),
    [
        (None, ['rejected', 'future', 'current', 'past']),
        ('ALL', ['rejected', 'future', 'current', 'past']),
        ('waiting', ['future']),
        ('REJECTED', ['rejected']),
        ('past', ['past']),
        ('FUTURE', ['rejected', 'future']),
        ('current', ['current']),
    ],
)
async def test_list_bookings_by_state(  # noqa
    service, world, timeline, state, expected,
):
    now, bookings = timeline
    expected_ids = [bookings[name].id for name in expected]

    as_booker = await service.list_bookings(
        booker_id=world['booker'].id,
        state=state,
        now=now,
    )
    as_owner = await service.list_bookings(
        owner_id=world['owner'].id,
        state=state,
        now=now,
    )
    assert [b.id for b in as_booker] == expected_ids
    assert [b.id for b in as_owner] == expected_ids


@pytest.mark.asyncio
async def test_list_bookings_pagination(service, world, timeline):  # noqa
    now, bookings = timeline
    page = await service.list_bookings(
        booker_id=world['booker'].id,
        state='ALL',
        offset=1,
        limit=1,
        now=now,
    )
    assert [b.id for b in page] == [bookings['future'].id]


@pytest.mark.asyncio
async def test_list_bookings_unrelated_user(service, world, timeline):  # noqa
    now, _ = timeline
    assert await service.list_bookings(
        booker_id=world['other'].id,
        now=now,
    ) == []
    assert await service.list_bookings(now=now) == []


@pytest.mark.asyncio
async def test_list_bookings_errors(service, world):  # noqa
    error = await assert_rejected(
        service.list_bookings(
            booker_id=world['booker'].id,
            state='UNSUPPORTED_STATUS',
        ),
        BookingError.ILLEGAL_ARGUMENT,
    )
    assert error.message == 'Unknown state: UNSUPPORTED_STATUS'
    with pytest.raises(UserNotFoundException):
        await service.list_bookings(owner_id=999)


@pytest.mark.asyncio
async def test_last_and_next_single_future_booking(  # noqa
    service, world, db_session,
):
    now = now_utc()
    booking = await create_booking(
        db_session, world['item'], world['booker'], now + HOUR, now + 2 * HOUR,
    )
    last, next_ = await service.get_last_and_next(
        world['item'],
        world['owner'].id,
        now,
    )
    assert last is None
    assert next_.id == booking.id


@pytest.mark.asyncio
async def test_last_and_next_hidden_from_non_owner(  # noqa
    service, world, timeline,
):
    now, _ = timeline
    for user in (world['booker'], world['other']):
        assert await service.get_last_and_next(
            world['item'],
            user.id,
            now,
        ) == (None, None)


@pytest.mark.asyncio
async def test_last_and_next_current_booking(service, world, timeline):  # noqa
    now, bookings = timeline
    last, next_ = await service.get_last_and_next(
        world['item'],
        world['owner'].id,
        now,
    )
    assert last.id == bookings['current'].id
    assert next_.id == bookings['future'].id


@pytest.mark.asyncio
async def test_last_falls_back_to_past_booking(  # noqa
    service, world, db_session,
):
    now = now_utc()
    item, booker = world['item'], world['booker']
    await create_booking(db_session, item, booker, now - 5 * DAY, now - 4 * DAY)
    past = await create_booking(
        db_session, item, booker, now - 3 * DAY, now - 2 * DAY, False,
    )
    future = await create_booking(
        db_session, item, booker, now + DAY, now + 2 * DAY, True,
    )
    last, next_ = await service.get_last_and_next(item, world['owner'].id, now)
    assert last.id == past.id
    assert next_.id == future.id


@pytest.mark.asyncio
async def test_no_active_bookings_skips_past_lookup(  # noqa
    service, world, db_session,
):
    now = now_utc()
    await create_booking(
        db_session,
        world['item'],
        world['booker'],
        now - 3 * DAY,
        now - 2 * DAY,
        True,
    )
    assert await service.get_last_and_next(
        world['item'],
        world['owner'].id,
        now,
    ) == (None, None)


@pytest.mark.asyncio
async def test_has_used_item(service, world, timeline):  # noqa
    now, _ = timeline
    assert await service.has_used_item(
        author_id=world['booker'].id,
        item_id=world['item'].id,
        now=now,
    )
    assert not await service.has_used_item(
        author_id=world['other'].id,
        item_id=world['item'].id,
        now=now,
    )


@pytest.mark.asyncio
async def test_booking_kept_when_lock_expires(world, db_session):  # noqa
    cache = RedisCache()
    cache._client = FakeRedis(ExpiringLock())
    service = BookingService(session=db_session, cache=cache)
    now = now_utc()

    booking = await service.add_booking(
        booking_in=booking_in(world['item'], now + HOUR, now + 2 * HOUR),
        booker_id=world['booker'].id,
    )

    assert booking.id is not None
    stored = await service.get_booking(
        booking_id=booking.id,
        requester_id=world['booker'].id,
    )
    assert stored.approved is None
