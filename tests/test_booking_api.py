from datetime import timedelta

import pytest
import pytest_asyncio

from shareit.database import now_utc
from tests.factories import create_item, create_user


BOOKINGS_URL = '/bookings'
HEADER = 'X-Sharer-User-Id'
HOUR = timedelta(hours=1)


def as_user(user):  # noqa
    return {HEADER: str(user.id)}


def payload(item, start, end):  # noqa
    return {
        'item_id': item.id,
        'start': start.isoformat(),
        'end': end.isoformat(),
    }


@pytest_asyncio.fixture
async def world(db_session):  # noqa
    owner = await create_user(db_session, 'owner')
    booker = await create_user(db_session, 'booker')
    other = await create_user(db_session, 'other')
    item = await create_item(db_session, owner)
    return {'owner': owner, 'booker': booker, 'other': other, 'item': item}


async def book(client, world, start, end, user='booker'):  # noqa
    return await client.post(
        BOOKINGS_URL,
        json=payload(world['item'], start, end),
        headers=as_user(world[user]),
    )


@pytest.mark.asyncio
async def test_booking_lifecycle(client, world):  # noqa
    now = now_utc()
    response = await book(client, world, now + HOUR, now + 2 * HOUR)
    assert response.status_code == 201
    booking = response.json()
    assert booking['status'] == 'WAITING'
    assert booking['booker'] == {
        'id': world['booker'].id,
        'name': 'booker',
    }
    assert booking['item'] == {'id': world['item'].id, 'name': 'Дрель'}

    url = f'{BOOKINGS_URL}/{booking["id"]}'
    response = await client.patch(
        url,
        params={'approved': 'true'},
        headers=as_user(world['owner']),
    )
    assert response.status_code == 200
    assert response.json()['status'] == 'APPROVED'

    response = await client.patch(
        url,
        params={'approved': 'false'},
        headers=as_user(world['owner']),
    )
    assert response.status_code == 400
    assert response.json()['error'] == 'ApprovalAlreadySet'

    for user in ('booker', 'owner'):
        response = await client.get(url, headers=as_user(world[user]))
        assert response.status_code == 200
        assert response.json()['status'] == 'APPROVED'

    response = await client.get(url, headers=as_user(world['other']))
    assert response.status_code == 404
    assert response.json()['error'] == 'CantViewUnrelatedBooking'


@pytest.mark.asyncio
async def test_booking_rejections(client, world):  # noqa
    now = now_utc()
    response = await book(client, world, now + 2 * HOUR, now + HOUR)
    assert response.status_code == 400
    assert response.json()['error'] == 'EndBeforeOrEqualsStart'

    response = await book(client, world, now + HOUR, now + 2 * HOUR, 'owner')
    assert response.status_code == 404
    assert response.json()['error'] == 'CantBookOwnedItem'

    assert (
        await book(client, world, now + HOUR, now + 2 * HOUR)
    ).status_code == 201
    response = await book(
        client,
        world,
        now + 1.5 * HOUR,
        now + 1.75 * HOUR,
        'other',
    )
    assert response.status_code == 409
    assert response.json()['error'] == 'TimeWindowOccupied'


@pytest.mark.asyncio
async def test_booking_missing_item(client, world):  # noqa
    now = now_utc()
    response = await client.post(
        BOOKINGS_URL,
        json={
            'item_id': 999,
            'start': (now + HOUR).isoformat(),
            'end': (now + 2 * HOUR).isoformat(),
        },
        headers=as_user(world['booker']),
    )
    assert response.status_code == 404
    assert response.json()['error'] == 'ItemNotFound'


@pytest.mark.asyncio
async def test_booking_requires_user_header(client, world):  # noqa
    now = now_utc()
    response = await client.post(
        BOOKINGS_URL,
        json=payload(world['item'], now + HOUR, now + 2 * HOUR),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_aware_datetimes_are_normalized(client, world):  # noqa
    now = now_utc()
    response = await client.post(
        BOOKINGS_URL,
        json={
            'item_id': world['item'].id,
            'start': (now + 10 * HOUR).isoformat() + '+03:00',
            'end': (now + 11 * HOUR).isoformat() + '+03:00',
        },
        headers=as_user(world['booker']),
    )
    assert response.status_code == 201
    start = response.json()['start']
    assert start.startswith((now + 7 * HOUR).isoformat()[:16])


@pytest.mark.asyncio
async def test_list_bookings(client, world):  # noqa
    now = now_utc()
    ids = []
    for day in (1, 2, 3):
        start = now + timedelta(days=day)
        response = await book(client, world, start, start + HOUR)
        ids.append(response.json()['id'])

    response = await client.get(
        BOOKINGS_URL,
        headers=as_user(world['booker']),
    )
    assert response.status_code == 200
    assert [b['id'] for b in response.json()] == ids[::-1]

    response = await client.get(
        BOOKINGS_URL,
        params={'state': 'waiting', 'from': 1, 'size': 1},
        headers=as_user(world['booker']),
    )
    assert [b['id'] for b in response.json()] == [ids[1]]

    response = await client.get(
        f'{BOOKINGS_URL}/owner',
        params={'state': 'FUTURE'},
        headers=as_user(world['owner']),
    )
    assert [b['id'] for b in response.json()] == ids[::-1]

    response = await client.get(
        f'{BOOKINGS_URL}/owner',
        headers=as_user(world['booker']),
    )
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_bookings_errors(client, world):  # noqa
    response = await client.get(
        BOOKINGS_URL,
        params={'state': 'UNSUPPORTED_STATUS'},
        headers=as_user(world['booker']),
    )
    assert response.status_code == 400
    assert response.json()['message'] == 'Unknown state: UNSUPPORTED_STATUS'

    response = await client.get(
        BOOKINGS_URL,
        params={'state': 'approved'},
        headers=as_user(world['booker']),
    )
    assert response.status_code == 400
    assert response.json()['message'] == 'Unknown state: approved'

    response = await client.get(BOOKINGS_URL, headers={HEADER: '999'})
    assert response.status_code == 404
    assert response.json()['error'] == 'UserNotFound'

    response = await client.get(
        BOOKINGS_URL,
        params={'from': -1},
        headers=as_user(world['booker']),
    )
    assert response.status_code == 422
