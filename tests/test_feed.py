"""Tests for the discovery feed."""

import pytest

from devconnect.models.connection_request import ConnectionStatus
from devconnect.services.feed import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    build_exclusion_set,
    normalize_pagination,
)


@pytest.mark.parametrize("page, limit, expected", [
    (None, None, (1, DEFAULT_LIMIT)),
    ("2", "5", (2, 5)),
    (3, 1000, (3, MAX_LIMIT)),
    ("abc", "xyz", (1, DEFAULT_LIMIT)),
    (0, 0, (1, DEFAULT_LIMIT)),
    (-4, -1, (1, DEFAULT_LIMIT)),
    (1, MAX_LIMIT, (1, MAX_LIMIT)),
])
def test_normalize_pagination(page, limit, expected):
    assert normalize_pagination(page, limit) == expected


def test_exclusion_set_contains_both_endpoints_and_viewer():
    edges = [("v", "a"), ("b", "v"), ("v", "c")]
    assert build_exclusion_set(edges, "v") == {"v", "a", "b", "c"}


def test_exclusion_set_without_edges_is_only_viewer():
    assert build_exclusion_set([], "v") == {"v"}


@pytest.mark.asyncio
async def test_feed_excludes_every_interaction(make_user, requests_repo, feed_service):
    """Scenario: U1 interested in U2 and ignored U3; U4 and U5 stay visible."""
    u1, u2, u3, u4, u5 = [await make_user() for _ in range(5)]
    await requests_repo.create(u1.id, u2.id, ConnectionStatus.INTERESTED)
    await requests_repo.create(u1.id, u3.id, ConnectionStatus.IGNORED)

    ids = {p["id"] for p in await feed_service.get_feed(u1.id)}
    assert ids == {u4.id, u5.id}

    # The recipients lose the sender from their feeds as well.
    ids = {p["id"] for p in await feed_service.get_feed(u2.id)}
    assert ids == {u3.id, u4.id, u5.id}


@pytest.mark.asyncio
async def test_feed_excludes_any_status(make_user, requests_repo, feed_service):
    viewer = await make_user()
    others = [await make_user() for _ in range(4)]
    for other, status in zip(others, ConnectionStatus):
        await requests_repo.create(other.id, viewer.id, status)

    assert await feed_service.get_feed(viewer.id) == []


@pytest.mark.asyncio
async def test_feed_never_contains_viewer(make_user, feed_service):
    viewer = await make_user()
    other = await make_user()

    profiles = await feed_service.get_feed(viewer.id)
    assert [p["id"] for p in profiles] == [other.id]


@pytest.mark.asyncio
async def test_feed_returns_safe_profiles_only(make_user, feed_service):
    viewer = await make_user()
    await make_user(about="hello", skills=["go"])

    [profile] = await feed_service.get_feed(viewer.id)
    assert "email" not in profile
    assert "password_hash" not in profile
    assert profile["about"] == "hello"
    assert profile["skills"] == ["go"]


@pytest.mark.asyncio
async def test_feed_limit_is_clamped(make_user, feed_service):
    viewer = await make_user()
    for _ in range(MAX_LIMIT + 5):
        await make_user()

    assert len(await feed_service.get_feed(viewer.id, limit=1000)) == MAX_LIMIT
    assert len(await feed_service.get_feed(viewer.id)) == DEFAULT_LIMIT
    assert len(await feed_service.get_feed(viewer.id, page=2, limit=1000)) == 5


@pytest.mark.asyncio
async def test_feed_page_beyond_end_is_empty(make_user, feed_service):
    viewer = await make_user()
    await make_user()

    assert await feed_service.get_feed(viewer.id, page=99999) == []


@pytest.mark.asyncio
async def test_feed_pages_are_disjoint_and_stable(make_user, feed_service):
    viewer = await make_user()
    others = {(await make_user()).id for _ in range(7)}

    first = [p["id"] for p in await feed_service.get_feed(viewer.id, page=1, limit=3)]
    second = [p["id"] for p in await feed_service.get_feed(viewer.id, page=2, limit=3)]
    third = [p["id"] for p in await feed_service.get_feed(viewer.id, page=3, limit=3)]

    assert len(first) == 3 and len(second) == 3 and len(third) == 1
    assert set(first + second + third) == others
    assert first == [p["id"] for p in await feed_service.get_feed(viewer.id, page=1, limit=3)]
