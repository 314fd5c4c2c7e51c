"""Unit tests for the in-memory webhook stores."""

from datetime import datetime, timedelta, timezone

import pytest

from modules.webhooks.stores import (
    InMemoryActivityLogStore,
    InMemoryDestinationStore,
    InMemoryUserStore,
)
from tests.factories import make_activity_entry, make_destination


@pytest.mark.unit
class TestInMemoryDestinationStore:
    """Tests for InMemoryDestinationStore."""

    @pytest.mark.asyncio
    async def test_list_for_owner(self):
        store = InMemoryDestinationStore(
            [
                make_destination(id=1, owner_id="acct-1"),
                make_destination(id=2, owner_id="acct-2"),
                make_destination(id=3, owner_id="acct-1"),
            ]
        )

        destinations = await store.list_for_owner("acct-1")

        assert [d.id for d in destinations] == [1, 3]

    def test_create_skips_taken_ids(self):
        store = InMemoryDestinationStore([make_destination(id=1)])

        created = store.create(owner_id="acct-1", url="https://a.example.com/h")

        assert created.id == 2


@pytest.mark.unit
class TestInMemoryUserStore:
    """Tests for InMemoryUserStore."""

    @pytest.mark.asyncio
    async def test_get_user(self):
        store = InMemoryUserStore()
        store.add(7, username="alice")

        assert await store.get_user(7) == {"id": 7, "username": "alice"}
        assert await store.get_user(8) is None


@pytest.mark.unit
class TestInMemoryActivityLogStore:
    """Tests for InMemoryActivityLogStore."""

    @pytest.mark.asyncio
    async def test_append_assigns_increasing_ids(self):
        store = InMemoryActivityLogStore()

        first = await store.append(make_activity_entry())
        second = await store.append(make_activity_entry())

        assert (first.id, second.id) == (1, 2)

    @pytest.mark.asyncio
    async def test_list_for_application_newest_first(self):
        store = InMemoryActivityLogStore()
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        await store.append(make_activity_entry(event="user_login", created_at=base))
        await store.append(
            make_activity_entry(
                event="login_failed", created_at=base + timedelta(minutes=5)
            )
        )
        await store.append(make_activity_entry(application_id=99, created_at=base))

        entries = await store.list_for_application(42)

        assert [e.event for e in entries] == ["login_failed", "user_login"]

    @pytest.mark.asyncio
    async def test_same_timestamp_orders_by_id(self):
        store = InMemoryActivityLogStore()
        moment = datetime(2024, 5, 1, tzinfo=timezone.utc)
        for _ in range(3):
            await store.append(make_activity_entry(created_at=moment))

        entries = await store.list_for_application(42)

        assert [e.id for e in entries] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_limit(self):
        store = InMemoryActivityLogStore()
        for _ in range(5):
            await store.append(make_activity_entry())

        assert len(await store.list_for_application(42, limit=2)) == 2

    @pytest.mark.asyncio
    async def test_list_for_app_user(self):
        store = InMemoryActivityLogStore()
        await store.append(make_activity_entry(app_user_id=7))
        await store.append(make_activity_entry(app_user_id=None))
        await store.append(make_activity_entry(app_user_id=8))

        entries = await store.list_for_app_user(7)

        assert [e.app_user_id for e in entries] == [7]
