"""Tests for AsyncNodeStore."""
import asyncio

import pytest

from nodestore.core.errors import ErrorCodes, StoreError
from nodestore.core.store import Action, AsyncNodeStore, NodeStore


class TestAsyncNodeStore:
    """Test suite for the asyncio facade."""

    @pytest.fixture
    def async_store(self):
        return AsyncNodeStore()

    @pytest.mark.asyncio
    async def test_lifecycle(self, async_store):
        """Test create, update, delete and get through the facade."""
        created = await async_store.create("xxx", False, "xxx")
        updated = await async_store.update("/xxx", "newxxx")
        deleted = await async_store.delete("xxx")

        assert created.action == Action.CREATE
        assert updated.prev_node.value == "xxx"
        assert deleted.curr_node.value == "newxxx"

        with pytest.raises(StoreError) as exc_info:
            await async_store.get("xxx")
        assert exc_info.value.error_code == ErrorCodes.NOT_EXISTS

    @pytest.mark.asyncio
    async def test_wraps_existing_store(self):
        """Test the facade shares state with the sync store."""
        store = NodeStore()
        store.create("/a", value="1")
        facade = AsyncNodeStore(store)

        result = await facade.set("/a", value="2")

        assert result.prev_node.value == "1"
        assert store.get("/a").curr_node.value == "2"
        assert await facade.exists("/a")

    @pytest.mark.asyncio
    async def test_wraps_empty_store(self):
        """Test an empty store is wrapped rather than replaced."""
        store = NodeStore()
        facade = AsyncNodeStore(store)

        await facade.create("/a", value="1")

        assert facade.store is store
        assert store.get("/a").curr_node.value == "1"

    @pytest.mark.asyncio
    async def test_concurrent_creates(self, async_store):
        """Test gathered creates land exactly once each."""
        results = await asyncio.gather(
            *(async_store.create(f"/jobs/{i}", value=str(i)) for i in range(20))
        )

        listing = await async_store.get("/jobs", sorted=True)

        assert len(results) == 20
        assert len(listing.curr_node.get_children()) == 20
