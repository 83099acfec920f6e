"""
Resource Lists Orchestrator -- Concurrency Tests

Operations interleave at their data-source awaits. There is no per-id
locking: guards see the store as it is when they run.

Covers:
  - Two creates of the same id both pass the guard if neither has resolved
  - Operations on different collections interleave independently
  - A cancelled call still records exactly one terminal event
"""

import asyncio

import pytest

from resource_lists.kernel import events
from resource_lists.kernel.data_sources import DataSource
from resource_lists.kernel.tests.domain import Bill, Contact
from resource_lists.kernel.types import ids_match


class GatedDataSource(DataSource):
    """Echoing data source whose calls block until the gate opens."""

    def __init__(self):
        self.gate = asyncio.Event()
        self.started = asyncio.Event()
        self.calls = 0

    async def _wait(self):
        self.calls += 1
        self.started.set()
        await self.gate.wait()

    async def get_resources(self, name):
        await self._wait()
        return []

    async def post_resource(self, name, resource):
        await self._wait()
        return resource


class TestInterleaving:
    @pytest.mark.asyncio
    async def test_duplicate_creates_race_past_the_guard(self, lists, store):
        ds = GatedDataSource()
        bill = Bill(title="twice")

        first = asyncio.create_task(lists.post_resource("Bill", bill, ds))
        second = asyncio.create_task(lists.post_resource("Bill", bill.model_copy(), ds))
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        assert ds.calls == 2
        ds.gate.set()
        await asyncio.gather(first, second)

        assert [e.type for e in store.events] == [
            events.POST_RESOURCE_REQUEST,
            events.POST_RESOURCE_REQUEST,
            events.POST_RESOURCE_SUCCESS,
            events.POST_RESOURCE_SUCCESS,
        ]
        record = store.collection("Bill")
        assert record["all_ids"] == [bill.id]
        assert ids_match(record)

    @pytest.mark.asyncio
    async def test_guard_sees_resolved_create(self, lists, store):
        ds = GatedDataSource()
        ds.gate.set()
        bill = Bill(title="once")

        await lists.post_resource("Bill", bill, ds)

        with pytest.raises(Exception, match="DuplicateResourceError"):
            await lists.post_resource("Bill", bill, ds)
        assert ds.calls == 1

    @pytest.mark.asyncio
    async def test_collections_interleave_independently(self, lists, store):
        ds = GatedDataSource()

        bills = asyncio.create_task(lists.get_resources("Bill", ds))
        contacts = asyncio.create_task(lists.post_resource("Contact", Contact(name="Peter"), ds))
        await ds.started.wait()
        await asyncio.sleep(0)

        assert store.collection("Bill")["loading"] is True
        assert store.collection("Contact")["loading"] is True

        ds.gate.set()
        await asyncio.gather(bills, contacts)

        assert store.collection("Bill")["loading"] is False
        assert store.collection("Contact")["loading"] is False
        assert len(store.collection("Contact")["all_ids"]) == 1


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_records_one_terminal_event(self, lists, store):
        ds = GatedDataSource()

        task = asyncio.create_task(lists.post_resource("Bill", Bill(title="slow"), ds))
        await ds.started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert [e.to_dict() for e in store.events] == [
            {"type": events.POST_RESOURCE_REQUEST, "payload": {"resource_name": "Bill"}},
            {
                "type": events.POST_RESOURCE_FAILURE,
                "payload": {"resource_name": "Bill", "message": "CancelledError"},
            },
        ]
        assert store.collection("Bill")["loading"] is False
