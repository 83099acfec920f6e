"""Tests for ResourceLists.patch_resource (update)."""

import logging

import pytest

from resource_lists.kernel import events
from resource_lists.kernel.orchestrator import (
    NO_RESOURCE_TO_UPDATE_ERROR,
    NoResourceToUpdateError,
    ResourceLists,
)
from resource_lists.kernel.store import ResourceStore
from resource_lists.kernel.tests.domain import Bill, bill_record


def request_event():
    return {"type": events.PATCH_RESOURCE_REQUEST, "payload": {"resource_name": "Bill"}}


@pytest.fixture
def resource_to_update():
    return Bill(title="original title")


@pytest.fixture
def seeded(resource_to_update):
    return ResourceStore({"Bill": bill_record(resource_to_update)})


class TestPatchSuccess:
    @pytest.mark.asyncio
    async def test_updates_existing_resource(self, seeded, resource_to_update, data_source):
        patched = resource_to_update.model_copy(update={"title": "new title"})

        result = await ResourceLists(seeded).patch_resource("Bill", patched, data_source)

        assert result == patched
        data_source.patch_resource.assert_awaited_once_with("Bill", patched)
        assert [e.to_dict() for e in seeded.events] == [
            request_event(),
            {"type": events.PATCH_RESOURCE_SUCCESS, "payload": {"resource_name": "Bill", "resource": patched}},
        ]
        record = seeded.collection("Bill")
        assert record == bill_record(patched)
        assert record["by_id"][patched.id].title == "new title"

    @pytest.mark.asyncio
    async def test_whole_record_replaced(self, seeded, resource_to_update, data_source):
        server_copy = resource_to_update.model_copy(update={"title": "from server"})
        data_source.patch_resource.side_effect = None
        data_source.patch_resource.return_value = server_copy

        await ResourceLists(seeded).patch_resource("Bill", resource_to_update, data_source)

        assert seeded.collection("Bill")["by_id"][resource_to_update.id] is server_copy

    @pytest.mark.asyncio
    async def test_logs_id_of_stored_resource(self, seeded, resource_to_update, data_source, caplog):
        server_copy = Bill(title="from server")
        data_source.patch_resource.side_effect = None
        data_source.patch_resource.return_value = server_copy

        with caplog.at_level(logging.INFO, logger="resource_lists.kernel.orchestrator"):
            await ResourceLists(seeded).patch_resource("Bill", resource_to_update, data_source)

        assert f"updated Bill/{server_copy.id}" in caplog.text


class TestPatchGuard:
    @pytest.mark.asyncio
    async def test_missing_resource_fails_without_data_source(self, lists, store, data_source):
        resource = Bill(title="new title")

        with pytest.raises(NoResourceToUpdateError) as exc_info:
            await lists.patch_resource("Bill", resource, data_source)

        assert str(exc_info.value) == NO_RESOURCE_TO_UPDATE_ERROR == "NoResourceToUpdateError"
        data_source.patch_resource.assert_not_awaited()
        assert [e.to_dict() for e in store.events] == [
            request_event(),
            {
                "type": events.PATCH_RESOURCE_FAILURE,
                "payload": {"resource_name": "Bill", "message": NO_RESOURCE_TO_UPDATE_ERROR},
            },
        ]

    @pytest.mark.asyncio
    async def test_missing_resource_leaves_empty_record(self, lists, store, data_source):
        with pytest.raises(NoResourceToUpdateError):
            await lists.patch_resource("Bill", Bill(title="x"), data_source)

        assert store.collection("Bill") == {
            "by_id": {},
            "all_ids": [],
            "loading": False,
            "error": "NoResourceToUpdateError",
        }


class TestPatchDataSourceFailure:
    @pytest.mark.asyncio
    async def test_original_error_propagates(self, seeded, resource_to_update, data_source):
        mock_error = RuntimeError("error")
        data_source.patch_resource.side_effect = mock_error

        with pytest.raises(RuntimeError) as exc_info:
            await ResourceLists(seeded).patch_resource("Bill", resource_to_update, data_source)

        assert exc_info.value is mock_error
        assert [e.to_dict() for e in seeded.events] == [
            request_event(),
            {"type": events.PATCH_RESOURCE_FAILURE, "payload": {"resource_name": "Bill", "message": "error"}},
        ]
        assert seeded.collection("Bill") == bill_record(resource_to_update, error="error")
