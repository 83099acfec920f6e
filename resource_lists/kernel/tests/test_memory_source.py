"""Tests for MemoryDataSource and the DataSource protocol."""

import pytest

from resource_lists.kernel.data_sources import (
    DataSource,
    MemoryDataSource,
    ResourceConflict,
    ResourceNotFound,
)
from resource_lists.kernel.tests.domain import Bill


class TestDataSourceProtocol:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["post_resource", "patch_resource", "delete_resource"])
    async def test_base_methods_are_abstract(self, method):
        with pytest.raises(NotImplementedError):
            await getattr(DataSource(), method)("Bill", Bill(title="x"))

    @pytest.mark.asyncio
    async def test_base_get_is_abstract(self):
        with pytest.raises(NotImplementedError):
            await DataSource().get_resources("Bill")


class TestMemoryDataSource:
    @pytest.mark.asyncio
    async def test_seed_and_get_in_order(self):
        a, b = Bill(title="a"), Bill(title="b")
        ds = MemoryDataSource({"Bill": [a, b]})

        assert [r.title for r in await ds.get_resources("Bill")] == ["a", "b"]
        assert await ds.get_resources("Contact") == []

    @pytest.mark.asyncio
    async def test_returns_copies(self):
        a = Bill(title="a")
        ds = MemoryDataSource({"Bill": [a]})

        fetched = (await ds.get_resources("Bill"))[0]
        fetched.title = "mutated"
        a.title = "also mutated"

        assert (await ds.get_resources("Bill"))[0].title == "a"

    @pytest.mark.asyncio
    async def test_post_then_conflict(self):
        ds = MemoryDataSource()
        bill = Bill(title="rent")

        stored = await ds.post_resource("Bill", bill)
        assert stored == bill
        assert stored is not bill

        with pytest.raises(ResourceConflict):
            await ds.post_resource("Bill", bill)

    @pytest.mark.asyncio
    async def test_patch_replaces(self):
        bill = Bill(title="rent")
        ds = MemoryDataSource({"Bill": [bill]})

        await ds.patch_resource("Bill", bill.model_copy(update={"title": "power"}))

        assert (await ds.get_resources("Bill"))[0].title == "power"

    @pytest.mark.asyncio
    async def test_patch_unknown(self):
        with pytest.raises(ResourceNotFound) as exc_info:
            await MemoryDataSource().patch_resource("Bill", Bill(title="x"))
        assert str(exc_info.value).startswith("Bill/")
        assert isinstance(exc_info.value, KeyError)

    @pytest.mark.asyncio
    async def test_delete(self):
        bill = Bill(title="rent")
        ds = MemoryDataSource({"Bill": [bill]})

        await ds.delete_resource("Bill", bill)

        assert await ds.get_resources("Bill") == []
        with pytest.raises(ResourceNotFound):
            await ds.delete_resource("Bill", bill)
