"""
Resource Lists Kernel — Data Sources

The external collaborator behind every orchestrator operation. The kernel
owns none of them: callers hand one to each call.

Implement with Postgres or HTTP for production, or in-memory for tests.
"""

from __future__ import annotations

from resource_lists.kernel.types import Resource

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ResourceNotFound(KeyError):
    """The data source holds no resource with this id."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "ResourceNotFound"


class ResourceConflict(Exception):
    """The data source already holds a resource with this id."""
    pass


# ---------------------------------------------------------------------------
# Data source protocol
# ---------------------------------------------------------------------------


class DataSource:
    """
    Abstract data source interface.
    Every method may fail; the orchestrator records and re-raises the failure.
    """

    async def get_resources(self, name: str) -> list[Resource]:
        """Fetch the whole collection, in the source's order."""
        raise NotImplementedError

    async def post_resource(self, name: str, resource: Resource) -> Resource:
        """Store a new resource. Returns the resource as stored."""
        raise NotImplementedError

    async def patch_resource(self, name: str, resource: Resource) -> Resource:
        """Replace an existing resource. Returns the resource as stored."""
        raise NotImplementedError

    async def delete_resource(self, name: str, resource: Resource) -> None:
        """Remove a resource."""
        raise NotImplementedError


class MemoryDataSource(DataSource):
    """In-memory data source for testing and local use."""

    def __init__(self, initial: dict[str, list[Resource]] | None = None) -> None:
        self.collections: dict[str, dict[str, Resource]] = {}
        for name, resources in (initial or {}).items():
            self.collections[name] = {r.id: r.model_copy(deep=True) for r in resources}

    def _collection(self, name: str) -> dict[str, Resource]:
        return self.collections.setdefault(name, {})

    async def get_resources(self, name: str) -> list[Resource]:
        return [r.model_copy(deep=True) for r in self._collection(name).values()]

    async def post_resource(self, name: str, resource: Resource) -> Resource:
        coll = self._collection(name)
        if resource.id in coll:
            raise ResourceConflict(f"{name}/{resource.id} already exists")
        coll[resource.id] = resource.model_copy(deep=True)
        return coll[resource.id].model_copy(deep=True)

    async def patch_resource(self, name: str, resource: Resource) -> Resource:
        coll = self._collection(name)
        if resource.id not in coll:
            raise ResourceNotFound(f"{name}/{resource.id} not found")
        coll[resource.id] = resource.model_copy(deep=True)
        return coll[resource.id].model_copy(deep=True)

    async def delete_resource(self, name: str, resource: Resource) -> None:
        coll = self._collection(name)
        if resource.id not in coll:
            raise ResourceNotFound(f"{name}/{resource.id} not found")
        del coll[resource.id]
