"""
PostgresDataSource adapter for the resource lists orchestrator.

Implements the DataSource protocol using Postgres as the backend.
One row per resource in the resources table (see alembic revision 001):

    collection TEXT, id TEXT, body JSONB, position BIGSERIAL,
    created_at, updated_at, PRIMARY KEY (collection, id)

`position` keeps insertion order, so get_resources returns a collection in
the order its resources were created. Patches replace the whole body.
"""

from __future__ import annotations

import json

import asyncpg

from resource_lists.config import settings
from resource_lists.kernel.data_sources import DataSource, ResourceNotFound
from resource_lists.kernel.types import Resource


class PostgresDataSource(DataSource):
    """
    Postgres-based data source.

    resource_types maps a collection name to the Resource subtype its rows
    are rebuilt as. Unmapped collections come back as plain Resource.
    """

    def __init__(
        self,
        pool: asyncpg.Pool,
        resource_types: dict[str, type[Resource]] | None = None,
        table: str | None = None,
    ):
        self.pool = pool
        self.resource_types = dict(resource_types or {})
        self.table = table or settings.RESOURCES_TABLE

    def _load(self, name: str, body: str) -> Resource:
        model = self.resource_types.get(name, Resource)
        return model.model_validate(json.loads(body))

    @staticmethod
    def _dump(resource: Resource) -> str:
        return resource.model_dump_json()

    async def get_resources(self, name: str) -> list[Resource]:
        """Fetch all rows of a collection in insertion order."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT body::text AS body FROM {self.table} WHERE collection = $1 ORDER BY position",
                name,
            )
        return [self._load(name, row["body"]) for row in rows]

    async def post_resource(self, name: str, resource: Resource) -> Resource:
        """Insert a new row. A duplicate id raises asyncpg.UniqueViolationError."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO {self.table} (collection, id, body, created_at, updated_at)
                VALUES ($1, $2, $3::text::jsonb, now(), now())
                RETURNING body::text AS body
                """,
                name,
                resource.id,
                self._dump(resource),
            )
        return self._load(name, row["body"])

    async def patch_resource(self, name: str, resource: Resource) -> Resource:
        """Replace the body of an existing row."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE {self.table}
                SET body = $3::text::jsonb, updated_at = now()
                WHERE collection = $1 AND id = $2
                RETURNING body::text AS body
                """,
                name,
                resource.id,
                self._dump(resource),
            )
        if row is None:
            raise ResourceNotFound(f"{name}/{resource.id} not found")
        return self._load(name, row["body"])

    async def delete_resource(self, name: str, resource: Resource) -> None:
        """Delete a row."""
        async with self.pool.acquire() as conn:
            deleted = await conn.fetchval(
                f"DELETE FROM {self.table} WHERE collection = $1 AND id = $2 RETURNING id",
                name,
                resource.id,
            )
        if deleted is None:
            raise ResourceNotFound(f"{name}/{resource.id} not found")

    async def close(self) -> None:
        """Close the connection pool."""
        await self.pool.close()
