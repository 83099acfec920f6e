"""HTTP data source for a REST backend.

Routes, relative to api_url:
  GET    /{name}        -> JSON list of resources
  POST   /{name}        -> JSON resource as stored
  PATCH  /{name}/{id}   -> JSON resource as stored
  DELETE /{name}/{id}   -> any 2xx
"""
from __future__ import annotations

from typing import Any

import httpx

from resource_lists.config import settings
from resource_lists.kernel.data_sources import DataSource
from resource_lists.kernel.types import Resource


class HttpDataSource(DataSource):
    """DataSource over httpx.AsyncClient. Non-2xx responses raise httpx.HTTPStatusError."""

    def __init__(
        self,
        resource_types: dict[str, type[Resource]] | None = None,
        api_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.resource_types = dict(resource_types or {})
        self.api_url = (api_url or settings.API_URL).rstrip("/")
        self.token = token
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout or settings.HTTP_TIMEOUT)

    def _headers(self) -> dict:
        """Build request headers."""
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _url(self, name: str, resource_id: str | None = None) -> str:
        if resource_id is None:
            return f"{self.api_url}/{name}"
        return f"{self.api_url}/{name}/{resource_id}"

    def _load(self, name: str, data: Any) -> Resource:
        model = self.resource_types.get(name, Resource)
        return model.model_validate(data)

    async def get_resources(self, name: str) -> list[Resource]:
        res = await self.client.get(self._url(name), headers=self._headers())
        res.raise_for_status()
        return [self._load(name, item) for item in res.json()]

    async def post_resource(self, name: str, resource: Resource) -> Resource:
        res = await self.client.post(
            self._url(name),
            json=resource.model_dump(mode="json"),
            headers=self._headers(),
        )
        res.raise_for_status()
        return self._load(name, res.json())

    async def patch_resource(self, name: str, resource: Resource) -> Resource:
        res = await self.client.patch(
            self._url(name, resource.id),
            json=resource.model_dump(mode="json"),
            headers=self._headers(),
        )
        res.raise_for_status()
        return self._load(name, res.json())

    async def delete_resource(self, name: str, resource: Resource) -> None:
        res = await self.client.delete(self._url(name, resource.id), headers=self._headers())
        res.raise_for_status()

    async def aclose(self) -> None:
        """Close the client if this data source created it."""
        if self._owns_client:
            await self.client.aclose()
