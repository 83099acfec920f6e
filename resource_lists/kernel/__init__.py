"""
Resource Lists Kernel — normalized collections + async CRUD.

Components:
  types         — Resource base model, collection records
  events        — lifecycle event types and factories
  reducer       — (store, event) → store  (pure, deterministic)
  store         — ResourceStore, the single mutation entry point
  validation    — validator contract and helpers
  orchestrator  — ResourceLists: announce → guard/validate → execute
  data_sources  — DataSource protocol, MemoryDataSource

Adapters (import directly, they pull in their drivers):
  resource_lists.kernel.postgres_source.PostgresDataSource  (asyncpg)
  resource_lists.kernel.http_source.HttpDataSource          (httpx)
"""

from resource_lists.kernel.types import Resource, empty_collection, new_id
from resource_lists.kernel.events import LifecycleEvent
from resource_lists.kernel.reducer import (
    empty_store,
    get_collection,
    reduce,
    replay,
    select_resources,
)
from resource_lists.kernel.store import ResourceStore
from resource_lists.kernel.data_sources import (
    DataSource,
    MemoryDataSource,
    ResourceConflict,
    ResourceNotFound,
)
from resource_lists.kernel.orchestrator import (
    DuplicateResourceError,
    IntegrityError,
    NoResourceToDeleteError,
    NoResourceToUpdateError,
    ResourceListError,
    ResourceLists,
    ValidationFailed,
)

__all__ = [
    "Resource",
    "new_id",
    "empty_collection",
    "LifecycleEvent",
    "reduce",
    "replay",
    "empty_store",
    "get_collection",
    "select_resources",
    "ResourceStore",
    "DataSource",
    "MemoryDataSource",
    "ResourceNotFound",
    "ResourceConflict",
    "ResourceLists",
    "ResourceListError",
    "IntegrityError",
    "DuplicateResourceError",
    "NoResourceToUpdateError",
    "NoResourceToDeleteError",
    "ValidationFailed",
]
