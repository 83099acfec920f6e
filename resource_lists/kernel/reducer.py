"""
Resource Lists Kernel — Reducer

Pure function: (store, event) → store
No side effects. No IO. Deterministic.

The reducer is total: unknown event types, non-events and events without a
resource name all return the input store unchanged. It never raises.

The input store is never modified. A known event yields a new outer dict in
which only the touched collection's record is replaced; every other record
is shared with the input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from resource_lists.kernel.events import (
    DELETE_RESOURCE_SUCCESS,
    FAILURE_TYPES,
    GET_RESOURCES_SUCCESS,
    PATCH_RESOURCE_SUCCESS,
    POST_RESOURCE_SUCCESS,
    REQUEST_TYPES,
    LifecycleEvent,
)
from resource_lists.kernel.types import (
    CollectionRecord,
    Resource,
    Store,
    empty_collection,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_store() -> Store:
    """The store before any event has been applied."""
    return {}


def reduce(store: Store, event: Any) -> Store:
    """
    Apply one lifecycle event to the store.

    Resolves the named collection (creating the default record on a miss),
    applies the event's transition and returns the new store.
    """
    if not isinstance(event, LifecycleEvent):
        return store

    if not isinstance(event.type, str) or not isinstance(event.payload, dict):
        return store

    handler = _HANDLERS.get(event.type)
    if handler is None:
        return store

    name = event.resource_name
    if not isinstance(name, str):
        return store

    current = store.get(name) or empty_collection()
    return {**store, name: handler(current, event.payload)}


def reduce_all(store: Store, events: Iterable[Any]) -> Store:
    """Apply a sequence of events in order. Returns the final store."""
    for event in events:
        store = reduce(store, event)
    return store


def replay(events: Iterable[Any]) -> Store:
    """
    Rebuild the store from scratch.
    replay(events) == reduce(reduce(reduce(empty(), e1), e2), e3)...
    """
    return reduce_all(empty_store(), events)


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


def get_collection(store: Store, name: str) -> CollectionRecord:
    """The named record, or a fresh default one. Never materializes it."""
    return store.get(name) or empty_collection()


def select_resources(store: Store, name: str) -> list[Resource]:
    """Denormalized view of a collection, in all_ids order."""
    record = get_collection(store, name)
    return [record["by_id"][rid] for rid in record["all_ids"]]


def has_resource(store: Store, name: str, resource_id: str) -> bool:
    return resource_id in get_collection(store, name)["by_id"]


# ---------------------------------------------------------------------------
# Handlers
#
# Each takes the current record and the event payload and returns a new
# record. Records are never mutated in place.
# ---------------------------------------------------------------------------


def _settled(record: CollectionRecord, **changes: Any) -> CollectionRecord:
    return {**record, "loading": False, "error": None, **changes}


def _handle_request(record: CollectionRecord, payload: dict) -> CollectionRecord:
    return {**record, "loading": True, "error": None}


def _handle_failure(record: CollectionRecord, payload: dict) -> CollectionRecord:
    message = payload.get("message")
    return {**record, "loading": False, "error": None if message is None else str(message)}


def _handle_get_success(record: CollectionRecord, payload: dict) -> CollectionRecord:
    supplied = payload.get("resources_by_id")
    if not isinstance(supplied, Mapping):
        supplied = {}
    resources_by_id = {rid: r for rid, r in supplied.items() if isinstance(rid, str)}
    order = payload.get("all_ids")
    if not isinstance(order, (list, tuple)):
        order = []
    all_ids: list[str] = []
    seen: set[str] = set()

    # Keep the supplied order; drop ids with no entity, non-string ids and repeats.
    for rid in order:
        if isinstance(rid, str) and rid in resources_by_id and rid not in seen:
            seen.add(rid)
            all_ids.append(rid)
    # Entities the order forgot go at the end, in mapping order.
    for rid in resources_by_id:
        if rid not in seen:
            seen.add(rid)
            all_ids.append(rid)

    return _settled(record, by_id=resources_by_id, all_ids=all_ids)


def _handle_post_success(record: CollectionRecord, payload: dict) -> CollectionRecord:
    resource = payload.get("resource")
    if not isinstance(resource, Resource):
        return _settled(record)

    all_ids = record["all_ids"]
    if resource.id not in record["by_id"]:
        all_ids = [*all_ids, resource.id]
    return _settled(
        record,
        by_id={**record["by_id"], resource.id: resource},
        all_ids=all_ids,
    )


def _handle_patch_success(record: CollectionRecord, payload: dict) -> CollectionRecord:
    resource = payload.get("resource")
    if not isinstance(resource, Resource):
        return _settled(record)

    all_ids = record["all_ids"]
    if resource.id not in record["by_id"]:
        # Upsert keeps all_ids and by_id set-equal.
        all_ids = [*all_ids, resource.id]
    return _settled(
        record,
        by_id={**record["by_id"], resource.id: resource},
        all_ids=all_ids,
    )


def _handle_delete_success(record: CollectionRecord, payload: dict) -> CollectionRecord:
    resource = payload.get("resource")
    if not isinstance(resource, Resource) or resource.id not in record["by_id"]:
        return _settled(record)

    by_id = {rid: r for rid, r in record["by_id"].items() if rid != resource.id}
    all_ids = [rid for rid in record["all_ids"] if rid != resource.id]
    return _settled(record, by_id=by_id, all_ids=all_ids)


_HANDLERS: dict[str, Any] = {
    **{t: _handle_request for t in REQUEST_TYPES},
    **{t: _handle_failure for t in FAILURE_TYPES},
    GET_RESOURCES_SUCCESS: _handle_get_success,
    POST_RESOURCE_SUCCESS: _handle_post_success,
    PATCH_RESOURCE_SUCCESS: _handle_patch_success,
    DELETE_RESOURCE_SUCCESS: _handle_delete_success,
}
