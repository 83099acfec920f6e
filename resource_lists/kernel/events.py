"""
Resource Lists Kernel — Lifecycle Events

Event type constants and factory functions for the lifecycle events the
orchestrator emits around every operation. The reducer reads only `type`
and `payload`.

Every payload carries `resource_name`. On top of that:
  *_REQUEST                -> nothing else
  GET_RESOURCES_SUCCESS    -> resources_by_id, all_ids
  POST/PATCH/DELETE_*_SUCCESS -> resource
  *_FAILURE                -> message
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from resource_lists.kernel.types import Resource

# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

GET_RESOURCES_REQUEST = "GET_RESOURCES_REQUEST"
GET_RESOURCES_SUCCESS = "GET_RESOURCES_SUCCESS"
GET_RESOURCES_FAILURE = "GET_RESOURCES_FAILURE"

POST_RESOURCE_REQUEST = "POST_RESOURCE_REQUEST"
POST_RESOURCE_SUCCESS = "POST_RESOURCE_SUCCESS"
POST_RESOURCE_FAILURE = "POST_RESOURCE_FAILURE"

PATCH_RESOURCE_REQUEST = "PATCH_RESOURCE_REQUEST"
PATCH_RESOURCE_SUCCESS = "PATCH_RESOURCE_SUCCESS"
PATCH_RESOURCE_FAILURE = "PATCH_RESOURCE_FAILURE"

DELETE_RESOURCE_REQUEST = "DELETE_RESOURCE_REQUEST"
DELETE_RESOURCE_SUCCESS = "DELETE_RESOURCE_SUCCESS"
DELETE_RESOURCE_FAILURE = "DELETE_RESOURCE_FAILURE"

REQUEST_TYPES: set[str] = {
    GET_RESOURCES_REQUEST,
    POST_RESOURCE_REQUEST,
    PATCH_RESOURCE_REQUEST,
    DELETE_RESOURCE_REQUEST,
}

SUCCESS_TYPES: set[str] = {
    GET_RESOURCES_SUCCESS,
    POST_RESOURCE_SUCCESS,
    PATCH_RESOURCE_SUCCESS,
    DELETE_RESOURCE_SUCCESS,
}

FAILURE_TYPES: set[str] = {
    GET_RESOURCES_FAILURE,
    POST_RESOURCE_FAILURE,
    PATCH_RESOURCE_FAILURE,
    DELETE_RESOURCE_FAILURE,
}

EVENT_TYPES: set[str] = REQUEST_TYPES | SUCCESS_TYPES | FAILURE_TYPES


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------


@dataclass
class LifecycleEvent:
    """One REQUEST/SUCCESS/FAILURE notification about a collection."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def resource_name(self) -> str | None:
        if not isinstance(self.payload, dict):
            return None
        return self.payload.get("resource_name")

    @property
    def is_terminal(self) -> bool:
        return self.type in SUCCESS_TYPES or self.type in FAILURE_TYPES

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LifecycleEvent:
        return cls(type=d["type"], payload=d.get("payload", {}))


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def _request(type: str, resource_name: str) -> LifecycleEvent:
    return LifecycleEvent(type=type, payload={"resource_name": resource_name})


def _failure(type: str, resource_name: str, message: str) -> LifecycleEvent:
    return LifecycleEvent(
        type=type,
        payload={"resource_name": resource_name, "message": message},
    )


def _with_resource(type: str, resource_name: str, resource: Resource) -> LifecycleEvent:
    return LifecycleEvent(
        type=type,
        payload={"resource_name": resource_name, "resource": resource},
    )


def get_resources_request(resource_name: str) -> LifecycleEvent:
    return _request(GET_RESOURCES_REQUEST, resource_name)


def get_resources_success(
    resource_name: str,
    resources_by_id: dict[str, Resource],
    all_ids: list[str],
) -> LifecycleEvent:
    return LifecycleEvent(
        type=GET_RESOURCES_SUCCESS,
        payload={
            "resource_name": resource_name,
            "resources_by_id": resources_by_id,
            "all_ids": all_ids,
        },
    )


def get_resources_failure(resource_name: str, message: str) -> LifecycleEvent:
    return _failure(GET_RESOURCES_FAILURE, resource_name, message)


def post_resource_request(resource_name: str) -> LifecycleEvent:
    return _request(POST_RESOURCE_REQUEST, resource_name)


def post_resource_success(resource_name: str, resource: Resource) -> LifecycleEvent:
    return _with_resource(POST_RESOURCE_SUCCESS, resource_name, resource)


def post_resource_failure(resource_name: str, message: str) -> LifecycleEvent:
    return _failure(POST_RESOURCE_FAILURE, resource_name, message)


def patch_resource_request(resource_name: str) -> LifecycleEvent:
    return _request(PATCH_RESOURCE_REQUEST, resource_name)


def patch_resource_success(resource_name: str, resource: Resource) -> LifecycleEvent:
    return _with_resource(PATCH_RESOURCE_SUCCESS, resource_name, resource)


def patch_resource_failure(resource_name: str, message: str) -> LifecycleEvent:
    return _failure(PATCH_RESOURCE_FAILURE, resource_name, message)


def delete_resource_request(resource_name: str) -> LifecycleEvent:
    return _request(DELETE_RESOURCE_REQUEST, resource_name)


def delete_resource_success(resource_name: str, resource: Resource) -> LifecycleEvent:
    return _with_resource(DELETE_RESOURCE_SUCCESS, resource_name, resource)


def delete_resource_failure(resource_name: str, message: str) -> LifecycleEvent:
    return _failure(DELETE_RESOURCE_FAILURE, resource_name, message)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def normalize(resources: Iterable[Resource]) -> tuple[dict[str, Resource], list[str]]:
    """
    Key a sequence of resources by id, keeping the sequence order as all_ids.

    A repeated id keeps its first position; the later resource wins the slot.
    """
    by_id: dict[str, Resource] = {}
    all_ids: list[str] = []
    for resource in resources:
        if resource.id not in by_id:
            all_ids.append(resource.id)
        by_id[resource.id] = resource
    return by_id, all_ids
