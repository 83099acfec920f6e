"""
Resource Lists Kernel — CRUD Orchestrator

Sits between the pure reducer and the outside world (the caller's data
source). Every operation has the same shape:

    announce  -> dispatch *_REQUEST
    guard     -> duplicate / missing id checks against the current store,
                 then the optional validator (create only)
    execute   -> call the data source, dispatch *_SUCCESS or *_FAILURE

Exactly two events per call: the REQUEST and one terminal event. Guards and
validation failures never reach the data source.

Each pipeline produces an Outcome. Recording the terminal event and
surfacing the error to the caller are separate steps: _succeed/_fail
dispatch, Outcome.unwrap() returns the value or raises the original error.

This is where IO happens. The reducer is pure.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from resource_lists.kernel import events
from resource_lists.kernel.data_sources import DataSource
from resource_lists.kernel.events import LifecycleEvent, normalize
from resource_lists.kernel.reducer import has_resource
from resource_lists.kernel.store import ResourceStore
from resource_lists.kernel.types import Resource
from resource_lists.kernel.validation import Validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

DUPLICATE_RESOURCE_ERROR = "DuplicateResourceError"
NO_RESOURCE_TO_UPDATE_ERROR = "NoResourceToUpdateError"
NO_RESOURCE_TO_DELETE_ERROR = "NoResourceToDeleteError"


class ResourceListError(Exception):
    """Base for failures raised by the orchestrator itself."""
    pass


class IntegrityError(ResourceListError):
    """A guard rejected the operation before the data source was consulted."""

    message = ""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class DuplicateResourceError(IntegrityError):
    """Create against an id the collection already holds."""

    message = DUPLICATE_RESOURCE_ERROR


class NoResourceToUpdateError(IntegrityError):
    """Update against an id the collection does not hold."""

    message = NO_RESOURCE_TO_UPDATE_ERROR


class NoResourceToDeleteError(IntegrityError):
    """Delete against an id the collection does not hold."""

    message = NO_RESOURCE_TO_DELETE_ERROR


class ValidationFailed(ResourceListError):
    """The validator returned violations. str() is the first one."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        super().__init__(str(self.violations[0]))


def failure_message(error: BaseException) -> str:
    """The message recorded in a FAILURE event for this error."""
    if isinstance(error, ValidationFailed):
        return str(error)
    return str(error) or type(error).__name__


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------


@dataclass
class Outcome:
    """Value of a finished pipeline step, or the error that ended it."""

    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


async def _attempt(fn: Callable[..., Any], *args: Any) -> Outcome:
    """
    Run fn(*args), awaiting the result if needed, and capture any failure.

    Cancellation is captured too so the caller can still record its terminal
    event before the CancelledError is re-raised.
    """
    try:
        result = fn(*args)
        if inspect.isawaitable(result):
            result = await result
        return Outcome(value=result)
    except (Exception, asyncio.CancelledError) as e:
        return Outcome(error=e)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

FailureFactory = Callable[[str, str], LifecycleEvent]


class ResourceLists:
    """
    Async CRUD over named collections.
    Reads and writes state only through the ResourceStore it is given.

    Guards read the store at the moment they run. Two interleaved creates of
    the same id can both pass the guard; callers needing one writer per id
    must serialize above this layer.
    """

    def __init__(self, store: ResourceStore):
        self._store = store

    @property
    def store(self) -> ResourceStore:
        return self._store

    # -- fetch all --

    async def get_resources(self, name: str, data_source: DataSource) -> list[Resource]:
        """
        Fetch the whole collection and replace the stored snapshot with it.
        Returns the resources in the order the data source gave them.
        """
        return (await self._get(name, data_source)).unwrap()

    async def _get(self, name: str, data_source: DataSource) -> Outcome:
        self._announce(events.get_resources_request(name))

        def fetched(result: Any) -> tuple[list[Resource], dict[str, Resource], list[str]]:
            resources = list(result)
            by_id, all_ids = normalize(resources)
            return resources, by_id, all_ids

        outcome = await _attempt(data_source.get_resources, name)
        if outcome.ok:
            # A malformed payload fails the operation like any data-source error.
            outcome = await _attempt(fetched, outcome.value)
        if not outcome.ok:
            return self._fail(events.get_resources_failure, name, outcome.error)

        resources, by_id, all_ids = outcome.value
        self._succeed(events.get_resources_success(name, by_id, all_ids))
        logger.info("resource_lists: fetched %d %s", len(resources), name)
        return Outcome(value=resources)

    # -- create --

    async def post_resource(
        self,
        name: str,
        resource: Resource,
        data_source: DataSource,
        validate: Validator | None = None,
    ) -> Resource:
        """
        Create a resource.

        Fails with DuplicateResourceError if the id is already in the store,
        or ValidationFailed if the validator reports violations. Neither case
        calls the data source.
        """
        return (await self._post(name, resource, data_source, validate)).unwrap()

    async def _post(
        self,
        name: str,
        resource: Resource,
        data_source: DataSource,
        validate: Validator | None,
    ) -> Outcome:
        self._announce(events.post_resource_request(name))

        if has_resource(self._store.state, name, resource.id):
            return self._fail(events.post_resource_failure, name, DuplicateResourceError())

        if validate is not None:
            checked = await _attempt(validate, resource)
            if not checked.ok:
                return self._fail(events.post_resource_failure, name, checked.error)
            if checked.value:
                return self._fail(events.post_resource_failure, name, ValidationFailed(checked.value))

        logger.debug("resource_lists: posting %s/%s", name, resource.id)
        outcome = await _attempt(data_source.post_resource, name, resource)
        if not outcome.ok:
            return self._fail(events.post_resource_failure, name, outcome.error)

        self._succeed(events.post_resource_success(name, outcome.value))
        logger.info("resource_lists: created %s/%s", name, getattr(outcome.value, "id", resource.id))
        return outcome

    # -- update --

    async def patch_resource(self, name: str, resource: Resource, data_source: DataSource) -> Resource:
        """
        Replace an existing resource (whole record, no field merge).
        Fails with NoResourceToUpdateError if the id is not in the store.
        """
        return (await self._patch(name, resource, data_source)).unwrap()

    async def _patch(self, name: str, resource: Resource, data_source: DataSource) -> Outcome:
        self._announce(events.patch_resource_request(name))

        if not has_resource(self._store.state, name, resource.id):
            return self._fail(events.patch_resource_failure, name, NoResourceToUpdateError())

        logger.debug("resource_lists: patching %s/%s", name, resource.id)
        outcome = await _attempt(data_source.patch_resource, name, resource)
        if not outcome.ok:
            return self._fail(events.patch_resource_failure, name, outcome.error)

        self._succeed(events.patch_resource_success(name, outcome.value))
        logger.info("resource_lists: updated %s/%s", name, getattr(outcome.value, "id", resource.id))
        return outcome

    # -- delete --

    async def delete_resource(self, name: str, resource: Resource, data_source: DataSource) -> None:
        """
        Remove a resource.
        Fails with NoResourceToDeleteError if the id is not in the store.
        """
        (await self._delete(name, resource, data_source)).unwrap()

    async def _delete(self, name: str, resource: Resource, data_source: DataSource) -> Outcome:
        self._announce(events.delete_resource_request(name))

        if not has_resource(self._store.state, name, resource.id):
            return self._fail(events.delete_resource_failure, name, NoResourceToDeleteError())

        logger.debug("resource_lists: deleting %s/%s", name, resource.id)
        outcome = await _attempt(data_source.delete_resource, name, resource)
        if not outcome.ok:
            return self._fail(events.delete_resource_failure, name, outcome.error)

        self._succeed(events.delete_resource_success(name, resource))
        logger.info("resource_lists: deleted %s/%s", name, resource.id)
        return Outcome(value=None)

    # -- event emission --

    def _announce(self, event: LifecycleEvent) -> None:
        logger.debug("resource_lists: %s %s", event.type, event.resource_name)
        self._store.dispatch(event)

    def _succeed(self, event: LifecycleEvent) -> None:
        self._store.dispatch(event)

    def _fail(self, factory: FailureFactory, name: str, error: BaseException) -> Outcome:
        event = factory(name, failure_message(error))
        self._store.dispatch(event)
        logger.warning("resource_lists: %s on %s: %s", event.type, name, event.payload["message"])
        return Outcome(error=error)
