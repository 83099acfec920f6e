"""
Resource Lists Kernel — Store

Holds the current store state and is the only place it changes:
dispatch(event) runs the reducer, records the event and notifies subscribers.

The orchestrator is handed a ResourceStore explicitly. There is no module-level
instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from resource_lists.kernel.events import LifecycleEvent
from resource_lists.kernel.reducer import empty_store, get_collection, reduce, select_resources
from resource_lists.kernel.types import CollectionRecord, Resource, Store

logger = logging.getLogger(__name__)

Listener = Callable[[Store, LifecycleEvent], Any]


class ResourceStore:
    """
    Single-writer container for the normalized store.

    `events` is the ordered dispatch log, handy for audit and for tests that
    assert the exact event sequence an operation produced.
    """

    def __init__(self, state: Store | None = None) -> None:
        self._state: Store = state if state is not None else empty_store()
        self._listeners: list[Listener] = []
        self.events: list[LifecycleEvent] = []

    @property
    def state(self) -> Store:
        return self._state

    def dispatch(self, event: LifecycleEvent) -> Store:
        """Apply one event. Atomic: subscribers only see the post-event state."""
        self._state = reduce(self._state, event)
        self.events.append(event)

        for listener in list(self._listeners):
            try:
                listener(self._state, event)
            except Exception:
                logger.exception("store: listener failed on %s", event.type)

        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_events(self) -> None:
        self.events = []

    # -- selectors --

    def collection(self, name: str) -> CollectionRecord:
        return get_collection(self._state, name)

    def resources(self, name: str) -> list[Resource]:
        return select_resources(self._state, name)
