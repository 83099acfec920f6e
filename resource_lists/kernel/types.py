"""
Resource Lists Kernel — Shared Types

The contracts that bind the kernel together:

- `Resource`: base model for every entity held in a collection. Carries an
  immutable `id`; identity equality is by that id, never structural.
- Collection records: plain dicts, one per collection name:

    {
        "by_id":   {id: Resource},
        "all_ids": [id, ...],      # same id set as by_id, no duplicates
        "loading": bool,
        "error":   str | None,
    }

- The store: `dict[collection_name, CollectionRecord]`.
"""

from __future__ import annotations

import uuid
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def new_id() -> str:
    """A fresh globally-unique resource id (uuid4, hex)."""
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Resource base model
# ---------------------------------------------------------------------------


class Resource(BaseModel):
    """
    Base for every resource kept in a collection.

    Subclasses add domain fields and may set `schema_name`, the collection
    name they are normally stored under. The base model allows extra fields
    so that payloads for unregistered collections survive a round trip.
    """

    model_config = ConfigDict(extra="allow")

    schema_name: ClassVar[str] = ""

    id: str = Field(default_factory=new_id, frozen=True)

    @classmethod
    def collection_name(cls) -> str:
        return cls.schema_name or cls.__name__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


# ---------------------------------------------------------------------------
# Collection records
# ---------------------------------------------------------------------------

CollectionRecord = dict[str, Any]
Store = dict[str, CollectionRecord]


def empty_collection() -> CollectionRecord:
    """The record a collection gets the first time an event names it."""
    return {
        "by_id": {},
        "all_ids": [],
        "loading": False,
        "error": None,
    }


def ids_match(record: CollectionRecord) -> bool:
    """True if all_ids and by_id hold the same ids with no duplicates."""
    all_ids = record["all_ids"]
    return len(all_ids) == len(set(all_ids)) and set(all_ids) == set(record["by_id"])
