"""Collaborator contracts — What the application must provide to be indexed.

The engine never touches the application's persistence layer directly.
Models expose themselves through ``Searchable`` and the application's
record store re-hydrates hits through ``RecordStore``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

# Flag written on soft-deletable models when soft deletes are enabled (1 = trashed).
SOFT_DELETE_FIELD = "__soft_deleted"


@runtime_checkable
class Searchable(Protocol):
    """A model that can be written to a search index."""

    def searchable_as(self) -> str:
        """Name of the index this model's documents live in."""
        ...

    def search_key(self) -> str | int:
        """Stable identifier used as the document id."""
        ...

    def to_searchable_dict(self) -> dict[str, Any]:
        """Serialized searchable fields. An empty dict means "do not index"."""
        ...

    def searchable_fields(self) -> list[str]:
        """Fields eligible for free-text matching."""
        ...


@runtime_checkable
class SoftDeletable(Protocol):
    """A model that can be soft-deleted instead of removed."""

    def trashed(self) -> bool: ...


class RecordStore(Protocol):
    """Re-fetches full application records for a list of document ids."""

    def find_by_ids(self, ids: Sequence[str]) -> Iterable[Any]:
        """Return the records for *ids*, in any order. Missing ids are skipped."""
        ...

    def key_of(self, record: Any) -> str | int:
        """Return the search key of a record returned by ``find_by_ids``."""
        ...
