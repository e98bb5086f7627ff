"""Base search engine — Abstract interface for all search engine drivers.

Every driver must implement this interface to back a ``SearchBuilder``.
The engine is responsible for:
  1. Keeping documents in the index in sync with application models
  2. Executing translated and raw searches
  3. Mapping hits back to ids, totals and application records
  4. Dropping indexes
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from scoutbridge.models.document import RecordStore, Searchable
from scoutbridge.models.query import RawSearchRequest, SearchRequest
from scoutbridge.models.result import HitList, WriteReport


class Engine(ABC):
    """Abstract base class for search engine drivers.

    All engines must implement:
      - index() / remove(): write and delete documents
      - search() / paginate_search(): run a search request
      - drop_index() / create_index(): index lifecycle

    Result mapping (ids, totals, record re-hydration) is shared by every
    engine whose hits carry an ``_id`` field.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique driver name (e.g., 'opensearch')."""

    @property
    def soft_delete(self) -> bool:
        """Whether trashed models are kept in the index, flagged as soft-deleted."""
        return False

    @abstractmethod
    def index(self, models: Sequence[Searchable]) -> WriteReport:
        """Create or replace the documents for *models*.

        Args:
            models: Models to write. Models whose searchable dict is empty
                are skipped.

        Returns:
            Per-document outcome of the write loop.
        """

    @abstractmethod
    def remove(self, ids: Sequence[str | int], index: str) -> WriteReport:
        """Delete the documents with *ids* from *index*."""

    @abstractmethod
    def search(self, request: SearchRequest | RawSearchRequest) -> HitList:
        """Execute a search request.

        Args:
            request: A translated or raw search request.

        Returns:
            Hits in cluster order with total-count metadata.

        Raises:
            ClusterError: If the cluster rejects the search.
        """

    @abstractmethod
    def paginate_search(self, request: SearchRequest, per_page: int | None, page: int) -> HitList:
        """Execute one page of a search request (``page`` is 1-indexed)."""

    @abstractmethod
    def drop_index(self, index: str) -> None:
        """Delete an index and every document in it."""

    @abstractmethod
    def create_index(self, name: str, **options: Any) -> Any:
        """Create an index explicitly."""

    def close(self) -> None:
        """Release connections held by the engine."""

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── Convenience ──────────────────────────────────────────────────────

    def raw_search(self, request: SearchRequest | RawSearchRequest, body: dict[str, Any]) -> HitList:
        """Send *body* verbatim against the index of *request*."""
        return self.search(RawSearchRequest(index=request.index, body=body))

    def flush(self, model: Searchable) -> None:
        """Remove every document of the model's index by dropping the index."""
        self.drop_index(model.searchable_as())

    # ── Result mapping ───────────────────────────────────────────────────

    @staticmethod
    def _as_hit_list(results: HitList | Mapping[str, Any]) -> HitList:
        if isinstance(results, HitList):
            return results
        return HitList.from_response(results)

    def extract_ids(self, results: HitList | Mapping[str, Any]) -> list[str]:
        """Pluck document ids from a hit list, preserving cluster order."""
        return self._as_hit_list(results).ids

    def total_count(self, results: HitList | Mapping[str, Any]) -> int:
        """Total matching documents for a search.

        Reads ``total.value``; when the cluster omitted it, falls back to the
        number of hits on the page, which is not a count of all matches.
        """
        return self._as_hit_list(results).total_count

    def map(self, results: HitList | Mapping[str, Any], store: RecordStore) -> list[Any]:
        """Re-hydrate hits into application records, in hit order.

        Args:
            results: Hits returned by ``search`` or ``paginate_search``.
            store: The application's record store.

        Returns:
            Records ordered by their hit position. Records the store returns
            for ids not among the hits are dropped.
        """
        return list(self.lazy_map(results, store))

    def lazy_map(self, results: HitList | Mapping[str, Any], store: RecordStore) -> Iterator[Any]:
        """Like ``map`` but yields records one at a time.

        The store is consumed as the cursor advances. A record arriving ahead
        of a hit the store has not produced yet is held until that hit arrives.
        """
        ids = self.extract_ids(results)
        if not ids:
            return iter(())
        return _ordered_records(ids, store.find_by_ids(ids), store)


def _ordered_records(ids: list[str], records: Iterable[Any], store: RecordStore) -> Iterator[Any]:
    positions = {doc_id: position for position, doc_id in enumerate(ids)}
    pending: dict[int, Any] = {}
    next_position = 0
    for record in records:
        position = positions.get(str(store.key_of(record)))
        if position is None or position < next_position:
            continue
        pending[position] = record
        while next_position in pending:
            yield pending.pop(next_position)
            next_position += 1
    for position in sorted(pending):
        yield pending[position]
