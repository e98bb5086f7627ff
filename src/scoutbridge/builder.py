"""Search builder — Fluent construction of search requests.

Usage::

    page = (
        SearchBuilder.for_model(engine, Article(), "solar nowcasting")
        .where("status", "published")
        .order_by_desc("published_at")
        .paginate(article_store, per_page=20, page=2)
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from scoutbridge.engines.base.engine import Engine
from scoutbridge.engines.opensearch.translator import DEFAULT_PER_PAGE
from scoutbridge.models.document import SOFT_DELETE_FIELD, RecordStore, Searchable
from scoutbridge.models.query import OrderClause, RawSearchRequest, SearchRequest, SortDirection, WhereClause
from scoutbridge.models.result import HitList, Page


class SearchBuilder:
    """Accumulates filters, orders and a limit, then runs them on an engine.

    Each terminal method snapshots the builder into an immutable
    ``SearchRequest``, so a builder can be reused and extended between calls.

    Args:
        engine: Engine the search runs on.
        index: Index to search.
        searchable_fields: Fields the free-text query is matched against.
        query: Free-text query; ``None`` or empty matches everything.
        soft_delete: Whether soft-deleted documents are hidden by default;
            ``None`` follows the engine's ``soft_delete`` setting.
    """

    def __init__(
        self,
        engine: Engine,
        index: str,
        searchable_fields: Iterable[str] = (),
        query: str | None = None,
        *,
        soft_delete: bool | None = None,
    ) -> None:
        self.engine = engine
        self.index = index
        self.searchable_fields = tuple(searchable_fields)
        self.query = query
        self.wheres: list[WhereClause] = []
        self.orders: list[OrderClause] = []
        self.limit: int | None = None

        if soft_delete is None:
            soft_delete = engine.soft_delete
        if soft_delete:
            self.wheres.append(WhereClause(field=SOFT_DELETE_FIELD, value=0))

    @classmethod
    def for_model(
        cls,
        engine: Engine,
        model: Searchable,
        query: str | None = None,
        *,
        soft_delete: bool | None = None,
    ) -> SearchBuilder:
        """Start a search over the index and searchable fields of *model*."""
        return cls(engine, model.searchable_as(), model.searchable_fields(), query, soft_delete=soft_delete)

    # ── Constraints ──────────────────────────────────────────────────────

    def where(self, field: str, value: Any) -> SearchBuilder:
        """Require *field* to match *value*. Null or empty values are ignored."""
        self.wheres.append(WhereClause(field=field, value=value))
        return self

    def with_trashed(self) -> SearchBuilder:
        """Include soft-deleted documents."""
        self.wheres = [w for w in self.wheres if w.field != SOFT_DELETE_FIELD]
        return self

    def only_trashed(self) -> SearchBuilder:
        """Only return soft-deleted documents."""
        self.with_trashed()
        self.wheres.append(WhereClause(field=SOFT_DELETE_FIELD, value=1))
        return self

    def order_by(self, column: str, direction: str | SortDirection = SortDirection.ASC) -> SearchBuilder:
        if not isinstance(direction, SortDirection):
            direction = SortDirection(direction.lower())
        self.orders.append(OrderClause(column=column, direction=direction))
        return self

    def order_by_desc(self, column: str) -> SearchBuilder:
        return self.order_by(column, SortDirection.DESC)

    def latest(self, column: str = "created_at") -> SearchBuilder:
        return self.order_by(column, SortDirection.DESC)

    def oldest(self, column: str = "created_at") -> SearchBuilder:
        return self.order_by(column, SortDirection.ASC)

    def take(self, limit: int) -> SearchBuilder:
        """Cap the number of hits returned by ``raw``, ``keys``, ``get`` and ``cursor``."""
        self.limit = limit
        return self

    def to_request(self) -> SearchRequest:
        """Snapshot the builder into an immutable request."""
        return SearchRequest(
            index=self.index,
            query=self.query or None,
            wheres=list(self.wheres),
            orders=list(self.orders),
            limit=self.limit,
            searchable_fields=self.searchable_fields,
        )

    # ── Execution ────────────────────────────────────────────────────────

    def raw(self) -> HitList:
        """Run the search and return the hits as the cluster sent them."""
        return self.engine.search(self.to_request())

    def search_raw(self, body: dict[str, Any]) -> HitList:
        """Run *body* verbatim against this builder's index."""
        return self.engine.search(RawSearchRequest(index=self.index, body=body))

    def keys(self) -> list[str]:
        """Matching document ids, in relevance (or sort) order."""
        return self.engine.extract_ids(self.raw())

    def get(self, store: RecordStore) -> list[Any]:
        """Matching records from *store*, in hit order."""
        return self.engine.map(self.raw(), store)

    def cursor(self, store: RecordStore) -> Iterator[Any]:
        """Like ``get`` but yields records lazily."""
        return self.engine.lazy_map(self.raw(), store)

    def paginate_raw(self, per_page: int | None = None, page: int = 1) -> HitList:
        """One page of hits, as the cluster sent them."""
        return self.engine.paginate_search(self.to_request(), per_page, page)

    def paginate(self, store: RecordStore, per_page: int | None = None, page: int = 1) -> Page:
        """One page of records from *store*, with the total match count."""
        per_page = per_page or DEFAULT_PER_PAGE
        hits = self.paginate_raw(per_page, page)
        return Page(
            items=self.engine.map(hits, store),
            total=self.engine.total_count(hits),
            per_page=per_page,
            current_page=page,
        )
