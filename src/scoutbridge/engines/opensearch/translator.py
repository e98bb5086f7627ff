"""Query translator — Turns a ``SearchRequest`` into an OpenSearch query document.

Pure functions only: no network access, no logging, no mutation of the
request. The same request always yields the same document.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from scoutbridge.models.query import OrderClause, SearchRequest

DEFAULT_PER_PAGE = 10

# OpenSearch rejects from + size beyond index.max_result_window (10000 by default).
MAX_RESULT_WINDOW = 10000


class QueryTranslator:
    """Builds OpenSearch request bodies from search requests.

    Free text becomes a ``simple_query_string`` under ``bool.must``; each
    non-empty equality filter becomes an AND ``match`` under ``bool.filter``.
    """

    @staticmethod
    def build_query(request: SearchRequest) -> dict[str, Any] | None:
        """Build the ``query`` section, or ``None`` to let the cluster match all."""
        clauses: dict[str, list[dict[str, Any]]] = {}

        if request.query:
            text: dict[str, Any] = {
                "query": request.query,
                "default_operator": "or",
            }
            if request.searchable_fields:
                text["fields"] = list(request.searchable_fields)
            clauses["must"] = [{"simple_query_string": text}]

        filters = [
            {"match": {where.field: {"query": where.value, "operator": "and"}}}
            for where in request.wheres
            if where.field and not where.is_empty
        ]
        if filters:
            clauses["filter"] = filters

        if not clauses:
            return None
        return {"bool": clauses}

    @staticmethod
    def build_sort(orders: Iterable[OrderClause]) -> list[dict[str, Any]]:
        """Build the ``sort`` section; empty means relevance order."""
        return [{order.column: {"order": order.direction.value}} for order in orders]

    @classmethod
    def search_body(cls, request: SearchRequest) -> dict[str, Any]:
        """Body for an unpaginated search, bounded by the request limit."""
        body: dict[str, Any] = {
            "_source": True,
            "size": request.limit or MAX_RESULT_WINDOW,
            "from": 0,
        }
        return cls._finish(body, request)

    @classmethod
    def paginate_body(cls, request: SearchRequest, per_page: int | None, page: int) -> dict[str, Any]:
        """Body for one 1-indexed page of results."""
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        size = per_page or DEFAULT_PER_PAGE
        body: dict[str, Any] = {
            "_source": True,
            "size": size,
            "from": (page - 1) * size,
        }
        return cls._finish(body, request)

    @classmethod
    def _finish(cls, body: dict[str, Any], request: SearchRequest) -> dict[str, Any]:
        query = cls.build_query(request)
        if query is not None:
            body["query"] = query
        sort = cls.build_sort(request.orders)
        if sort:
            body["sort"] = sort
        return body
