"""OpenSearch engine — Keeps application models searchable in OpenSearch (v1+).

Talks to the cluster's REST API directly with ``httpx``: one request per
document write, one request per search. Indexes are never created
explicitly; OpenSearch creates them on the first document write.

Usage::

    engine = OpenSearchEngine(
        host="https://localhost:9200",
        username="admin",
        password="admin",
    )
    engine.index(articles)
    hits = engine.search(SearchRequest(index="articles", query="solar"))
    records = engine.map(hits, article_store)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from scoutbridge.engines.base.engine import Engine
from scoutbridge.engines.base.exceptions import UnsupportedOperationError
from scoutbridge.engines.opensearch.translator import QueryTranslator
from scoutbridge.engines.opensearch.transport import (
    ClusterTransport,
    document_path,
    error_reason,
    raise_for_cluster_error,
    response_json,
)
from scoutbridge.models.document import SOFT_DELETE_FIELD, Searchable, SoftDeletable
from scoutbridge.models.query import RawSearchRequest, SearchRequest
from scoutbridge.models.result import HitList, WriteReport

logger = logging.getLogger(__name__)


class OpenSearchEngine(Engine):
    """Search engine driver for OpenSearch.

    Supports:
      - Document upsert and delete (one HTTP call per document)
      - Translated searches (free text, equality filters, sort, pagination)
      - Raw searches with a caller-supplied query document
      - Index deletion

    Args:
        host: Cluster base URL.
        basic_auth: Whether to send HTTP basic-auth credentials.
        username: Basic-auth username.
        password: Basic-auth password.
        soft_delete: Whether to record ``__soft_deleted`` on soft-deletable models.
        timeout: Request timeout in seconds; ``None`` keeps the httpx default.
        transport: A prebuilt ``ClusterTransport``; overrides the connection args.
        **kwargs: Additional keyword arguments forwarded to ``httpx.Client``.
    """

    def __init__(
        self,
        host: str = "http://localhost:9200",
        basic_auth: bool = True,
        username: str | None = None,
        password: str | None = None,
        soft_delete: bool = False,
        timeout: float | None = None,
        transport: ClusterTransport | None = None,
        **kwargs: Any,
    ) -> None:
        self._soft_delete = soft_delete
        self._transport = transport or ClusterTransport.create(
            host,
            basic_auth=basic_auth,
            username=username,
            password=password,
            timeout=timeout,
            **kwargs,
        )
        self._translator = QueryTranslator()

    @property
    def name(self) -> str:
        return "opensearch"

    @property
    def soft_delete(self) -> bool:
        return self._soft_delete

    @property
    def transport(self) -> ClusterTransport:
        return self._transport

    def close(self) -> None:
        """Close the cluster transport."""
        self._transport.close()

    # ── Documents ────────────────────────────────────────────────────────

    def index(self, models: Sequence[Searchable]) -> WriteReport:
        """Upsert one document per model into the model's index."""
        report = WriteReport()
        if not models:
            return report

        for model in models:
            document = self._document_for(model)
            if document is None:
                continue

            doc_id = str(document["id"])
            response = self._transport.post(document_path(model.searchable_as(), doc_id), document)
            if response.is_success:
                report.succeeded.append(doc_id)
            else:
                reason = error_reason(response)
                logger.warning("Failed to index document %s: %s", doc_id, reason)
                report.failed[doc_id] = reason

        return report

    def remove(self, ids: Sequence[str | int], index: str) -> WriteReport:
        """Delete documents by id. Missing documents are left to the cluster."""
        report = WriteReport()
        for raw_id in ids:
            doc_id = str(raw_id)
            response = self._transport.delete(document_path(index, doc_id))
            if response.is_success:
                report.succeeded.append(doc_id)
            else:
                reason = error_reason(response)
                logger.warning("Failed to remove document %s: %s", doc_id, reason)
                report.failed[doc_id] = reason
        return report

    def delete(self, models: Sequence[Searchable]) -> WriteReport:
        """Delete the documents of *models* from their index."""
        if not models:
            return WriteReport()
        return self.remove([m.search_key() for m in models], models[0].searchable_as())

    def _document_for(self, model: Searchable) -> dict[str, Any] | None:
        searchable = model.to_searchable_dict()
        if not searchable:
            return None

        document: dict[str, Any] = {"id": model.search_key(), **searchable}
        if self._soft_delete and isinstance(model, SoftDeletable):
            document[SOFT_DELETE_FIELD] = 1 if model.trashed() else 0
        return document

    # ── Search ───────────────────────────────────────────────────────────

    def search(self, request: SearchRequest | RawSearchRequest) -> HitList:
        """Run a search, bounded by the request limit or the result window."""
        if isinstance(request, RawSearchRequest):
            return self._perform_search(request.index, request.body)
        return self._perform_search(request.index, self._translator.search_body(request))

    def paginate_search(self, request: SearchRequest, per_page: int | None, page: int) -> HitList:
        """Run one page of a translated search."""
        return self._perform_search(request.index, self._translator.paginate_body(request, per_page, page))

    def _perform_search(self, index: str, body: dict[str, Any]) -> HitList:
        response = self._transport.post(f"/{index}/_search", body)
        raise_for_cluster_error(response)
        return HitList.from_response(response_json(response).get("hits"))

    # ── Indexes ──────────────────────────────────────────────────────────

    def create_index(self, name: str, **options: Any) -> Any:
        raise UnsupportedOperationError("OpenSearch indexes are created automatically upon adding objects.")

    def drop_index(self, index: str) -> None:
        """Delete *index*; raises ``ClusterError`` on anything but 200 OK."""
        response = self._transport.delete(f"/{index}")
        raise_for_cluster_error(response)
        logger.info("Dropped index: %s", index)
