"""Search result models — Hit lists, write outcomes and hydrated pages."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field


class HitList(BaseModel):
    """Hits returned by the cluster for one search, in cluster order.

    ``total`` is the cluster's ``hits.total.value``; it is ``None`` when the
    response did not carry one.
    """

    hits: list[dict[str, Any]] = Field(default_factory=list, description="Raw hit dicts, cluster order")
    total: int | None = Field(default=None, description="Total number of matching documents")
    max_score: float | None = Field(default=None, description="Highest relevance score on the page")

    @classmethod
    def from_response(cls, envelope: Mapping[str, Any] | None) -> HitList:
        """Build a ``HitList`` from the ``hits`` section of a search response."""
        if not envelope:
            return cls()

        total = envelope.get("total")
        value = total.get("value") if isinstance(total, Mapping) else None

        return cls(
            hits=list(envelope.get("hits") or []),
            total=int(value) if value is not None else None,
            max_score=envelope.get("max_score"),
        )

    @property
    def ids(self) -> list[str]:
        """Document ids in cluster order."""
        return [str(hit["_id"]) for hit in self.hits if "_id" in hit]

    @property
    def total_count(self) -> int:
        """Total matches, or the number of hits on this page if the cluster omitted it."""
        return self.total if self.total is not None else len(self.hits)


class WriteReport(BaseModel):
    """Outcome of a per-document write loop (upserts or deletes)."""

    succeeded: list[str] = Field(default_factory=list, description="Ids the cluster accepted")
    failed: dict[str, str] = Field(default_factory=dict, description="Rejected ids mapped to the cluster's reason")

    @property
    def ok(self) -> bool:
        return not self.failed


class Page(BaseModel):
    """One page of re-hydrated records."""

    items: list[Any] = Field(default_factory=list, description="Records in hit order")
    total: int = Field(default=0, description="Total matching documents")
    per_page: int = Field(description="Page size")
    current_page: int = Field(default=1, description="1-indexed page number")

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page
