"""Search request models — What the caller asks the search engine for.

A search is described by one of two request variants:

  - ``SearchRequest``: free text, equality filters, sort orders and a
    limit, translated to the engine's query DSL.
  - ``RawSearchRequest``: a native query document sent verbatim, for
    queries the translator cannot express.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class SortDirection(str, Enum):
    """Sort direction for an order clause."""

    ASC = "asc"
    DESC = "desc"


class WhereClause(BaseModel):
    """A single field-equality filter."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Document field to filter on")
    value: Any = Field(default=None, description="Value the field must match")

    @property
    def is_empty(self) -> bool:
        """Whether the value is null or empty and the filter should be ignored."""
        if self.value is None:
            return True
        if isinstance(self.value, (str, list, tuple, set, dict)):
            return len(self.value) == 0
        return False


class OrderClause(BaseModel):
    """A single sort clause."""

    model_config = ConfigDict(frozen=True)

    column: str = Field(description="Document field to sort by")
    direction: SortDirection = Field(default=SortDirection.ASC, description="Sort direction")


class SearchRequest(BaseModel):
    """A structured search, translated into a bool query before being sent."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["translated"] = "translated"
    index: str = Field(description="Index the search runs against")
    query: str | None = Field(default=None, description="Free-text query")
    wheres: tuple[WhereClause, ...] = Field(default=(), description="Equality filters, in order")
    orders: tuple[OrderClause, ...] = Field(default=(), description="Sort clauses, in order")
    limit: int | None = Field(default=None, ge=1, description="Maximum number of hits to return")
    searchable_fields: tuple[str, ...] = Field(
        default=(),
        description="Fields the free-text query is matched against",
    )


class RawSearchRequest(BaseModel):
    """A native OpenSearch query document, sent without translation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["raw"] = "raw"
    index: str = Field(description="Index the search runs against")
    body: dict[str, Any] = Field(default_factory=dict, description="Query document sent as-is")


AnySearchRequest = Annotated[SearchRequest | RawSearchRequest, Field(discriminator="kind")]
