"""Data models — Search requests, hit lists and collaborator contracts."""

from scoutbridge.models.document import RecordStore, Searchable, SoftDeletable
from scoutbridge.models.query import (
    AnySearchRequest,
    OrderClause,
    RawSearchRequest,
    SearchRequest,
    SortDirection,
    WhereClause,
)
from scoutbridge.models.result import HitList, Page, WriteReport

__all__ = [
    "AnySearchRequest",
    "HitList",
    "OrderClause",
    "Page",
    "RawSearchRequest",
    "RecordStore",
    "SearchRequest",
    "Searchable",
    "SoftDeletable",
    "SortDirection",
    "WhereClause",
    "WriteReport",
]
