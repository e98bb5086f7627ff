"""CLI entry point for scoutbridge.

Runs searches and index maintenance against the configured cluster::

    scoutbridge search articles "solar nowcasting" --field title --where status=published
    scoutbridge import articles articles.jsonl
    scoutbridge flush articles
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from scoutbridge.engines.base.exceptions import EngineError
from scoutbridge.models.query import OrderClause, RawSearchRequest, SearchRequest, SortDirection, WhereClause

logger = logging.getLogger(__name__)


class JsonDocument:
    """A JSON object read from an import file, exposed as a searchable model."""

    def __init__(self, index: str, data: dict[str, Any], key: str = "id") -> None:
        self._index = index
        self._data = data
        self._key = key

    def searchable_as(self) -> str:
        return self._index

    def search_key(self) -> str | int:
        return self._data[self._key]

    def to_searchable_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self._data.items() if k != self._key}

    def searchable_fields(self) -> list[str]:
        return [k for k, v in self._data.items() if isinstance(v, str) and k != self._key]


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from scoutbridge.config.settings import Settings
    from scoutbridge.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            return 1
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    if args.log_format:
        settings.observability.log_format = args.log_format
    setup_logging(settings.observability)

    from scoutbridge.engines import build_engine

    try:
        with build_engine(settings) as engine:
            result = args.handler(engine, args)
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result is not None:
        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scoutbridge",
        description="scoutbridge — OpenSearch engine for application search",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["json", "console"],
        default=None,
        help="Log format (overrides config)",
    )
    parser.add_argument("--version", action="version", version=f"scoutbridge {_get_version()}")

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Run a translated search")
    search.add_argument("index", help="Index to search")
    search.add_argument("query", nargs="?", default=None, help="Free-text query")
    search.add_argument("--field", "-f", action="append", default=[], help="Searchable field (repeatable)")
    search.add_argument(
        "--where",
        "-w",
        type=_parse_where,
        action="append",
        default=[],
        help="Equality filter field=value (repeatable)",
    )
    search.add_argument(
        "--order",
        "-o",
        type=_parse_order,
        action="append",
        default=[],
        help="Sort clause column[:asc|desc] (repeatable)",
    )
    search.add_argument("--limit", "-l", type=int, default=None, help="Maximum hits (unpaginated search)")
    search.add_argument("--page", type=int, default=None, help="1-indexed page number")
    search.add_argument("--per-page", type=int, default=None, help="Page size (default 10)")
    search.set_defaults(handler=_cmd_search)

    raw = sub.add_parser("raw-search", help="Send a native query document verbatim")
    raw.add_argument("index", help="Index to search")
    raw.add_argument("body", help="Query document as JSON")
    raw.set_defaults(handler=_cmd_raw_search)

    imp = sub.add_parser("import", help="Upsert documents from a JSON-lines file")
    imp.add_argument("index", help="Target index")
    imp.add_argument("file", help="JSON-lines file, one document per line")
    imp.add_argument("--key", default="id", help="Field holding the document id")
    imp.set_defaults(handler=_cmd_import)

    remove = sub.add_parser("remove", help="Delete documents by id")
    remove.add_argument("index", help="Index to delete from")
    remove.add_argument("ids", nargs="+", help="Document ids")
    remove.set_defaults(handler=_cmd_remove)

    for name in ("flush", "delete-index"):
        drop = sub.add_parser(name, help="Delete an index and all of its documents")
        drop.add_argument("index", help="Index to delete")
        drop.set_defaults(handler=_cmd_drop_index)

    create = sub.add_parser("create-index", help="Create an index (not supported by OpenSearch driver)")
    create.add_argument("index", help="Index to create")
    create.set_defaults(handler=_cmd_create_index)

    return parser


# ── Commands ─────────────────────────────────────────────────────────────────


def _cmd_search(engine: Any, args: argparse.Namespace) -> dict[str, Any]:
    request = SearchRequest(
        index=args.index,
        query=args.query,
        wheres=args.where,
        orders=args.order,
        limit=args.limit,
        searchable_fields=args.field,
    )
    if args.page is not None or args.per_page is not None:
        hits = engine.paginate_search(request, args.per_page, args.page or 1)
    else:
        hits = engine.search(request)
    return _render_hits(engine, hits)


def _cmd_raw_search(engine: Any, args: argparse.Namespace) -> dict[str, Any]:
    hits = engine.search(RawSearchRequest(index=args.index, body=json.loads(args.body)))
    return _render_hits(engine, hits)


def _cmd_import(engine: Any, args: argparse.Namespace) -> dict[str, Any]:
    documents = []
    with open(args.file, encoding="utf-8") as f:
        for line in f:
            if line.strip():
                documents.append(JsonDocument(args.index, json.loads(line), key=args.key))
    report = engine.index(documents)
    logger.info("Imported %d of %d documents into %s", len(report.succeeded), len(documents), args.index)
    return report.model_dump()


def _cmd_remove(engine: Any, args: argparse.Namespace) -> dict[str, Any]:
    return engine.remove(args.ids, args.index).model_dump()


def _cmd_drop_index(engine: Any, args: argparse.Namespace) -> dict[str, Any]:
    engine.drop_index(args.index)
    return {"index": args.index, "dropped": True}


def _cmd_create_index(engine: Any, args: argparse.Namespace) -> None:
    engine.create_index(args.index)


# ── Helpers ──────────────────────────────────────────────────────────────────


def _parse_where(raw: str) -> WhereClause:
    field, sep, value = raw.partition("=")
    if not sep or not field:
        raise argparse.ArgumentTypeError(f"Invalid filter '{raw}', expected field=value")
    return WhereClause(field=field, value=value)


def _parse_order(raw: str) -> OrderClause:
    column, _, direction = raw.partition(":")
    return OrderClause(column=column, direction=SortDirection((direction or "asc").lower()))


def _render_hits(engine: Any, hits: Any) -> dict[str, Any]:
    return {
        "ids": engine.extract_ids(hits),
        "total": engine.total_count(hits),
        "hits": hits.hits,
    }


def _get_version() -> str:
    """Get the package version."""
    try:
        from scoutbridge import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    sys.exit(main())
