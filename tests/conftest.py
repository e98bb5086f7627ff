"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from scoutbridge.config.settings import Settings
from scoutbridge.engines.opensearch.engine import OpenSearchEngine
from scoutbridge.engines.opensearch.transport import ClusterTransport
from tests.fakes import Article, ArticleStore, FakeCluster


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def cluster() -> FakeCluster:
    return FakeCluster()


@pytest.fixture
def transport(cluster: FakeCluster) -> Iterator[ClusterTransport]:
    """Transport wired to the fake cluster through ``httpx.MockTransport``."""
    t = ClusterTransport(
        "http://opensearch.test:9200",
        transport=httpx.MockTransport(cluster.handle),
    )
    yield t
    t.close()


@pytest.fixture
def engine(transport: ClusterTransport) -> OpenSearchEngine:
    return OpenSearchEngine(transport=transport)


@pytest.fixture
def articles() -> list[Article]:
    return [
        Article(1, "Solar nowcasting", "Irradiance forecasts from satellite imagery"),
        Article(2, "Wind farms", "Turbine wake modelling"),
        Article(3, "Solar storage", "Battery sizing for rooftop solar"),
    ]


@pytest.fixture
def store(articles: list[Article]) -> ArticleStore:
    return ArticleStore(articles)


@pytest.fixture
def search_response() -> dict[str, Any]:
    """A search response whose hits are ordered 3, 1."""
    return {
        "took": 4,
        "timed_out": False,
        "hits": {
            "total": {"value": 42, "relation": "eq"},
            "max_score": 3.2,
            "hits": [
                {"_index": "articles", "_id": "3", "_score": 3.2, "_source": {"title": "Solar storage"}},
                {"_index": "articles", "_id": "1", "_score": 1.7, "_source": {"title": "Solar nowcasting"}},
            ],
        },
    }
