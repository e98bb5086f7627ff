"""Integration test fixtures — a live OpenSearch cluster seeded with articles.

Expects a cluster with the security plugin disabled, e.g.::

    docker run -p 9201:9200 -e discovery.type=single-node \
        -e DISABLE_SECURITY_PLUGIN=true opensearchproject/opensearch:2

Override the URL with ``SCOUTBRIDGE_TEST_OPENSEARCH_URL``.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterator

import httpx
import pytest

from scoutbridge.engines.opensearch.engine import OpenSearchEngine
from tests.integration.seed import INDEX, MOCK_ARTICLES, IntegrationArticle


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            if httpx.get(url, timeout=5).status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


@pytest.fixture(scope="session")
def opensearch_url() -> str:
    url = os.environ.get("SCOUTBRIDGE_TEST_OPENSEARCH_URL", "http://localhost:9201")
    if not _wait_for_service(url, timeout=10):
        pytest.skip(f"OpenSearch not available at {url}")
    return url


@pytest.fixture
def live_engine(opensearch_url: str) -> Iterator[OpenSearchEngine]:
    """Engine against a freshly seeded index; the index is dropped afterwards."""
    engine = OpenSearchEngine(host=opensearch_url, basic_auth=False)
    engine.index([IntegrationArticle(i, title, body, status) for i, title, body, status in MOCK_ARTICLES])
    httpx.post(f"{opensearch_url}/{INDEX}/_refresh", timeout=30).raise_for_status()
    yield engine
    engine.drop_index(INDEX)
    engine.close()
