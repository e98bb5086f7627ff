"""Cluster transport — One HTTP client per engine, with auth resolved up front.

Whether the cluster needs HTTP basic auth is decided once, when the
transport is built, and captured in the ``httpx.Client`` itself. Individual
calls never re-check it.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from scoutbridge.engines.base.exceptions import ClusterError

logger = logging.getLogger(__name__)


class ClusterTransport:
    """Blocking JSON-over-HTTP access to an OpenSearch cluster.

    Args:
        base_url: Cluster URL, e.g. ``"https://localhost:9200"``.
        auth: Credentials to send with every request, or ``None`` for an
            anonymous transport.
        timeout: Request timeout in seconds; ``None`` keeps the httpx default.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.Client``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth: httpx.BasicAuth | None = None,
        timeout: float | None = None,
        **httpx_kwargs: Any,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._credentialed = auth is not None

        client_kwargs: dict[str, Any] = {"base_url": self.base_url, "auth": auth}
        if timeout is not None:
            client_kwargs["timeout"] = httpx.Timeout(timeout)
        client_kwargs.update(httpx_kwargs)
        self._client = httpx.Client(**client_kwargs)

    @classmethod
    def create(
        cls,
        base_url: str,
        *,
        basic_auth: bool,
        username: str | None = None,
        password: str | None = None,
        **kwargs: Any,
    ) -> ClusterTransport:
        """Build a credentialed or anonymous transport from config values."""
        auth = httpx.BasicAuth(username or "", password or "") if basic_auth else None
        return cls(base_url, auth=auth, **kwargs)

    @property
    def credentialed(self) -> bool:
        """Whether requests carry basic-auth credentials."""
        return self._credentialed

    def post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        logger.debug("POST %s%s", self.base_url, path)
        return self._client.post(path, json=payload)

    def delete(self, path: str) -> httpx.Response:
        logger.debug("DELETE %s%s", self.base_url, path)
        return self._client.delete(path)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> ClusterTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def document_path(index: str, doc_id: str) -> str:
    """``/{index}/_doc/{id}`` with the id escaped as a single path segment."""
    return f"/{index}/_doc/{quote(doc_id, safe='')}"


def error_reason(response: httpx.Response) -> str:
    """Extract ``error.reason`` from a cluster response, else the HTTP reason phrase."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("reason"):
            return str(error["reason"])
    return response.reason_phrase


def raise_for_cluster_error(response: httpx.Response) -> None:
    """Raise ``ClusterError`` unless the cluster answered 200 OK."""
    if response.status_code != 200:
        raise ClusterError(error_reason(response), status_code=response.status_code)


def response_json(response: httpx.Response) -> dict[str, Any]:
    """Decode a successful response body, raising ``ClusterError`` if it is not a JSON object."""
    try:
        data = response.json()
    except ValueError as e:
        raise ClusterError(f"Malformed response body: {e}", status_code=response.status_code) from e
    if not isinstance(data, dict):
        raise ClusterError("Malformed response body: expected a JSON object", status_code=response.status_code)
    return data
