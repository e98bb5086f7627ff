"""OpenSearch driver — REST-based engine, query translator and transport."""

from scoutbridge.engines.opensearch.engine import OpenSearchEngine
from scoutbridge.engines.opensearch.translator import QueryTranslator
from scoutbridge.engines.opensearch.transport import ClusterTransport

__all__ = ["ClusterTransport", "OpenSearchEngine", "QueryTranslator"]
