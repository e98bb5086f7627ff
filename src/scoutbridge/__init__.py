"""scoutbridge — OpenSearch engine for application-level full-text search.

Translates builder-style search requests into the OpenSearch query DSL,
keeps documents in sync with the application's models, and maps hits back
to records in relevance order.
"""

__version__ = "0.1.0"
