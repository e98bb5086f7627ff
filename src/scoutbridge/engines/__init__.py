"""Search engine layer — Pluggable drivers behind the ``Engine`` interface.

Built-in drivers:
  - opensearch: OpenSearch REST API (documents, translated and raw search)

Implement ``Engine`` and register it with an ``EngineRegistry`` to add
another backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoutbridge.engines.base.engine import Engine
from scoutbridge.engines.base.exceptions import ConfigurationError, EngineNotFoundError
from scoutbridge.engines.base.registry import EngineRegistry
from scoutbridge.engines.opensearch.engine import OpenSearchEngine

if TYPE_CHECKING:
    from scoutbridge.config.settings import Settings


def build_engine(settings: Settings, registry: EngineRegistry | None = None) -> Engine:
    """Create the engine named by ``settings.scout.driver``.

    Args:
        settings: Application settings.
        registry: Registry to create the engine in. A fresh one with the
            built-in drivers is used if omitted.

    Raises:
        ConfigurationError: If the configured driver is unknown.
    """
    registry = registry or EngineRegistry()
    if "opensearch" not in registry.registered_engines:
        registry.register("opensearch", OpenSearchEngine)

    driver = settings.scout.driver
    if driver == "opensearch":
        kwargs = {**settings.opensearch.engine_kwargs(), "soft_delete": settings.scout.soft_delete}
    else:
        kwargs = {}

    try:
        return registry.create(driver, **kwargs)
    except EngineNotFoundError as e:
        raise ConfigurationError(f"Unknown search driver '{driver}'") from e


__all__ = ["Engine", "EngineRegistry", "OpenSearchEngine", "build_engine"]
