"""Engine Registry — Manages registration and creation of search engine drivers.

The registry is a central place to register engine classes and create
engine instances based on configuration.
"""

from __future__ import annotations

import logging
from typing import Any

from scoutbridge.engines.base.engine import Engine
from scoutbridge.engines.base.exceptions import EngineNotFoundError

logger = logging.getLogger(__name__)


class EngineRegistry:
    """Registry for search engine drivers and their live instances.

    Example:
        >>> registry = EngineRegistry()
        >>> registry.register("opensearch", OpenSearchEngine)
        >>> engine = registry.create("opensearch", host="http://localhost:9200")
        >>> registry.get("opensearch") is engine
        True
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[Engine]] = {}
        self._instances: dict[str, Engine] = {}

    def register(self, name: str, engine_class: type[Engine]) -> None:
        """Register an engine class under *name*."""
        if name in self._classes:
            logger.warning("Overwriting existing engine registration: %s", name)
        self._classes[name] = engine_class
        logger.info("Registered engine: %s", name)

    def create(self, name: str, **kwargs: Any) -> Engine:
        """Create an engine instance and keep it for later ``get`` calls.

        Args:
            name: The registered driver name.
            **kwargs: Configuration passed to the engine constructor.

        Raises:
            EngineNotFoundError: If no engine is registered under this name.
        """
        if name not in self._classes:
            raise EngineNotFoundError(
                f"No engine registered with name '{name}'. "
                f"Available engines: {list(self._classes.keys())}"
            )

        engine = self._classes[name](**kwargs)
        previous = self._instances.pop(name, None)
        if previous is not None:
            previous.close()
        self._instances[name] = engine
        logger.info("Created engine: %s", name)
        return engine

    def get(self, name: str) -> Engine:
        """Get a created engine by name."""
        if name not in self._instances:
            raise EngineNotFoundError(f"Engine '{name}' is not created. Call create() first.")
        return self._instances[name]

    def get_default(self) -> Engine:
        """Get the first created engine."""
        if not self._instances:
            raise EngineNotFoundError("No engines are created.")
        return next(iter(self._instances.values()))

    def close_all(self) -> None:
        """Close every created engine."""
        for name, engine in self._instances.items():
            engine.close()
            logger.info("Closed engine: %s", name)
        self._instances.clear()

    @property
    def registered_engines(self) -> list[str]:
        return list(self._classes.keys())

    @property
    def active_engines(self) -> list[str]:
        return list(self._instances.keys())
