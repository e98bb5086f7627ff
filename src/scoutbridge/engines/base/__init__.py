"""Base engine interface — Abstract classes for search engine drivers."""

from scoutbridge.engines.base.engine import Engine
from scoutbridge.engines.base.registry import EngineRegistry

__all__ = ["Engine", "EngineRegistry"]
