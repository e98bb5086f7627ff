"""Engine-specific exceptions."""

from __future__ import annotations


class EngineError(Exception):
    """Base exception for search engine errors."""


class ClusterError(EngineError):
    """Raised when the cluster answers with a non-success status."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class UnsupportedOperationError(EngineError):
    """Raised for operations the engine deliberately does not perform."""


class ConfigurationError(EngineError):
    """Raised when engine configuration is invalid."""


class EngineNotFoundError(EngineError):
    """Raised when a requested engine is not registered or not created."""
