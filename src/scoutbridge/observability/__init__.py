"""Observability — Logging setup."""

from scoutbridge.observability.logging import setup_logging

__all__ = ["setup_logging"]
