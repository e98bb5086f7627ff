"""Configuration — Settings loaded from the environment and YAML files."""

from scoutbridge.config.settings import Settings

__all__ = ["Settings"]
