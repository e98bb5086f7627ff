"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (SCOUTBRIDGE_ prefix) and .env
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ScoutSettings(BaseModel):
    """Which engine backs searches and how models are indexed."""

    driver: str = Field(default="opensearch", description="Search engine driver name")
    soft_delete: bool = Field(default=False, description="Keep soft-deleted models in the index, flagged")


class OpenSearchSettings(BaseModel):
    """OpenSearch cluster connection."""

    host: str = Field(default="http://localhost:9200", description="Cluster base URL")
    basic_auth: bool = Field(default=True, description="Send HTTP basic-auth credentials")
    username: str | None = Field(default=None, description="Basic-auth username")
    password: str | None = Field(default=None, description="Basic-auth password")
    timeout: float | None = Field(default=None, description="Request timeout in seconds (None = httpx default)")
    verify_certs: bool = Field(default=True, description="Verify the cluster's TLS certificate")

    @field_validator("host")
    @classmethod
    def _strip_host(cls, v: str) -> str:
        return v.rstrip("/")

    def engine_kwargs(self) -> dict[str, Any]:
        """Constructor arguments for ``OpenSearchEngine``."""
        return {
            "host": self.host,
            "basic_auth": self.basic_auth,
            "username": self.username,
            "password": self.password,
            "timeout": self.timeout,
            "verify": self.verify_certs,
        }


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SCOUTBRIDGE_ prefix.
    Nested settings use double underscores: SCOUTBRIDGE_OPENSEARCH__HOST=https://...

    Example:
        SCOUTBRIDGE_OPENSEARCH__HOST=https://search.internal:9200
        SCOUTBRIDGE_OPENSEARCH__BASIC_AUTH=false
        SCOUTBRIDGE_SCOUT__SOFT_DELETE=true
    """

    model_config = {
        "env_prefix": "SCOUTBRIDGE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    scout: ScoutSettings = Field(default_factory=ScoutSettings)
    opensearch: OpenSearchSettings = Field(default_factory=OpenSearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys set in the YAML file win over environment variables; anything
        the file leaves out is still read from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
