"""Tests for application settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from scoutbridge.config.settings import Settings


class TestSettingsDefaults:
    def test_defaults(self, settings: Settings) -> None:
        assert settings.scout.driver == "opensearch"
        assert settings.scout.soft_delete is False
        assert settings.opensearch.host == "http://localhost:9200"
        assert settings.opensearch.basic_auth is True
        assert settings.opensearch.timeout is None
        assert settings.observability.log_format == "json"

    def test_engine_kwargs(self, settings: Settings) -> None:
        kwargs = settings.opensearch.engine_kwargs()
        assert kwargs["host"] == "http://localhost:9200"
        assert kwargs["basic_auth"] is True
        assert kwargs["verify"] is True

    def test_top_level_sections(self) -> None:
        assert set(Settings.model_fields) == {"scout", "opensearch", "observability"}


class TestSettingsEnvironment:
    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCOUTBRIDGE_OPENSEARCH__HOST", "https://search.internal:9200/")
        monkeypatch.setenv("SCOUTBRIDGE_OPENSEARCH__BASIC_AUTH", "false")
        monkeypatch.setenv("SCOUTBRIDGE_OPENSEARCH__USERNAME", "svc")
        monkeypatch.setenv("SCOUTBRIDGE_SCOUT__SOFT_DELETE", "true")

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.opensearch.host == "https://search.internal:9200"
        assert s.opensearch.basic_auth is False
        assert s.opensearch.username == "svc"
        assert s.scout.soft_delete is True


class TestSettingsYaml:
    def test_from_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "scoutbridge.yaml"
        config.write_text(
            "opensearch:\n"
            "  host: https://cluster:9200\n"
            "  username: admin\n"
            "  password: admin\n"
            "scout:\n"
            "  soft_delete: true\n"
            "observability:\n"
            "  log_level: debug\n"
        )

        s = Settings.from_yaml(config)

        assert s.opensearch.host == "https://cluster:9200"
        assert s.opensearch.password == "admin"
        assert s.scout.soft_delete is True
        assert s.observability.log_level == "debug"

    def test_empty_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "empty.yaml"
        config.write_text("")
        assert Settings.from_yaml(config).scout.driver == "opensearch"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "nope.yaml")
