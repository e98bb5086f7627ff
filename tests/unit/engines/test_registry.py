"""Tests for the engine registry and settings-driven engine construction."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from scoutbridge.config.settings import Settings
from scoutbridge.engines import build_engine
from scoutbridge.engines.base.exceptions import ConfigurationError, EngineNotFoundError
from scoutbridge.engines.base.registry import EngineRegistry
from scoutbridge.engines.opensearch.engine import OpenSearchEngine


class TestEngineRegistry:
    def test_register_and_create(self) -> None:
        registry = EngineRegistry()
        engine_cls = MagicMock()
        registry.register("fake", engine_cls)

        engine = registry.create("fake", host="x")

        engine_cls.assert_called_once_with(host="x")
        assert registry.get("fake") is engine
        assert registry.registered_engines == ["fake"]
        assert registry.active_engines == ["fake"]

    def test_create_unknown_raises(self) -> None:
        with pytest.raises(EngineNotFoundError, match="No engine registered"):
            EngineRegistry().create("missing")

    def test_get_before_create_raises(self) -> None:
        registry = EngineRegistry()
        registry.register("fake", MagicMock())
        with pytest.raises(EngineNotFoundError, match="not created"):
            registry.get("fake")

    def test_get_default(self) -> None:
        registry = EngineRegistry()
        registry.register("a", MagicMock())
        first = registry.create("a")
        assert registry.get_default() is first

    def test_get_default_empty(self) -> None:
        with pytest.raises(EngineNotFoundError):
            EngineRegistry().get_default()

    def test_recreate_closes_previous(self) -> None:
        registry = EngineRegistry()
        registry.register("a", MagicMock(side_effect=[MagicMock(), MagicMock()]))
        first = registry.create("a")
        registry.create("a")
        first.close.assert_called_once()

    def test_close_all(self) -> None:
        registry = EngineRegistry()
        registry.register("a", MagicMock())
        engine = registry.create("a")
        registry.close_all()
        engine.close.assert_called_once()
        assert registry.active_engines == []


class TestBuildEngine:
    def test_builds_opensearch_from_settings(self, settings: Settings) -> None:
        settings.opensearch.host = "https://search.internal:9200"
        settings.opensearch.basic_auth = False
        settings.scout.soft_delete = True

        engine = build_engine(settings)
        try:
            assert isinstance(engine, OpenSearchEngine)
            assert engine.transport.base_url == "https://search.internal:9200"
            assert not engine.transport.credentialed
            assert engine.soft_delete is True
        finally:
            engine.close()

    def test_unknown_driver(self, settings: Settings) -> None:
        settings.scout.driver = "algolia"
        with pytest.raises(ConfigurationError, match="algolia"):
            build_engine(settings)

    def test_uses_given_registry(self, settings: Settings) -> None:
        registry = EngineRegistry()
        engine = build_engine(settings, registry)
        try:
            assert registry.get("opensearch") is engine
        finally:
            registry.close_all()
