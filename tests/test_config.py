"""Tests for configuration and logging setup."""

import json
import logging

import pytest

from query_resolver.config import (
    AppConfig,
    ObservabilityConfig,
    SearchConfig,
    get_config,
    reset_config,
)
from query_resolver.domain.errors import ConfigurationError
from query_resolver.logging_setup import JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


def test_search_defaults():
    config = SearchConfig()
    assert config.db_id == "default"
    assert config.lexical_threshold is None
    assert config.allow_pivotless_search is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("QR_SEARCH_DB_ID", "movies")
    monkeypatch.setenv("QR_SEARCH_ALLOW_PIVOTLESS_SEARCH", "false")
    monkeypatch.setenv("QR_KB_DATA_DIR", "/tmp/kb")

    config = AppConfig()

    assert config.search.db_id == "movies"
    assert config.search.allow_pivotless_search is False
    assert str(config.knowledge_base.entities_path) == "/tmp/kb/entities.csv"


def test_thresholds_are_validated():
    with pytest.raises(ValueError):
        SearchConfig(auto_threshold=1.5)


def test_get_config_is_cached():
    assert get_config() is get_config()


class TestLogging:
    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_configure_sets_level(self):
        configure_logging(ObservabilityConfig(level="debug"))
        assert logging.getLogger().level == logging.DEBUG

    def test_structured_uses_json_formatter(self):
        configure_logging(ObservabilityConfig(structured=True))
        assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)

    def test_unknown_level_raises(self):
        with pytest.raises(ConfigurationError) as exc:
            configure_logging(ObservabilityConfig(level="LOUD"))
        assert exc.value.setting_name == "QR_LOG_LEVEL"

    def test_json_formatter_includes_extras(self):
        record = logging.LogRecord(
            "query_resolver.test", logging.INFO, __file__, 1, "Pivot resolved", (), None
        )
        record.placeholder = "I1"

        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == "Pivot resolved"
        assert payload["placeholder"] == "I1"
        assert "lineno" not in payload
