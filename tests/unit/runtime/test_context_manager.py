"""Unit tests for the configuration context."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.bookshelf.runtime.config.config_data import ConfigData, ValidationConfig
from src.bookshelf.runtime.context import (
    AppContext,
    get_config,
    get_context,
    load_default_config,
    set_config,
    with_context,
)
from src.bookshelf.runtime.settings import EnvironmentVariables


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_level(self):
        original_config = get_config()
        original_url = original_config.database.url

        test_config = ConfigData()
        test_config.database.url = "sqlite:///override.db"

        with with_context(test_config):
            override_config = get_config()
            assert override_config.database.url == "sqlite:///override.db"
            assert override_config is not original_config

        after_config = get_config()
        assert after_config.database.url == original_url
        assert after_config is original_config

    def test_with_context_keeps_unset_fields(self):
        """Only explicitly set fields override; siblings are inherited."""
        base = ConfigData()
        base.logging.level = "WARNING"
        base.database.url = "sqlite:///base.db"

        with with_context(base):
            override = ConfigData(validation=ValidationConfig(require_review_book=True))
            with with_context(override):
                config = get_config()
                assert config.validation.require_review_book is True
                assert config.logging.level == "WARNING"
                assert config.database.url == "sqlite:///base.db"

    def test_with_context_nested_overrides(self):
        level1 = ConfigData()
        level1.app.name = "level1"

        with with_context(level1):
            assert get_config().app.name == "level1"

            level2 = ConfigData()
            level2.app.name = "level2"
            level2.logging.level = "DEBUG"

            with with_context(level2):
                assert get_config().app.name == "level2"
                assert get_config().logging.level == "DEBUG"

            assert get_config().app.name == "level1"

    def test_with_context_none_is_a_no_op(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError, match="config_override must be ConfigData"):
            with with_context({"app": {"name": "nope"}}):
                pass

    def test_context_restored_after_exception(self):
        original = get_config()
        override = ConfigData()
        override.app.name = "boom"

        with pytest.raises(RuntimeError):
            with with_context(override):
                raise RuntimeError("fail inside context")

        assert get_config() is original

    def test_set_config_replaces_configuration(self):
        original = get_config()
        replacement = ConfigData()
        replacement.app.name = "replaced"
        try:
            set_config(replacement)
            assert get_config() is replacement
        finally:
            set_config(original)


class TestLoadDefaultConfig:
    def test_missing_file_falls_back_to_defaults(self, tmp_path: Path):
        env = {
            "APP_CONFIG_FILE": str(tmp_path / "absent.yaml"),
            "APP_ENVIRONMENT": "test",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_default_config(EnvironmentVariables())

        assert config.app.environment == "test"
        assert config.database.url == ConfigData().database.url

    def test_file_is_loaded(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "config:\n  validation:\n    require_review_book: true\n"
        )
        with patch.dict(os.environ, {"APP_CONFIG_FILE": str(config_file)}, clear=True):
            config = load_default_config(EnvironmentVariables())

        assert config.validation.require_review_book is True

    def test_log_level_variable_wins(self, tmp_path: Path):
        env = {"APP_CONFIG_FILE": str(tmp_path / "absent.yaml"), "LOG_LEVEL": "debug"}
        with patch.dict(os.environ, env, clear=True):
            config = load_default_config(EnvironmentVariables())

        assert config.logging.level == "DEBUG"
