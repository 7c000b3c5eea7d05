"""Unit tests for the configuration context."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.coffee_shop.runtime.config.config_data import ConfigData
from src.coffee_shop.runtime.context import (
    AppContext,
    get_config,
    get_context,
    set_config,
    set_context,
    with_context,
)


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
        original_port = original_config.app.port

        test_config = ConfigData()
        test_config.app.port = 9999

        with with_context(test_config):
            override_config = get_config()
            assert override_config.app.port == 9999
            assert override_config is not original_config

        after_config = get_config()
        assert after_config.app.port == original_port
        assert after_config is original_config

    def test_unset_fields_are_inherited(self):
        outer = ConfigData()
        outer.database.name = "outer_db"
        outer.features.audit_enabled = True

        with with_context(outer):
            inner = ConfigData()
            inner.features.create_enabled = True

            with with_context(inner):
                config = get_config()
                assert config.database.name == "outer_db"
                assert config.features.audit_enabled is True
                assert config.features.create_enabled is True

            assert get_config().features.create_enabled is False

    def test_none_override_keeps_context(self):
        original = get_config()
        with with_context(None):
            assert get_config() is original

    def test_invalid_override_type(self):
        with pytest.raises(ValueError, match="must be ConfigData"):
            with with_context({"app": {"port": 1}}):
                pass

    def test_override_is_context_local(self):
        override = ConfigData()
        override.database.name = "thread_local_db"

        with with_context(override):
            with ThreadPoolExecutor(max_workers=1) as pool:
                other_thread_name = pool.submit(lambda: get_config().database.name).result()
            assert get_config().database.name == "thread_local_db"

        assert other_thread_name != "thread_local_db"

    def test_set_config_replaces_whole_config(self):
        original = get_context()
        replacement = ConfigData()
        replacement.database.name = "replaced_db"
        try:
            set_config(replacement)

            assert get_config() is replacement
            assert get_context() is not original
        finally:
            set_context(original)

        assert get_config() is original.config
