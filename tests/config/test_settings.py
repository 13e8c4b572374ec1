"""Tests for feature flags and API settings."""

import pytest

from learnify_mcp.config.settings import (
    DEFAULT_API_BASE_URL,
    DEFAULT_API_TIMEOUT,
    DEFAULT_TOOL_PACKAGES,
    get_all_flags,
    is_enabled,
    load_api_settings,
    set_flag,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("LEARNIFY_API_BASE_URL", "LEARNIFY_API_TIMEOUT", "LEARNIFY_TOOL_PACKAGES"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestFeatureFlags:
    """Test flag lookup and overrides."""

    def test_strict_binding_flag_exists(self):
        assert 'strict_argument_binding' in get_all_flags()

    def test_unknown_flag_raises(self):
        with pytest.raises(KeyError, match="Unknown feature flag"):
            is_enabled('no_such_flag')

    def test_set_unknown_flag_raises(self):
        with pytest.raises(KeyError):
            set_flag('no_such_flag', True)

    def test_set_flag_round_trip(self):
        previous = is_enabled('strict_argument_binding')
        try:
            set_flag('strict_argument_binding', not previous)
            assert is_enabled('strict_argument_binding') is (not previous)
        finally:
            set_flag('strict_argument_binding', previous)

    def test_get_all_flags_is_a_copy(self):
        flags = get_all_flags()
        flags['strict_argument_binding'] = 'tampered'

        assert get_all_flags()['strict_argument_binding'] != 'tampered'


class TestApiSettings:
    """Test loading settings from the environment."""

    def test_defaults(self, clean_env):
        settings = load_api_settings()

        assert settings.base_url == DEFAULT_API_BASE_URL
        assert settings.timeout == DEFAULT_API_TIMEOUT
        assert settings.tool_packages == DEFAULT_TOOL_PACKAGES

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("LEARNIFY_API_BASE_URL", "https://api.learnify.test")
        clean_env.setenv("LEARNIFY_API_TIMEOUT", "12.5")
        clean_env.setenv("LEARNIFY_TOOL_PACKAGES", "pkg_one, pkg_two,")

        settings = load_api_settings()

        assert settings.base_url == "https://api.learnify.test"
        assert settings.timeout == 12.5
        assert settings.tool_packages == ("pkg_one", "pkg_two")

    def test_invalid_timeout(self, clean_env):
        clean_env.setenv("LEARNIFY_API_TIMEOUT", "soon")

        with pytest.raises(ValueError, match="LEARNIFY_API_TIMEOUT"):
            load_api_settings()

    def test_settings_are_frozen(self, clean_env):
        settings = load_api_settings()

        with pytest.raises(AttributeError):
            settings.base_url = "http://elsewhere"
