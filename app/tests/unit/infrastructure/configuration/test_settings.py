"""Unit tests for infrastructure.configuration.settings module.

Tests cover:
- I18nSettings validation and defaults
- Settings class initialization
- Integration with Pydantic BaseSettings
"""

import pytest

from infrastructure.configuration import I18nSettings, Settings
from infrastructure.services.providers import get_settings


@pytest.fixture(autouse=True)
def clean_i18n_env(monkeypatch):
    """Remove I18N_* variables inherited from the environment."""
    for name in (
        "I18N_DEFAULT_LOCALE",
        "I18N_DEFAULT_TEXT_DOMAIN",
        "I18N_AVAILABLE_LOCALES",
        "I18N_SILENCE_ERRORS",
        "PREFIX",
    ):
        monkeypatch.delenv(name, raising=False)


class TestI18nSettings:
    """Test suite for I18nSettings configuration."""

    def test_defaults(self):
        """Test I18nSettings uses correct default values."""
        i18n = I18nSettings()

        assert i18n.default_locale is None
        assert i18n.default_text_domain is None
        assert i18n.available_locales is None
        assert i18n.silence_errors is False

    def test_custom_values(self, monkeypatch):
        """Test I18nSettings reads the environment."""
        monkeypatch.setenv("I18N_DEFAULT_LOCALE", "de")
        monkeypatch.setenv("I18N_DEFAULT_TEXT_DOMAIN", "app")
        monkeypatch.setenv("I18N_AVAILABLE_LOCALES", "en,de, fr_CA ")
        monkeypatch.setenv("I18N_SILENCE_ERRORS", "true")

        i18n = I18nSettings()

        assert i18n.default_locale == "de"
        assert i18n.default_text_domain == "app"
        assert i18n.available_locales == ["en", "de", "fr_CA"]
        assert i18n.silence_errors is True

    def test_blank_values_are_unset(self, monkeypatch):
        """Empty environment values count as unset."""
        monkeypatch.setenv("I18N_DEFAULT_LOCALE", "  ")
        monkeypatch.setenv("I18N_AVAILABLE_LOCALES", " , ")

        i18n = I18nSettings()

        assert i18n.default_locale is None
        assert i18n.available_locales is None


class TestSettings:
    """Test suite for the Settings aggregator."""

    def test_instantiates_subsettings(self):
        settings = Settings()
        assert isinstance(settings.i18n, I18nSettings)

    def test_accepts_subsettings_override(self):
        i18n = I18nSettings(I18N_DEFAULT_TEXT_DOMAIN="app")
        settings = Settings(i18n=i18n)
        assert settings.i18n is i18n

    def test_is_production_without_prefix(self):
        assert Settings().is_production is True

    def test_is_not_production_with_prefix(self, monkeypatch):
        monkeypatch.setenv("PREFIX", "dev-")
        assert Settings().is_production is False

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
