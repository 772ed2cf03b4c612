"""Tests for infrastructure.i18n.factory module."""

from infrastructure.configuration import I18nSettings
from infrastructure.i18n import (
    CONFIRMED_ABSENT,
    NullTranslationRepository,
    TranslationStore,
    create_translation_store,
)
from infrastructure.services import get_translation_store


class TestCreateTranslationStore:
    """Tests for create_translation_store()."""

    def test_applies_settings(self):
        settings = I18nSettings(
            I18N_DEFAULT_LOCALE="de",
            I18N_DEFAULT_TEXT_DOMAIN="app",
            I18N_AVAILABLE_LOCALES="en, de",
        )
        store = create_translation_store(settings)

        assert isinstance(store, TranslationStore)
        assert store.defaults.locale == "de"
        assert store.defaults.text_domain == "app"
        assert store.defaults.available_locales == ["en", "de"]
        assert store.registry.text_domains() == []

    def test_default_locale_is_negotiated(self):
        """The configured default locale is normalized against the available ones."""
        settings = I18nSettings(
            I18N_DEFAULT_LOCALE="de-de",
            I18N_AVAILABLE_LOCALES="de_DE,en",
        )
        store = create_translation_store(settings)

        assert store.defaults.locale == "de_DE"
        assert store.current_context().locale == "de_DE"

    def test_unsupported_default_locale_is_dropped(self):
        """A default locale outside the available locales is not applied."""
        settings = I18nSettings(
            I18N_DEFAULT_LOCALE="xx",
            I18N_AVAILABLE_LOCALES="de_DE,en",
        )
        store = create_translation_store(settings)

        assert store.defaults.locale is None
        assert store.current_context().locale == "de_DE"

    def test_silence_errors(self):
        settings = I18nSettings(
            I18N_DEFAULT_TEXT_DOMAIN="app",
            I18N_SILENCE_ERRORS=True,
        )
        store = create_translation_store(settings)

        assert isinstance(store.registry.get("app"), NullTranslationRepository)
        assert store.current_context().cached_find("Hello") is CONFIRMED_ABSENT

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("I18N_DEFAULT_TEXT_DOMAIN", "env_domain")
        monkeypatch.setenv("I18N_AVAILABLE_LOCALES", "fr_CA")
        store = create_translation_store()
        assert store.defaults.text_domain == "env_domain"
        assert store.defaults.available_locales == ["fr_CA"]


class TestGetTranslationStore:
    """Tests for the application-scoped provider."""

    def test_returns_singleton(self):
        assert get_translation_store() is get_translation_store()

    def test_uses_settings(self, monkeypatch):
        monkeypatch.setenv("I18N_DEFAULT_LOCALE", "de")
        assert get_translation_store().defaults.locale == "de"
