"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.i18n import TranslationStore, create_translation_store
from infrastructure.logging import configure_logging


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_translation_store() -> TranslationStore:
    """
    Get application-scoped TranslationStore singleton.

    Holds the process-wide translation defaults, repository registry and
    cache tree. Call it once during startup, before any thread or task
    looks up translations, and register repositories on the returned store.
    Structured logging is configured from the same settings first.

    Returns:
        TranslationStore: Cached store configured from application settings.

    Usage:
        store = get_translation_store()
        store.registry.register("app", repository)

        context = store.current_context()
        context.set_locale(accept_language)
    """
    settings = get_settings()
    configure_logging(settings=settings)
    return create_translation_store(settings.i18n)
