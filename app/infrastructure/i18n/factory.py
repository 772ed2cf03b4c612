"""Factory functions for creating i18n components.

Provides convenience functions for initializing the translation store with
the application's configured defaults.
"""

from typing import Optional

import structlog

from infrastructure.configuration import I18nSettings
from infrastructure.i18n.repositories import NullTranslationRepository
from infrastructure.i18n.store import TranslationStore

logger = structlog.get_logger()


def create_translation_store(
    settings: Optional[I18nSettings] = None,
) -> TranslationStore:
    """Create and configure a TranslationStore instance.

    Args:
        settings: Translation settings (default: loaded from the environment)

    Returns:
        TranslationStore: Store seeded with the configured defaults

    Usage:
        # Defaults from I18N_* environment variables
        store = create_translation_store()

        # Explicit settings
        store = create_translation_store(
            I18nSettings(I18N_DEFAULT_TEXT_DOMAIN="app", I18N_AVAILABLE_LOCALES="en,de")
        )
        store.registry.register("app", repository)
    """
    if settings is None:
        settings = I18nSettings()

    store = TranslationStore(
        default_locale=settings.default_locale,
        default_text_domain=settings.default_text_domain,
        default_available_locales=settings.available_locales,
    )

    if settings.silence_errors:
        store.registry.register_default(
            settings.default_text_domain, NullTranslationRepository()
        )

    logger.info(
        "translation_store_created",
        default_text_domain=settings.default_text_domain,
        available_locales=settings.available_locales,
        silence_errors=settings.silence_errors,
    )
    return store
