"""Infrastructure modules for the translation cache.

Centralized infrastructure components:
- configuration: Settings management (Settings, I18nSettings)
- logging: Structured logging setup (configure_logging, get_module_logger)
- i18n: Per-context locale negotiation and translation caching
- services: Application-scoped providers (get_settings, get_translation_store)
"""

from infrastructure.services import (
    get_settings,
    get_translation_store,
)

__all__ = [
    "get_settings",
    "get_translation_store",
]
