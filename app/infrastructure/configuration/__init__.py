"""Infrastructure configuration module - public API.

This module provides centralized configuration management using Pydantic
BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation defaults settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    default_locale = settings.i18n.default_locale
    available = settings.i18n.available_locales
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure.i18n import I18nSettings

__all__ = ["Settings", "I18nSettings"]
