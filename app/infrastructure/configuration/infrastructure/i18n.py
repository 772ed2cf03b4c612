"""Translation context and cache infrastructure settings."""

from typing import List, Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Process-wide translation defaults.

    These values seed the translation store's defaults at startup. Every
    execution context falls back to them until it sets its own value.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Locale used when a context has not set one
        I18N_DEFAULT_TEXT_DOMAIN: Text domain used when a context has not set one
        I18N_AVAILABLE_LOCALES: Comma separated list of accepted locales
            (unset means any locale is accepted)
        I18N_SILENCE_ERRORS: Register an inert repository for the default
            text domain instead of raising on lookups (default: False)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        domain = settings.i18n.default_text_domain
        locales = settings.i18n.available_locales  # ["en", "fr_CA"] or None
        ```
    """

    default_locale: Optional[str] = Field(
        default=None,
        alias="I18N_DEFAULT_LOCALE",
        description="Fallback locale for contexts without an explicit locale",
    )
    default_text_domain: Optional[str] = Field(
        default=None,
        alias="I18N_DEFAULT_TEXT_DOMAIN",
        description="Fallback text domain for contexts without an explicit one",
    )
    available_locales_raw: Optional[str] = Field(
        default=None,
        alias="I18N_AVAILABLE_LOCALES",
        description="Comma separated list of available locales",
    )
    silence_errors: bool = Field(
        default=False,
        alias="I18N_SILENCE_ERRORS",
        description="Register an inert repository for the default text domain",
    )

    @field_validator("default_locale", "default_text_domain", mode="before")
    @classmethod
    def blank_as_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty environment values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def available_locales(self) -> Optional[List[str]]:
        """Parsed available locales, or None when every locale is accepted."""
        if not self.available_locales_raw:
            return None
        locales = [
            part.strip() for part in self.available_locales_raw.split(",") if part.strip()
        ]
        return locales or None
