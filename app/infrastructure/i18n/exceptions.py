"""Custom exceptions for the i18n system.

Provides the error hierarchy raised by translation lookups when the
translation store is misconfigured.
"""

from typing import Optional


class I18nError(Exception):
    """Base exception for all i18n-related errors.

    Example:
        try:
            context.cached_find("Hello")
        except I18nError as e:
            logger.error("i18n_error", error=str(e))
    """

    pass


class ConfigurationError(I18nError):
    """Raised when the translation store is used before it is configured."""

    pass


class NoTextDomainConfiguredError(ConfigurationError):
    """Raised when the active text domain has no registered repository.

    Example:
        >>> context.text_domain = "billing"
        >>> context.cached_find("Invoice")
        Traceback (most recent call last):
        ...
        NoTextDomainConfiguredError: Current text domain ('billing') was not added, use add_text_domain()

    Attributes:
        text_domain: The text domain that was active when the lookup failed.
    """

    def __init__(self, text_domain: Optional[str]):
        self.text_domain = text_domain
        super().__init__(
            f"Current text domain ({text_domain!r}) was not added, use add_text_domain()"
        )
