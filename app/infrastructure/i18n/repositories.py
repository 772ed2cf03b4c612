"""Translation repository interface and implementations.

Defines the contract translation sources (files, databases, remote
services) implement to feed the translation cache.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

import structlog

logger = structlog.get_logger()

PluralisationRule = Callable[[int], bool]


class TranslationRepository(ABC):
    """Abstract base for translation repositories.

    A repository serves the translations of one text domain. Lookups
    receive the locale they are made for.
    """

    @abstractmethod
    def lookup(self, key: str, locale: str) -> Optional[str]:
        """Look up the translation of a single key.

        Args:
            key: Untranslated message key.
            locale: Locale to translate to.

        Returns:
            Translated text, or None if the key has no translation.
        """
        pass

    @abstractmethod
    def lookup_plural(self, keys: Sequence[str], locale: str) -> Optional[str]:
        """Look up the translation of a set of plural forms.

        Args:
            keys: Untranslated singular and plural forms.
            locale: Locale to translate to.

        Returns:
            Translated text, or None if the forms have no translation.
        """
        pass

    @abstractmethod
    def load_all(self, locale: str) -> Mapping[str, str]:
        """Load every single-key translation for a locale.

        Args:
            locale: Locale to load.

        Returns:
            Mapping of message key to translated text.
        """
        pass

    def pluralisation_rule(self) -> Optional[PluralisationRule]:
        """Plural rule of this repository's translations, if it has one."""
        return None


class NullTranslationRepository(TranslationRepository):
    """Repository without translations.

    Registered by ``silence_errors()`` so lookups in an unconfigured text
    domain report "no translation" instead of raising.
    """

    def lookup(self, key: str, locale: str) -> Optional[str]:
        return None

    def lookup_plural(self, keys: Sequence[str], locale: str) -> Optional[str]:
        return None

    def load_all(self, locale: str) -> Mapping[str, str]:
        return {}


class InMemoryTranslationRepository(TranslationRepository):
    """Repository backed by in-memory dictionaries.

    Useful for tests and for applications that assemble translations at
    runtime. Updating a translation does not touch the translation cache;
    call ``expire_cache_for()`` on the context to pick up the change.

    Attributes:
        translations: Nested dict {locale: {key: text}}.
        plurals: Nested dict {locale: {(singular, plural, ...): text}}.
    """

    def __init__(
        self,
        translations: Optional[Mapping[str, Mapping[str, str]]] = None,
        plurals: Optional[Mapping[str, Mapping[Tuple[str, ...], str]]] = None,
        rule: Optional[PluralisationRule] = None,
    ):
        """Initialize the repository.

        Args:
            translations: Initial single-key translations by locale.
            plurals: Initial plural translations by locale, keyed by forms.
            rule: Optional plural rule for this repository's language.
        """
        self.translations: Dict[str, Dict[str, str]] = {
            locale: dict(messages) for locale, messages in (translations or {}).items()
        }
        self.plurals: Dict[str, Dict[Tuple[str, ...], str]] = {
            locale: dict(messages) for locale, messages in (plurals or {}).items()
        }
        self._rule = rule

    def lookup(self, key: str, locale: str) -> Optional[str]:
        return self.translations.get(locale, {}).get(key)

    def lookup_plural(self, keys: Sequence[str], locale: str) -> Optional[str]:
        return self.plurals.get(locale, {}).get(tuple(keys))

    def load_all(self, locale: str) -> Mapping[str, str]:
        messages = dict(self.translations.get(locale, {}))
        logger.info("loaded_translations", locale=locale, message_count=len(messages))
        return messages

    def pluralisation_rule(self) -> Optional[PluralisationRule]:
        return self._rule

    def set_message(self, locale: str, key: str, text: str) -> None:
        """Set a single-key translation."""
        self.translations.setdefault(locale, {})[key] = text

    def set_plural(self, locale: str, keys: Sequence[str], text: str) -> None:
        """Set a plural translation for a set of forms."""
        self.plurals.setdefault(locale, {})[tuple(keys)] = text
