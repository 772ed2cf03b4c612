"""Per execution context translation state.

Each thread or asyncio task works with its own TranslationContext: the
active locale, text domain, extension locales and the cache leaves bound to
them. Contexts share the process-wide defaults, repository registry and
cache tree through the TranslationStore they were created by.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable, Iterable, List, Optional

from infrastructure.i18n.cache import CacheBinding, CacheLeaf
from infrastructure.i18n.exceptions import NoTextDomainConfiguredError
from infrastructure.i18n.models import CachedTranslation, as_locale_list
from infrastructure.i18n.repositories import (
    NullTranslationRepository,
    PluralisationRule,
    TranslationRepository,
)
from infrastructure.i18n.resolvers import LanguageNegotiator
from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.i18n.store import TranslationStore

logger = get_module_logger()

FALLBACK_LOCALE = "en"


def default_pluralisation_rule(count: int) -> bool:
    """Use the plural form for every count except one."""
    return count != 1


@dataclass
class ContextState:
    """Values explicitly set on one execution context.

    Unset (None) values fall back to the store's process-wide defaults.
    """

    locale: Optional[str] = None
    ext_locale_1: Optional[str] = None
    ext_locale_2: Optional[str] = None
    text_domain: Optional[str] = None
    available_locales: Optional[List[str]] = None
    pluralisation_rule: Optional[PluralisationRule] = None


class TranslationContext:
    """Translation state and cached lookups for one execution context.

    Obtain the context of the running thread or task from
    ``TranslationStore.current_context()`` rather than constructing one.

    Usage:
        context = store.current_context()
        context.text_domain = "app"
        context.set_locale("de-de,de;q=0.9,en;q=0.8")  # "de_DE" if available

        translation = context.cached_find("Hello")
        if translation:
            print(translation.text)

    Attributes:
        state: Values set on this context.
        cache: References into the store's cache tree.
        owner: Identity of the thread/task the context belongs to.
    """

    def __init__(self, store: "TranslationStore", owner: Optional[Hashable] = None):
        self._store = store
        self.state = ContextState()
        self.cache = CacheBinding()
        self.owner = owner

    @property
    def store(self) -> "TranslationStore":
        return self._store

    # Locale

    @property
    def locale(self) -> str:
        """Active locale.

        Falls back to the default locale, then the first available locale,
        then "en".
        """
        return (
            self.state.locale
            or self._store.defaults.locale
            or next(iter(self.available_locales or []), None)
            or FALLBACK_LOCALE
        )

    @locale.setter
    def locale(self, preferences: Optional[str]) -> None:
        negotiated = self.best_locale_in(preferences)
        if not negotiated:
            logger.debug(
                "locale_rejected",
                requested=preferences,
                active_locale=self.locale,
                available_locales=self.available_locales,
            )
            return
        self.state.locale = negotiated
        self.rebind()

    def set_locale(self, preferences: Optional[str]) -> str:
        """Set the locale and return the active one.

        The returned locale differs from the request when it was rejected
        or negotiated to another form:

            "applied" if context.set_locale("xx") == "xx" else "rejected"
        """
        self.locale = preferences
        return self.locale

    def best_locale_in(self, preferences: Optional[str]) -> Optional[str]:
        """Negotiate a preference string against this context's available locales."""
        return LanguageNegotiator.best_locale_in(preferences, self.available_locales)

    # Extension locales

    @property
    def ext1(self) -> Optional[str]:
        return self.state.ext_locale_1

    @ext1.setter
    def ext1(self, locale: Optional[str]) -> None:
        self.state.ext_locale_1 = locale
        self.rebind()

    @property
    def ext2(self) -> Optional[str]:
        return self.state.ext_locale_2

    @ext2.setter
    def ext2(self, locale: Optional[str]) -> None:
        self.state.ext_locale_2 = locale
        self.rebind()

    def set_ext1(self, locale: Optional[str]) -> str:
        """Set the first extension locale and return the active locale."""
        self.ext1 = locale
        return self.locale

    def set_ext2(self, locale: Optional[str]) -> str:
        """Set the second extension locale and return the active locale."""
        self.ext2 = locale
        return self.locale

    # Text domain and available locales

    @property
    def text_domain(self) -> Optional[str]:
        return self.state.text_domain or self._store.defaults.text_domain

    @text_domain.setter
    def text_domain(self, text_domain: Optional[str]) -> None:
        self.state.text_domain = text_domain
        self.rebind()

    @property
    def available_locales(self) -> Optional[List[str]]:
        locales = self.state.available_locales
        if locales is None:
            locales = self._store.defaults.available_locales
        if locales is None:
            return None
        return list(locales)

    @available_locales.setter
    def available_locales(self, locales: Optional[Iterable[str]]) -> None:
        self.state.available_locales = as_locale_list(locales)
        self.rebind()

    @property
    def pluralisation_rule(self) -> PluralisationRule:
        """Plural rule: explicit override, then the repository's, then n != 1."""
        return (
            self.state.pluralisation_rule
            or self.current_repository.pluralisation_rule()
            or default_pluralisation_rule
        )

    @pluralisation_rule.setter
    def pluralisation_rule(self, rule: Optional[PluralisationRule]) -> None:
        self.state.pluralisation_rule = rule

    # Process-wide defaults

    @property
    def default_locale(self) -> Optional[str]:
        return self._store.defaults.locale

    @default_locale.setter
    def default_locale(self, preferences: Optional[str]) -> None:
        self._store.defaults.locale = self.best_locale_in(preferences)
        self.rebind()

    @property
    def default_text_domain(self) -> Optional[str]:
        return self._store.defaults.text_domain

    @default_text_domain.setter
    def default_text_domain(self, text_domain: Optional[str]) -> None:
        self._store.defaults.text_domain = text_domain
        self.rebind()

    @property
    def default_available_locales(self) -> Optional[List[str]]:
        return self._store.defaults.available_locales

    @default_available_locales.setter
    def default_available_locales(self, locales: Optional[Iterable[str]]) -> None:
        self._store.defaults.available_locales = as_locale_list(locales)
        self.rebind()

    # Repositories

    @property
    def current_repository(self) -> TranslationRepository:
        """Repository of the active text domain.

        Raises:
            NoTextDomainConfiguredError: If the text domain has no repository.
        """
        text_domain = self.text_domain
        repository = self._store.registry.get(text_domain)
        if repository is None:
            logger.error("text_domain_not_configured", text_domain=text_domain)
            raise NoTextDomainConfiguredError(text_domain)
        return repository

    def add_text_domain(
        self, text_domain: str, repository: TranslationRepository
    ) -> None:
        """Register a repository for a text domain and re-bind this context."""
        self._store.registry.register(text_domain, repository)
        self.rebind()

    def silence_errors(self) -> None:
        """Serve "no translation" for the active text domain instead of raising.

        Registers an inert repository when the text domain has none.
        """
        self._store.registry.register_default(
            self.text_domain, NullTranslationRepository()
        )
        self.rebind()

    # Cache

    def rebind(self) -> None:
        """Bind the cache references to the active text domain and locales.

        Extension overlays are bulk loaded from the active repository the
        first time their leaf is created.
        """
        text_domain = self.text_domain
        tree = self._store.cache_tree

        self.cache.primary = tree.leaf(text_domain, self.locale)
        self.cache.ext1 = self._bind_overlay(text_domain, self.ext1)

        ext2 = self.ext2
        self.cache.ext2 = self._bind_overlay(text_domain, ext2 if ext2 else None)

    def _bind_overlay(
        self, text_domain: Optional[str], locale: Optional[str]
    ) -> Optional[CacheLeaf]:
        if locale is None:
            return None

        repository = self._store.registry.get(text_domain)
        if repository is None:
            logger.warning(
                "overlay_skipped_no_repository",
                text_domain=text_domain,
                locale=locale,
            )
            return None

        return self._store.cache_tree.overlay(
            text_domain, locale, lambda: repository.load_all(locale)
        )

    def cached_find(self, key: str) -> CachedTranslation:
        """Look up a key through the cache, asking the repository on a miss.

        Extension overlays are consulted first (ext2, then ext1), then the
        primary cache. Misses are memoized in the primary cache, including
        keys without a translation.

        Returns:
            PRESENT with the translated text, or CONFIRMED_ABSENT.

        Raises:
            NoTextDomainConfiguredError: If the text domain has no repository.
        """
        repository = self.current_repository
        if self.cache.is_stale:
            self.rebind()
        locale = self.locale
        return self.cache.find(key, lambda: repository.lookup(key, locale))

    def cached_plural_find(self, *keys: str) -> CachedTranslation:
        """Look up plural forms through the primary cache only.

        Returns:
            PRESENT with the translated text, or CONFIRMED_ABSENT.

        Raises:
            NoTextDomainConfiguredError: If the text domain has no repository.
        """
        repository = self.current_repository
        if self.cache.is_stale:
            self.rebind()
        locale = self.locale
        return self.cache.plural_find(
            keys, lambda: repository.lookup_plural(keys, locale)
        )

    def expire_cache_for(self, key: str) -> None:
        """Forget the cached result of a key in the primary cache."""
        self.cache.expire(key)

    def key_exists(self, key: str) -> bool:
        """Check whether a key has a translation."""
        return bool(self.cached_find(key))
