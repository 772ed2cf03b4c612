"""Process-wide translation store.

The TranslationStore owns everything shared between execution contexts:
the defaults, the repository registry and the cache tree. It also attaches
one TranslationContext to each thread or asyncio task that asks for one.

Lifecycle: create the store once at startup (see
``infrastructure.services.get_translation_store()``) before any context uses
it; it lives until process exit.
"""

import asyncio
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Hashable, Iterable, List, Optional

import structlog

from infrastructure.i18n.cache import CacheTree
from infrastructure.i18n.context import TranslationContext
from infrastructure.i18n.models import as_locale_list
from infrastructure.i18n.registry import RepositoryRegistry
from infrastructure.i18n.resolvers import LanguageNegotiator

logger = structlog.get_logger()


class ProcessDefaults:
    """Defaults every context falls back to when it has no value of its own.

    Each field is read and written under a lock. Writes to different fields
    are independent; the last write wins.
    """

    def __init__(
        self,
        locale: Optional[str] = None,
        text_domain: Optional[str] = None,
        available_locales: Optional[Iterable[str]] = None,
    ):
        self._lock = threading.Lock()
        self._locale = locale
        self._text_domain = text_domain
        self._available_locales = as_locale_list(available_locales)

    @property
    def locale(self) -> Optional[str]:
        with self._lock:
            return self._locale

    @locale.setter
    def locale(self, value: Optional[str]) -> None:
        with self._lock:
            self._locale = value

    @property
    def text_domain(self) -> Optional[str]:
        with self._lock:
            return self._text_domain

    @text_domain.setter
    def text_domain(self, value: Optional[str]) -> None:
        with self._lock:
            self._text_domain = value

    @property
    def available_locales(self) -> Optional[List[str]]:
        with self._lock:
            if self._available_locales is None:
                return None
            return list(self._available_locales)

    @available_locales.setter
    def available_locales(self, value: Optional[Iterable[str]]) -> None:
        locales = as_locale_list(value)
        with self._lock:
            self._available_locales = locales


def _context_owner() -> Hashable:
    """Identify the running thread and, inside an event loop, the running task."""
    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None
    return (threading.get_ident(), task)


class TranslationStore:
    """Shared translation state and per-context attachment.

    Usage:
        store = TranslationStore(default_text_domain="app")
        store.registry.register("app", repository)

        context = store.current_context()
        context.set_locale("fr-CA,fr;q=0.8")
        context.cached_find("Hello")

        # Scoped context for a request or job
        with store.bind_context(locale="de", text_domain="app") as context:
            context.cached_find("Hello")

    Attributes:
        defaults: Process-wide defaults.
        registry: Text domain to repository mapping.
        cache_tree: Process-wide translation cache.
    """

    def __init__(
        self,
        default_locale: Optional[str] = None,
        default_text_domain: Optional[str] = None,
        default_available_locales: Optional[Iterable[str]] = None,
    ):
        available_locales = as_locale_list(default_available_locales)
        # Stored as None when the available locales reject it
        if default_locale is not None:
            default_locale = LanguageNegotiator.best_locale_in(
                default_locale, available_locales
            )
        self.defaults = ProcessDefaults(
            locale=default_locale,
            text_domain=default_text_domain,
            available_locales=available_locales,
        )
        self.registry = RepositoryRegistry()
        self.cache_tree = CacheTree()
        self._current: ContextVar[Optional[TranslationContext]] = ContextVar(
            f"translation_context_{id(self)}", default=None
        )
        logger.info(
            "initialized_translation_store",
            default_locale=default_locale,
            default_text_domain=default_text_domain,
        )

    def current_context(self) -> TranslationContext:
        """Get the context of the running thread or task, creating it on first use.

        A context inherited from a parent thread or task is never reused;
        the child gets a fresh one.
        """
        owner = _context_owner()
        context = self._current.get()
        if context is None or context.owner != owner:
            context = TranslationContext(self, owner=owner)
            self._current.set(context)
        return context

    @contextmanager
    def bind_context(
        self,
        locale: Optional[str] = None,
        text_domain: Optional[str] = None,
        available_locales: Optional[Iterable[str]] = None,
    ) -> Generator[TranslationContext, None, None]:
        """Install a fresh context for the duration of a block.

        The previous context of the thread or task is restored on exit. The
        active locale and text domain are bound to the logging context for
        the same duration.

        Args:
            locale: Locale preferences to negotiate (e.g., "de-de,de;q=0.9").
            text_domain: Text domain to activate.
            available_locales: Locales accepted by this context.

        Yields:
            The new TranslationContext.

        Example:
            with store.bind_context(locale=request.headers.get("Accept-Language")):
                render_page()
        """
        context = TranslationContext(self, owner=_context_owner())
        if available_locales is not None:
            context.available_locales = available_locales
        if text_domain is not None:
            context.text_domain = text_domain
        if locale is not None:
            context.locale = locale
        context.rebind()

        token = self._current.set(context)
        try:
            with structlog.contextvars.bound_contextvars(
                locale=context.locale, text_domain=context.text_domain
            ):
                yield context
        finally:
            self._current.reset(token)

    def reset(self) -> None:
        """Drop repositories, cached translations and defaults (for testing)."""
        self.registry.reset()
        self.cache_tree.clear()
        self.defaults.locale = None
        self.defaults.text_domain = None
        self.defaults.available_locales = None
        logger.info("translation_store_reset")
