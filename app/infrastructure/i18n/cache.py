"""Process-wide translation cache.

The cache tree maps text domain -> locale -> leaf, where a leaf maps message
keys to CachedTranslation results. Each execution context binds references
to the leaves of its active text domain and locale (plus up to two
extension overlays), so writes through a context are visible to every
other context bound to the same leaf.
"""

import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from infrastructure.i18n.models import (
    CONFIRMED_ABSENT,
    METADATA_KEY,
    NEVER_LOOKED,
    CachedTranslation,
    plural_cache_key,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()

CacheLeaf = Dict[str, CachedTranslation]


class CacheTree:
    """Thread-safe two level cache: text domain -> locale -> leaf.

    Leaves are plain dicts handed out by reference. Creating a leaf and
    bulk loading an overlay happen under locks; reads and single-key writes
    on a leaf go straight to the dict.

    Attributes:
        _leaves: Nested dict {text_domain: {locale: leaf}}.
        _lock: Guards the tree structure.
        _load_locks: One lock per (text_domain, locale) for overlay loads.
    """

    def __init__(self):
        self._leaves: Dict[Optional[str], Dict[str, CacheLeaf]] = {}
        self._lock = threading.RLock()
        self._load_locks: Dict[Tuple[Optional[str], str], threading.Lock] = {}

    def leaf(self, text_domain: Optional[str], locale: str) -> CacheLeaf:
        """Get the leaf for a text domain and locale, creating it if missing.

        The metadata key is (re)seeded as confirmed absent.

        Args:
            text_domain: Text domain name.
            locale: Locale identifier.

        Returns:
            The shared leaf dict.
        """
        with self._lock:
            locales = self._leaves.setdefault(text_domain, {})
            leaf = locales.get(locale)
            if leaf is None:
                leaf = {}
                locales[locale] = leaf
                logger.debug("cache_leaf_created", text_domain=text_domain, locale=locale)
            leaf[METADATA_KEY] = CONFIRMED_ABSENT
            return leaf

    def overlay(
        self,
        text_domain: Optional[str],
        locale: str,
        loader: Callable[[], Mapping[str, str]],
    ) -> CacheLeaf:
        """Get an overlay leaf, bulk loading it on first creation.

        The loader only runs when the tree has no leaf for the text domain
        and locale yet. Concurrent callers for the same pair wait for a
        single load.

        Args:
            text_domain: Text domain name.
            locale: Overlay locale identifier.
            loader: Returns every translation of the locale.

        Returns:
            The shared leaf dict.
        """
        existing = self.get(text_domain, locale)
        if existing is not None:
            return existing

        with self._load_lock(text_domain, locale):
            existing = self.get(text_domain, locale)
            if existing is not None:
                return existing

            leaf: CacheLeaf = {
                key: CachedTranslation.from_lookup(text)
                for key, text in loader().items()
            }
            leaf[METADATA_KEY] = CONFIRMED_ABSENT

            with self._lock:
                locales = self._leaves.setdefault(text_domain, {})
                current = locales.setdefault(locale, leaf)

        if current is leaf:
            logger.info(
                "overlay_loaded",
                text_domain=text_domain,
                locale=locale,
                message_count=len(leaf) - 1,
            )
        return current

    def get(self, text_domain: Optional[str], locale: str) -> Optional[CacheLeaf]:
        """Get an existing leaf without creating it."""
        with self._lock:
            return self._leaves.get(text_domain, {}).get(locale)

    def locales(self, text_domain: Optional[str]) -> List[str]:
        """Get the locales cached for a text domain."""
        with self._lock:
            return list(self._leaves.get(text_domain, {}))

    def clear(self) -> None:
        """Drop every cached leaf (for testing).

        Contexts still holding references keep their detached leaves until
        they re-bind.
        """
        with self._lock:
            self._leaves.clear()
            self._load_locks.clear()
        logger.info("cache_tree_cleared")

    def _load_lock(self, text_domain: Optional[str], locale: str) -> threading.Lock:
        with self._lock:
            return self._load_locks.setdefault((text_domain, locale), threading.Lock())


@dataclass
class CacheBinding:
    """An execution context's view into the cache tree.

    Attributes:
        primary: Leaf of the context's text domain and locale.
        ext1: First extension overlay leaf, if an extension locale is set.
        ext2: Second extension overlay leaf, consulted before ext1.
    """

    primary: CacheLeaf = field(default_factory=dict)
    ext1: Optional[CacheLeaf] = None
    ext2: Optional[CacheLeaf] = None

    @property
    def is_stale(self) -> bool:
        # A bound primary leaf always holds the metadata key
        return len(self.primary) == 0

    def lookup(self, key: str) -> CachedTranslation:
        """Look up a key in the overlays, then in the primary leaf.

        An overlay only answers when it holds a translation for the key.

        Returns:
            The cached result, NEVER_LOOKED if the primary leaf has no entry.
        """
        for overlay in (self.ext2, self.ext1):
            if overlay is not None:
                cached = overlay.get(key)
                if cached is not None and cached.is_present:
                    return cached
        return self.primary.get(key, NEVER_LOOKED)

    def find(self, key: str, fetch: Callable[[], Optional[str]]) -> CachedTranslation:
        """Look up a key, fetching and memoizing it in the primary leaf on a miss.

        Args:
            key: Message key.
            fetch: Repository lookup for the key.

        Returns:
            PRESENT or CONFIRMED_ABSENT result.
        """
        cached = self.lookup(key)
        if cached.was_looked_up:
            return cached
        cached = CachedTranslation.from_lookup(fetch())
        self.primary[key] = cached
        return cached

    def plural_find(
        self, keys: Sequence[str], fetch: Callable[[], Optional[str]]
    ) -> CachedTranslation:
        """Look up plural forms in the primary leaf only, fetching on a miss.

        Args:
            keys: Singular and plural forms.
            fetch: Repository plural lookup for the forms.

        Returns:
            PRESENT or CONFIRMED_ABSENT result.
        """
        cache_key = plural_cache_key(*keys)
        cached = self.primary.get(cache_key, NEVER_LOOKED)
        if cached.was_looked_up:
            return cached
        cached = CachedTranslation.from_lookup(fetch())
        self.primary[cache_key] = cached
        return cached

    def expire(self, key: str) -> None:
        """Remove a key from the primary leaf; overlays are untouched."""
        self.primary.pop(key, None)
