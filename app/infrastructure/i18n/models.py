"""Translation models for the i18n system.

Defines the cached lookup result stored in the process-wide cache tree and
the reserved cache keys.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional

# Gettext catalogs keep their header under the empty msgid; it is never a
# translatable key.
METADATA_KEY = ""

PLURAL_KEY_SEPARATOR = "||||"


class CacheState(str, Enum):
    """Lookup state of a cached translation key."""

    PRESENT = "present"
    CONFIRMED_ABSENT = "confirmed_absent"
    NEVER_LOOKED = "never_looked"


@dataclass(frozen=True)
class CachedTranslation:
    """Result of a cached translation lookup.

    Distinguishes a key that was looked up and has no translation
    (CONFIRMED_ABSENT) from a key that was never looked up (NEVER_LOOKED).
    Frozen so a single instance can be shared by every cache leaf.

    Attributes:
        state: Lookup state of the key.
        text: Translated text, only set when state is PRESENT.
    """

    state: CacheState
    text: Optional[str] = None

    def __bool__(self) -> bool:
        return self.state is CacheState.PRESENT

    @property
    def is_present(self) -> bool:
        return self.state is CacheState.PRESENT

    @property
    def is_confirmed_absent(self) -> bool:
        return self.state is CacheState.CONFIRMED_ABSENT

    @property
    def was_looked_up(self) -> bool:
        return self.state is not CacheState.NEVER_LOOKED

    @classmethod
    def present(cls, text: str) -> "CachedTranslation":
        """Create a cached translation holding text."""
        return cls(state=CacheState.PRESENT, text=text)

    @classmethod
    def from_lookup(cls, text: Optional[str]) -> "CachedTranslation":
        """Wrap a repository lookup result.

        Args:
            text: Translated text, or None when the repository has none.

        Returns:
            PRESENT for a string result, CONFIRMED_ABSENT for None.
        """
        if text is None:
            return CONFIRMED_ABSENT
        return cls.present(text)


CONFIRMED_ABSENT = CachedTranslation(state=CacheState.CONFIRMED_ABSENT)
NEVER_LOOKED = CachedTranslation(state=CacheState.NEVER_LOOKED)


def plural_cache_key(*keys: str) -> str:
    """Build the composite cache key for a plural lookup.

    The key is prefixed with the separator so it can never equal a
    single-key lookup of the joined text.

    Example:
        >>> plural_cache_key("apple", "apples")
        '||||apple||||apples'
    """
    return PLURAL_KEY_SEPARATOR + PLURAL_KEY_SEPARATOR.join(keys)


def as_locale_list(locales: Optional[Iterable[Any]]) -> Optional[List[str]]:
    """Copy an iterable of locales into a list of strings, keeping None."""
    if locales is None:
        return None
    return [str(locale) for locale in locales]
