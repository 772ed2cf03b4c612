"""Feature-level fixtures for i18n system tests.

Provides repository test doubles and translation stores for locale
negotiation and cache scenarios.
"""

from typing import Dict, List, Mapping, Optional, Sequence

import pytest

from infrastructure.i18n import InMemoryTranslationRepository, TranslationStore
from tests.factories.i18n import make_translations, make_plurals


class CountingRepository(InMemoryTranslationRepository):
    """In-memory repository that records every call it receives."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookup_calls: List[tuple] = []
        self.plural_calls: List[tuple] = []
        self.load_all_calls: List[str] = []

    def lookup(self, key: str, locale: str) -> Optional[str]:
        self.lookup_calls.append((key, locale))
        return super().lookup(key, locale)

    def lookup_plural(self, keys: Sequence[str], locale: str) -> Optional[str]:
        self.plural_calls.append((tuple(keys), locale))
        return super().lookup_plural(keys, locale)

    def load_all(self, locale: str) -> Mapping[str, str]:
        self.load_all_calls.append(locale)
        return super().load_all(locale)

    def lookup_count(self, key: str) -> int:
        return sum(1 for called_key, _ in self.lookup_calls if called_key == key)


@pytest.fixture
def translations() -> Dict[str, Dict[str, str]]:
    """Sample single-key translations by locale."""
    return make_translations()


@pytest.fixture
def repository(translations):
    """Counting repository with sample translations and plurals."""
    return CountingRepository(translations=translations, plurals=make_plurals())


@pytest.fixture
def store():
    """Fresh translation store without defaults."""
    return TranslationStore()


@pytest.fixture
def context(store, repository):
    """Context of the current test with the "app" domain registered and active."""
    context = store.current_context()
    context.add_text_domain("app", repository)
    context.available_locales = ["en", "de", "de_DE", "fr_CA"]
    context.text_domain = "app"
    context.locale = "de"
    return context


@pytest.fixture
def accept_language_headers():
    """Collection of locale preference strings for testing."""
    return {
        "opera": "de-DE,de;q=0.9,en;q=0.8",
        "firefox": "de-de,de;q=0.8,en-us;q=0.5,en;q=0.3",
        "ie": "de",
        "with_spaces": " de-de , de ; q=0.9 ,en;q=0.8",
        "unweighted_tail": "en;q=0.5,de-CH",
        "invalid_quality": "en;q=invalid,fr",
    }
