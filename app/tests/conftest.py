"""Shared pytest fixtures."""

import pytest

from infrastructure.logging import configure_logging
from infrastructure.services import get_settings, get_translation_store


@pytest.fixture(autouse=True, scope="session")
def silence_logging():
    """Install the logging pipeline once; it is muted under pytest."""
    configure_logging()


@pytest.fixture(autouse=True)
def clear_provider_caches():
    """Reset application-scoped singletons around every test."""
    get_settings.cache_clear()
    get_translation_store.cache_clear()
    yield
    get_settings.cache_clear()
    get_translation_store.cache_clear()
