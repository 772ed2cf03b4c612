"""Translation repository registry.

Provides thread-safe registration and retrieval of the repository serving
each text domain.
"""

import threading
from typing import Dict, List, Optional

import structlog

from infrastructure.i18n.repositories import TranslationRepository

logger = structlog.get_logger()


class RepositoryRegistry:
    """Thread-safe registry mapping text domains to translation repositories.

    Shared by every execution context of the process. Entries are only
    removed by ``reset()``.

    Attributes:
        _repositories: Dict mapping text domain to TranslationRepository.
        _lock: Threading lock for thread-safe operations.
    """

    def __init__(self):
        self._repositories: Dict[Optional[str], TranslationRepository] = {}
        self._lock = threading.Lock()

    def register(
        self, text_domain: Optional[str], repository: TranslationRepository
    ) -> None:
        """Register the repository for a text domain, replacing any previous one.

        Args:
            text_domain: Text domain name.
            repository: Repository serving the domain.
        """
        with self._lock:
            self._repositories[text_domain] = repository
        logger.info(
            "repository_registered",
            text_domain=text_domain,
            repository=type(repository).__name__,
        )

    def register_default(
        self, text_domain: Optional[str], repository: TranslationRepository
    ) -> TranslationRepository:
        """Register a repository only if the text domain has none.

        Args:
            text_domain: Text domain name.
            repository: Repository to register when the domain is free.

        Returns:
            The repository now registered for the domain.
        """
        with self._lock:
            existing = self._repositories.get(text_domain)
            if existing is not None:
                return existing
            self._repositories[text_domain] = repository
        logger.info(
            "repository_registered",
            text_domain=text_domain,
            repository=type(repository).__name__,
        )
        return repository

    def get(self, text_domain: Optional[str]) -> Optional[TranslationRepository]:
        """Get the repository for a text domain.

        Returns:
            The registered repository, or None.
        """
        with self._lock:
            return self._repositories.get(text_domain)

    def __contains__(self, text_domain: object) -> bool:
        with self._lock:
            return text_domain in self._repositories

    def text_domains(self) -> List[Optional[str]]:
        """Get all registered text domains."""
        with self._lock:
            return list(self._repositories)

    def reset(self) -> None:
        """Remove every registered repository (for testing)."""
        with self._lock:
            self._repositories.clear()
        logger.info("repository_registry_reset")
