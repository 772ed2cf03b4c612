"""i18n system - per-context translation state and caching.

Resolves the active locale and text domain of each thread or task,
negotiates locales from client preference strings, and caches lookups in
front of pluggable translation repositories.

Main components:
- models: CachedTranslation lookup results and reserved cache keys
- resolvers: LanguageNegotiator for locale preference matching
- repositories: TranslationRepository interface and implementations
- registry: RepositoryRegistry mapping text domains to repositories
- cache: CacheTree and per-context CacheBinding
- context: TranslationContext, the per-context facade
- store: TranslationStore, the process-wide singleton service
- factory: create_translation_store()
"""

from infrastructure.i18n.cache import CacheBinding, CacheTree
from infrastructure.i18n.context import (
    ContextState,
    TranslationContext,
    default_pluralisation_rule,
)
from infrastructure.i18n.exceptions import (
    ConfigurationError,
    I18nError,
    NoTextDomainConfiguredError,
)
from infrastructure.i18n.factory import create_translation_store
from infrastructure.i18n.models import (
    CONFIRMED_ABSENT,
    NEVER_LOOKED,
    CacheState,
    CachedTranslation,
)
from infrastructure.i18n.registry import RepositoryRegistry
from infrastructure.i18n.repositories import (
    InMemoryTranslationRepository,
    NullTranslationRepository,
    TranslationRepository,
)
from infrastructure.i18n.resolvers import LanguageNegotiator, WeightedLocaleGroup
from infrastructure.i18n.store import ProcessDefaults, TranslationStore

__all__ = [
    "CacheBinding",
    "CacheTree",
    "CacheState",
    "CachedTranslation",
    "CONFIRMED_ABSENT",
    "NEVER_LOOKED",
    "ContextState",
    "TranslationContext",
    "default_pluralisation_rule",
    "I18nError",
    "ConfigurationError",
    "NoTextDomainConfiguredError",
    "create_translation_store",
    "RepositoryRegistry",
    "TranslationRepository",
    "NullTranslationRepository",
    "InMemoryTranslationRepository",
    "LanguageNegotiator",
    "WeightedLocaleGroup",
    "ProcessDefaults",
    "TranslationStore",
]
