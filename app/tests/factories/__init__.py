"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_plurals,
    make_repository,
    make_translations,
)

__all__ = [
    "make_plurals",
    "make_repository",
    "make_translations",
]
