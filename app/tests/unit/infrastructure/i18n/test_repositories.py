"""Tests for infrastructure.i18n.repositories module."""

import pytest

from infrastructure.i18n import (
    InMemoryTranslationRepository,
    NullTranslationRepository,
    TranslationRepository,
)
from tests.factories.i18n import make_repository


class TestTranslationRepository:
    """Tests for the TranslationRepository interface."""

    def test_cannot_instantiate_abstract(self):
        """The abstract base cannot be instantiated."""
        with pytest.raises(TypeError):
            TranslationRepository()  # pylint: disable=abstract-class-instantiated

    def test_default_pluralisation_rule_is_none(self):
        """Repositories have no plural rule unless they define one."""
        assert NullTranslationRepository().pluralisation_rule() is None


class TestNullTranslationRepository:
    """Tests for NullTranslationRepository."""

    def test_returns_nothing(self):
        repository = NullTranslationRepository()
        assert repository.lookup("Hello", "de") is None
        assert repository.lookup_plural(["Apple", "Apples"], "de") is None
        assert repository.load_all("de") == {}


class TestInMemoryTranslationRepository:
    """Tests for InMemoryTranslationRepository."""

    def test_lookup(self):
        repository = make_repository()
        assert repository.lookup("Hello", "de") == "Hallo"
        assert repository.lookup("Hello", "it") is None
        assert repository.lookup("Missing", "de") is None

    def test_lookup_plural(self):
        repository = make_repository()
        assert repository.lookup_plural(["Apple", "Apples"], "de") == "Apfel"
        assert repository.lookup_plural(("Apple", "Apples"), "de") == "Apfel"
        assert repository.lookup_plural(["Pear", "Pears"], "de") is None

    def test_load_all_returns_copy(self):
        """load_all() returns a copy of the locale's translations."""
        repository = make_repository()
        messages = dict(repository.load_all("de"))
        assert messages["Car"] == "Auto"
        messages["Car"] = "changed"
        assert repository.lookup("Car", "de") == "Auto"

    def test_set_message_and_plural(self):
        repository = InMemoryTranslationRepository()
        repository.set_message("it", "Hello", "Ciao")
        repository.set_plural("it", ["Apple", "Apples"], "Mela")
        assert repository.lookup("Hello", "it") == "Ciao"
        assert repository.lookup_plural(["Apple", "Apples"], "it") == "Mela"

    def test_pluralisation_rule(self):
        def rule(count):
            return count > 1

        assert make_repository(rule=rule).pluralisation_rule() is rule
