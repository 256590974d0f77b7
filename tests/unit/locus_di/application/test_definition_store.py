"""Unit tests for DefinitionStore."""

from locus_di.application.definition_store import DefinitionStore
from locus_di.domain import FactoryDefinition, ValueDefinition


class TestDefinitionStore:
    """Test cases for DefinitionStore."""

    def test_empty_store(self):
        """Test that a new store has nothing registered."""
        store = DefinitionStore()

        assert store.definition("svc") is None
        assert store.binding("svc") is None
        assert not store.is_transient("svc")
        assert store.definitions() == {}

    def test_seeded_definitions(self):
        """Test seeding the store at construction."""
        definition = ValueDefinition(value=1)
        store = DefinitionStore({"one": definition})

        assert store.has_definition("one")
        assert store.definition("one") is definition

    def test_set_definition_replaces(self):
        """Test that set_definition replaces an existing definition."""
        store = DefinitionStore()
        store.set_definition("svc", ValueDefinition(value=1))
        replacement = FactoryDefinition(factory=lambda c: 2)

        store.set_definition("svc", replacement)

        assert store.definition("svc") is replacement

    def test_bind_and_unbind(self):
        """Test installing and removing a binding."""
        store = DefinitionStore()
        store.bind("app.Repository", "app.SqlRepository")

        assert store.binding("app.Repository") == "app.SqlRepository"

        store.unbind("app.Repository")
        assert store.binding("app.Repository") is None

    def test_unbind_unknown_is_noop(self):
        """Test that unbinding a missing identifier does nothing."""
        store = DefinitionStore()
        store.unbind("missing")

        assert store.bindings() == {}

    def test_mark_transient(self):
        """Test transient flags."""
        store = DefinitionStore()
        store.mark_transient("ctx")

        assert store.is_transient("ctx")
        assert store.transients() == {"ctx"}

    def test_copies_are_independent(self):
        """Test that accessors return copies."""
        store = DefinitionStore({"one": ValueDefinition(value=1)})
        store.bind("a", "b")

        store.definitions().clear()
        store.bindings().clear()
        store.transients().add("x")

        assert store.has_definition("one")
        assert store.binding("a") == "b"
        assert not store.is_transient("x")
