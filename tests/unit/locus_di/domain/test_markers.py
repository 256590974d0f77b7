"""Unit tests for declarative markers."""

import pytest

from locus_di.domain.enums import Lifecycle
from locus_di.domain.markers import (
    Inject,
    declared_lifecycle,
    declared_tags,
    singleton,
    tagged,
    transient,
)


class TestInject:
    """Test cases for the Inject marker."""

    def test_keeps_service_id(self):
        """Test that the target identifier is stored."""
        assert Inject("audit.logger").service_id == "audit.logger"

    def test_equality(self):
        """Test that markers compare by target."""
        assert Inject("a") == Inject("a")
        assert Inject("a") != Inject("b")
        assert hash(Inject("a")) == hash(Inject("a"))

    def test_empty_target_rejected(self):
        """Test that an empty identifier is rejected."""
        with pytest.raises(ValueError):
            Inject("")

    def test_repr(self):
        """Test the readable representation."""
        assert repr(Inject("x")) == "Inject('x')"


class TestLifecycleDecorators:
    """Test cases for transient and singleton."""

    def test_transient_marks_class(self):
        """Test that @transient records the lifecycle."""

        @transient
        class Context:
            pass

        assert declared_lifecycle(Context) == Lifecycle.TRANSIENT

    def test_singleton_marks_class(self):
        """Test that @singleton records the lifecycle."""

        @singleton
        class Config:
            pass

        assert declared_lifecycle(Config) == Lifecycle.SINGLETON

    def test_undecorated_class_has_no_lifecycle(self):
        """Test that nothing is declared by default."""

        class Plain:
            pass

        assert declared_lifecycle(Plain) is None

    def test_lifecycle_is_not_inherited(self):
        """Test that subclasses do not inherit the declaration."""

        @transient
        class Base:
            pass

        class Child(Base):
            pass

        assert declared_lifecycle(Child) is None


class TestTagged:
    """Test cases for the tagged decorator."""

    def test_single_tag(self):
        """Test tagging with one tag."""

        @tagged("handler")
        class Handler:
            pass

        assert declared_tags(Handler) == ("handler",)

    def test_stacked_tags_keep_declaration_order(self):
        """Test that stacked decorators read top to bottom."""

        @tagged("handler")
        @tagged("loggable")
        class Handler:
            pass

        assert declared_tags(Handler) == ("handler", "loggable")

    def test_duplicate_tags_are_ignored(self):
        """Test that the same tag is recorded once."""

        @tagged("handler", "handler")
        @tagged("handler")
        class Handler:
            pass

        assert declared_tags(Handler) == ("handler",)

    def test_requires_tags(self):
        """Test that at least one non-empty tag is required."""
        with pytest.raises(ValueError):
            tagged()
        with pytest.raises(ValueError):
            tagged("")

    def test_untagged_class(self):
        """Test that an untagged class declares nothing."""

        class Plain:
            pass

        assert declared_tags(Plain) == ()
