"""Unit tests for InstanceCache."""

import pytest

from locus_di.application.instance_cache import InstanceCache


class TestInstanceCache:
    """Test cases for InstanceCache."""

    def test_store_and_get(self):
        """Test caching a value."""
        cache = InstanceCache()
        value = object()

        assert cache.store("svc", value) is value
        assert cache.contains("svc")
        assert cache.get("svc") is value

    def test_none_is_cacheable(self):
        """Test that None counts as a cached value."""
        cache = InstanceCache()
        cache.store("flag", None)

        assert cache.contains("flag")
        assert cache.get("flag") is None

    def test_get_missing_raises(self):
        """Test that reading a missing entry raises KeyError."""
        with pytest.raises(KeyError):
            InstanceCache().get("missing")

    def test_invalidate(self):
        """Test dropping one entry."""
        cache = InstanceCache()
        cache.store("a", 1)
        cache.store("b", 2)

        cache.invalidate("a")
        cache.invalidate("never-stored")

        assert not cache.contains("a")
        assert cache.contains("b")

    def test_reset_keeps_self_entries(self):
        """Test that reset preserves self-reference entries only."""
        cache = InstanceCache()
        container = object()
        cache.register_self("locus_di.domain.interfaces.IContainer", container)
        cache.store("svc", object())

        cache.reset()

        assert len(cache) == 1
        assert cache.get("locus_di.domain.interfaces.IContainer") is container
        assert not cache.contains("svc")

    def test_reset_does_not_restore_invalidated_self_entry(self):
        """Test that reset keeps only self entries still present."""
        cache = InstanceCache()
        cache.register_self("self", object())
        cache.invalidate("self")

        cache.reset()

        assert not cache.contains("self")
