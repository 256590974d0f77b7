from typing import Any, Dict, Set


class InstanceCache:
    """Caches resolved singleton values by identifier.

    Self-reference entries (the container resolving itself) are registered
    separately and survive ``reset``. ``None`` is a valid cached value, so
    membership is always checked with ``contains`` rather than truthiness.

    Attributes:
        _entries: Identifier to resolved value.
        _self_ids: Identifiers whose entries are preserved on reset.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: Dict[str, Any] = {}
        self._self_ids: Set[str] = set()

    def register_self(self, service_id: str, container: Any) -> None:
        """Store a self-reference entry that reset keeps.

        Args:
            service_id: Identifier the container answers to.
            container: The container itself.
        """
        self._self_ids.add(service_id)
        self._entries[service_id] = container

    def contains(self, service_id: str) -> bool:
        return service_id in self._entries

    def get(self, service_id: str) -> Any:
        """Return the cached value for an identifier.

        Raises:
            KeyError: If nothing is cached under the identifier.
        """
        return self._entries[service_id]

    def store(self, service_id: str, value: Any) -> Any:
        """Cache a value and return it."""
        self._entries[service_id] = value
        return value

    def invalidate(self, service_id: str) -> None:
        """Drop the cached value for one identifier, if any."""
        self._entries.pop(service_id, None)

    def reset(self) -> None:
        """Drop every entry except the self-reference entries still present.

        Useful for testing or resetting container state.
        """
        self._entries = {key: value for key, value in self._entries.items() if key in self._self_ids}

    def __len__(self) -> int:
        return len(self._entries)
