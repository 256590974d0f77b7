from typing import Dict, Optional, Set

from locus_di.domain import Definition


class DefinitionStore:
    """Holds the registration data the resolution engine reads.

    Pure data: definitions, interface bindings and transient flags, keyed by
    identifier. Mutated only by the container's registration operations.

    Attributes:
        _definitions: Identifier to factory or pre-built value.
        _bindings: Abstract identifier to concrete identifier.
        _transients: Identifiers marked transient.
    """

    def __init__(self, definitions: Optional[Dict[str, Definition]] = None) -> None:
        """Initialize the store, optionally seeded with definitions.

        Args:
            definitions: Initial identifier to definition mapping.
        """
        self._definitions: Dict[str, Definition] = dict(definitions or {})
        self._bindings: Dict[str, str] = {}
        self._transients: Set[str] = set()

    def set_definition(self, service_id: str, definition: Definition) -> None:
        """Install or replace the definition for an identifier."""
        self._definitions[service_id] = definition

    def definition(self, service_id: str) -> Optional[Definition]:
        """Return the definition for an identifier, or None."""
        return self._definitions.get(service_id)

    def has_definition(self, service_id: str) -> bool:
        return service_id in self._definitions

    def bind(self, abstract: str, concrete: str) -> None:
        """Install or replace the binding for an abstract identifier."""
        self._bindings[abstract] = concrete

    def unbind(self, abstract: str) -> None:
        self._bindings.pop(abstract, None)

    def binding(self, abstract: str) -> Optional[str]:
        """Return the concrete identifier bound to an abstract one, or None."""
        return self._bindings.get(abstract)

    def mark_transient(self, service_id: str) -> None:
        self._transients.add(service_id)

    def is_transient(self, service_id: str) -> bool:
        return service_id in self._transients

    def definitions(self) -> Dict[str, Definition]:
        """Return a copy of the definitions."""
        return dict(self._definitions)

    def bindings(self) -> Dict[str, str]:
        """Return a copy of the bindings."""
        return dict(self._bindings)

    def transients(self) -> Set[str]:
        """Return a copy of the transient identifiers."""
        return set(self._transients)
