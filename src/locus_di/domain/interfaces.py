from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar, Union

from locus_di.domain.enums import Lifecycle
from locus_di.domain.models import Definition, ParameterDescriptor, ServiceId

T = TypeVar("T")


class IContainer(ABC):
    """Abstract interface for the service locator operations."""

    @abstractmethod
    def has(self, service: ServiceId) -> bool:
        """Return whether ``get`` would find a way to produce the service.

        Args:
            service: Identifier or class of the service.
        """

    @abstractmethod
    def get(self, service: ServiceId) -> Any:
        """Resolve and return the service registered under an identifier.

        Args:
            service: Identifier or class of the service.

        Raises:
            ServiceNotFoundError: If nothing can produce the service.
            ResolutionError: If resolution fails structurally.
        """

    @abstractmethod
    def resolve(self, dependency_type: Type[T]) -> T:
        """Resolve a service by class, typed as an instance of that class.

        Args:
            dependency_type: The class to resolve.
        """

    @abstractmethod
    def set(self, service: ServiceId, definition: Any) -> None:
        """Install or replace a definition (factory or pre-built value).

        Args:
            service: Identifier or class of the service.
            definition: A Definition, a factory callable or a value.
        """

    @abstractmethod
    def bind(self, abstract: ServiceId, concrete: ServiceId) -> None:
        """Redirect resolution of an abstract identifier to a concrete one.

        Args:
            abstract: The identifier requested by consumers.
            concrete: The identifier actually resolved.
        """

    @abstractmethod
    def tag(self, service: ServiceId, tags: Union[str, Iterable[str]]) -> None:
        """Add a service to one or more tags.

        Args:
            service: Identifier or class of the service.
            tags: A tag name or several tag names.
        """

    @abstractmethod
    def transient(self, service: ServiceId) -> None:
        """Mark a service as transient from now on.

        Args:
            service: Identifier or class of the service.
        """

    @abstractmethod
    def reset(self) -> None:
        """Drop every cached instance except the container's own entries."""

    @abstractmethod
    def get_tagged(self, tag: str) -> List[Any]:
        """Resolve every service under a tag, in tagging order.

        Args:
            tag: The tag name.
        """

    @abstractmethod
    def get_definitions(self) -> Dict[str, Definition]:
        """Get a copy of the registered definitions."""


class IResolver(ABC):
    """Abstract interface for auto-wiring operations."""

    @abstractmethod
    def autowire(self, type_id: str, container: IContainer) -> Any:
        """Build an instance of a type by resolving its constructor parameters.

        Args:
            type_id: Identifier of the type to instantiate.
            container: The container to resolve parameters from.

        Returns:
            Instance with all dependencies injected.

        Raises:
            ResolutionError: If the type cannot be instantiated or a parameter
                cannot be resolved.
        """


class ITypeIntrospector(ABC):
    """Abstract interface for reading types and their declarative metadata."""

    @abstractmethod
    def identify(self, service: ServiceId) -> str:
        """Normalise a class or identifier into its identifier string."""

    @abstractmethod
    def lookup(self, type_id: str) -> Optional[type]:
        """Return the class named by an identifier, or None."""

    @abstractmethod
    def is_constructible(self, type_id: str) -> bool:
        """Return whether the identifier names a class that can be instantiated."""

    @abstractmethod
    def constructor_parameters(self, type_id: str) -> List[ParameterDescriptor]:
        """Return the constructor parameters of a class in declared order."""

    @abstractmethod
    def declared_lifecycle(self, type_id: str) -> Optional[Lifecycle]:
        """Return the lifecycle declared on a class, if any."""

    @abstractmethod
    def declared_tags(self, type_id: str) -> Tuple[str, ...]:
        """Return the tags declared on a class."""
