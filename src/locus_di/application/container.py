import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Type, TypeVar, Union

from locus_di.application.circular_detector import CircularDependencyDetector
from locus_di.application.definition_store import DefinitionStore
from locus_di.application.instance_cache import InstanceCache
from locus_di.application.introspector import TypeIntrospector
from locus_di.application.resolver import DependencyResolver
from locus_di.application.tag_index import TagIndex
from locus_di.domain import (
    Definition,
    DIException,
    IContainer,
    IResolver,
    ITypeIntrospector,
    Lifecycle,
    ResolutionError,
    ServiceId,
    ServiceNotFoundError,
    UninstantiableTypeError,
    ValueDefinition,
    as_definition,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DIContainer(IContainer):
    """Main dependency injection container.

    Resolves services from cached instances, interface bindings, explicit
    definitions and finally by auto-wiring concrete classes. Singletons are
    cached; transients are built on every resolution. The container can always
    resolve itself, as ``IContainer``, ``DIContainer`` or its own class.

    Attributes:
        _store: Definitions, bindings and transient flags.
        _instance_cache: Resolved singleton values.
        _tag_index: Tag name to tagged identifiers.
        _introspector: Identifier normalisation and class inspection.
        _circular_detector: Identifiers currently being resolved.
        _resolver: Component responsible for auto-wiring.
    """

    def __init__(
        self,
        definitions: Optional[Mapping[ServiceId, Any]] = None,
        introspector: Optional[ITypeIntrospector] = None,
    ) -> None:
        """Initialize the container.

        Args:
            definitions: Initial identifier (or class) to factory/value mapping.
            introspector: Type introspector to use, a ``TypeIntrospector`` by default.
        """
        self._introspector: ITypeIntrospector = introspector or TypeIntrospector()
        self._store = DefinitionStore()
        self._instance_cache = InstanceCache()
        self._tag_index = TagIndex()
        self._circular_detector = CircularDependencyDetector()
        self._resolver: IResolver = DependencyResolver(self._introspector, self._circular_detector)

        for service, definition in (definitions or {}).items():
            self._store.set_definition(self._introspector.identify(service), as_definition(definition))

        for container_type in (IContainer, DIContainer, type(self)):
            self._instance_cache.register_self(self._introspector.identify(container_type), self)

    @property
    def introspector(self) -> ITypeIntrospector:
        """The type introspector, shared with containers derived from this one."""
        return self._introspector

    def has(self, service: ServiceId) -> bool:
        """Return whether ``get`` can find a way to produce the service.

        True for cached values, definitions, bindings whose target is
        resolvable, and constructible classes.

        Args:
            service: Identifier or class of the service.

        Example:
            >>> container.has("mailer.smtp")
            False
            >>> container.set("mailer.smtp", lambda c: SmtpMailer())
            >>> container.has("mailer.smtp")
            True
        """
        return self._can_resolve(self._introspector.identify(service), set())

    def _can_resolve(self, service_id: str, seen: Set[str]) -> bool:
        if self._instance_cache.contains(service_id):
            return True
        concrete = self._store.binding(service_id)
        if concrete is not None:
            seen.add(service_id)
            # A binding loop is reported as circular by get, not as missing
            return concrete in seen or self._can_resolve(concrete, seen)
        if self._store.has_definition(service_id):
            return True
        return self._introspector.is_constructible(service_id)

    def get(self, service: ServiceId) -> Any:
        """Resolve and return a service.

        Precedence: cached instance, binding, definition, auto-wiring.

        Args:
            service: Identifier or class of the service.

        Returns:
            The resolved service.

        Raises:
            ServiceNotFoundError: If nothing can produce the service.
            ResolutionError: If a factory or constructor fails, a parameter
                cannot be resolved, or the class cannot be instantiated.
            CircularDependencyError: If a circular dependency is detected.

        Example:
            >>> user_service = container.get(UserService)
            >>> mailer = container.get("mailer.smtp")
        """
        service_id = self._introspector.identify(service)

        if self._instance_cache.contains(service_id):
            return self._instance_cache.get(service_id)

        concrete = self._store.binding(service_id)
        if concrete is not None:
            logger.debug("Resolving %s through binding to %s", service_id, concrete)
            with self._circular_detector.guard(service_id):
                value = self.get(concrete)
            if not self._instance_cache.contains(concrete):
                # Transient concrete, rebuilt on every resolution of the abstract id too
                return value
            return self._remember(service_id, value)

        definition = self._store.definition(service_id)
        if definition is not None:
            return self._remember(service_id, self._resolve_definition(service_id, definition))

        if self._introspector.is_constructible(service_id):
            value = self._resolver.autowire(service_id, self)
            return self._remember(service_id, value, self._introspector.declared_lifecycle(service_id))

        if self._introspector.lookup(service_id) is not None:
            raise UninstantiableTypeError(service_id)
        raise ServiceNotFoundError(service_id)

    def _resolve_definition(self, service_id: str, definition: Definition) -> Any:
        if isinstance(definition, ValueDefinition):
            return definition.value

        with self._circular_detector.guard(service_id):
            logger.debug("Calling factory for %s", service_id)
            try:
                return definition.factory(self)
            except DIException:
                raise
            except Exception as e:
                raise ResolutionError(service_id, f"Factory failed: {e}") from e

    def _remember(self, service_id: str, value: Any, declared: Optional[Lifecycle] = None) -> Any:
        """Cache a resolved value unless the identifier is transient."""
        if self._store.is_transient(service_id) or declared == Lifecycle.TRANSIENT:
            return value
        return self._instance_cache.store(service_id, value)

    def resolve(self, dependency_type: Type[T]) -> T:
        """Resolve a service by class.

        Args:
            dependency_type: The class to resolve.

        Returns:
            Instance of the requested class with all dependencies injected.
        """
        return self.get(dependency_type)

    def set(self, service: ServiceId, definition: Any) -> None:
        """Install or replace a definition and drop any cached instance.

        A definition takes over from an earlier binding of the same identifier.

        Args:
            service: Identifier or class of the service.
            definition: A factory receiving the container, a pre-built value,
                or an explicit ``FactoryDefinition``/``ValueDefinition``.

        Example:
            >>> container.set(Settings, Settings.from_env())
            >>> container.set("db", lambda c: Database(c.get(Settings).dsn))
        """
        service_id = self._introspector.identify(service)
        self._store.set_definition(service_id, as_definition(definition))
        self._store.unbind(service_id)
        self._instance_cache.invalidate(service_id)

    def bind(self, abstract: ServiceId, concrete: ServiceId) -> None:
        """Redirect an abstract identifier to a concrete one.

        Args:
            abstract: Identifier or class requested by consumers.
            concrete: Identifier or class actually resolved.

        Example:
            >>> container.bind(UserRepository, SqlUserRepository)
            >>> isinstance(container.get(UserRepository), SqlUserRepository)
            True
        """
        abstract_id = self._introspector.identify(abstract)
        self._store.bind(abstract_id, self._introspector.identify(concrete))
        self._instance_cache.invalidate(abstract_id)

    def tag(self, service: ServiceId, tags: Union[str, Iterable[str]]) -> None:
        """Add a service to one or more tags.

        Tagging is idempotent and keeps the order services were first tagged
        in. Tagged services are resolved lazily by ``get_tagged``.

        Args:
            service: Identifier or class of the service.
            tags: A tag name or several tag names.

        Example:
            >>> container.tag(AuditListener, ["event.listener", "loggable"])
            >>> container.get_tagged("event.listener")
            [<AuditListener object at ...>]
        """
        self._tag_index.tag(self._introspector.identify(service), tags)

    def transient(self, service: ServiceId) -> None:
        """Mark a service transient and drop any cached instance."""
        service_id = self._introspector.identify(service)
        self._store.mark_transient(service_id)
        self._instance_cache.invalidate(service_id)

    def reset(self) -> None:
        """Drop cached instances, keeping the container's own entries.

        Definitions, bindings, tags and transient flags are kept. Useful for
        testing.
        """
        self._instance_cache.reset()

    def get_tagged(self, tag: str) -> List[Any]:
        """Resolve every service under a tag, in tagging order.

        Example:
            >>> for listener in container.get_tagged("event.listener"):
            ...     dispatcher.subscribe(listener)
        """
        return [self.get(service_id) for service_id in self._tag_index.members(tag)]

    def get_definitions(self) -> Dict[str, Definition]:
        """Get a copy of the registered definitions."""
        return self._store.definitions()

    def get_bindings(self) -> Dict[str, str]:
        """Get a copy of the registered bindings."""
        return self._store.bindings()

    def get_tags(self) -> Dict[str, List[str]]:
        """Get a copy of the tag index."""
        return self._tag_index.tags()

    def get_transients(self) -> Set[str]:
        """Get the identifiers marked transient."""
        return self._store.transients()
