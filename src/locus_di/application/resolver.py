import logging
from typing import Any, Dict, List

from locus_di.application.circular_detector import CircularDependencyDetector
from locus_di.application.introspector import PRIMITIVE_TYPES
from locus_di.domain import (
    DIException,
    IContainer,
    IResolver,
    ITypeIntrospector,
    ParameterDescriptor,
    ResolutionError,
    UnresolvableParameterError,
)

logger = logging.getLogger(__name__)


class DependencyResolver(IResolver):
    """Builds instances by resolving constructor parameters from the container.

    Constructor signatures come from the type introspector. Each auto-wired
    type is guarded in the same resolution frame the container uses for
    factories, so cycles are caught whichever path reaches them.

    Attributes:
        _introspector: Reads classes, parameters and declarative metadata.
        _circular_detector: The container's resolution frame.
    """

    def __init__(self, introspector: ITypeIntrospector, circular_detector: CircularDependencyDetector) -> None:
        self._introspector = introspector
        self._circular_detector = circular_detector

    def autowire(self, type_id: str, container: IContainer) -> Any:
        """Instantiate a type, resolving its constructor parameters in order.

        Declared tags are indexed before construction starts.

        Args:
            type_id: Identifier of the type to instantiate.
            container: The container to resolve parameters from.

        Returns:
            Instance with all dependencies injected.

        Raises:
            ResolutionError: If the type is not constructible, a parameter
                cannot be resolved or the constructor raises.
            CircularDependencyError: If the type is already being resolved.

        Example:
            >>> class UserService:
            ...     def __init__(self, db: DatabaseConnection, logger: Logger):
            ...         self.db = db
            ...         self.logger = logger
            >>>
            >>> instance = resolver.autowire(service_id(UserService), container)
        """
        if not self._introspector.is_constructible(type_id):
            raise ResolutionError(type_id, "type cannot be instantiated")

        cls = self._introspector.lookup(type_id)

        tags = self._introspector.declared_tags(type_id)
        if tags:
            container.tag(type_id, tags)

        with self._circular_detector.guard(type_id):
            args: List[Any] = []
            kwargs: Dict[str, Any] = {}
            for parameter in self._introspector.constructor_parameters(type_id):
                value = self.resolve_parameter(type_id, parameter, container)
                if parameter.keyword_only:
                    kwargs[parameter.name] = value
                else:
                    args.append(value)

            logger.debug("Auto-wiring %s with %d argument(s)", type_id, len(args) + len(kwargs))
            try:
                return cls(*args, **kwargs)
            except DIException:
                raise
            except Exception as e:
                raise ResolutionError(type_id, f"Failed to create instance: {e}") from e

    def resolve_parameter(self, owner: str, parameter: ParameterDescriptor, container: IContainer) -> Any:
        """Produce the value for one constructor parameter.

        Rules, first match wins: explicit ``Inject`` target, the container
        itself, the first declared class the container has (declared order
        matters for unions), the default value, ``None`` for optional types.

        Args:
            owner: Identifier of the type being constructed.
            parameter: Descriptor of the parameter.
            container: The container to resolve from.

        Returns:
            The value to pass for the parameter.

        Raises:
            UnresolvableParameterError: If no rule applies.
        """
        if parameter.inject_target is not None:
            return container.get(parameter.inject_target)

        for candidate in parameter.declared_types:
            if candidate in PRIMITIVE_TYPES:
                continue
            if issubclass(candidate, IContainer) and isinstance(container, candidate):
                return container
            if container.has(candidate):
                return container.get(candidate)

        if parameter.has_default:
            return parameter.default

        if parameter.allows_null:
            return None

        raise UnresolvableParameterError(owner, parameter.name, parameter.type_label)
