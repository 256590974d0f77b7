import importlib
import inspect
import logging
import types
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from locus_di.domain import (
    Inject,
    ITypeIntrospector,
    Lifecycle,
    ParameterDescriptor,
    ResolutionError,
    ServiceId,
)
from locus_di.domain import markers

logger = logging.getLogger(__name__)

# Builtin value types are never looked up in the container.
PRIMITIVE_TYPES = frozenset(
    {int, float, complex, bool, str, bytes, bytearray, list, dict, tuple, set, frozenset, object, type, type(None)}
)

_UNION_ORIGINS = (Union, types.UnionType)


def service_id(service: ServiceId) -> str:
    """Return the identifier for a class or identifier string.

    Classes map to ``"<module>.<qualname>"``; strings are returned verbatim.

    Args:
        service: A class or a non-empty identifier string.

    Returns:
        The identifier string.

    Raises:
        ValueError: If the identifier string is empty.
        TypeError: If the service is neither a string nor a class.

    Example:
        >>> service_id(collections.OrderedDict)
        'collections.OrderedDict'
        >>> service_id("mailer.smtp")
        'mailer.smtp'
    """
    if isinstance(service, str):
        if not service:
            raise ValueError("Service identifier cannot be empty")
        return service
    if isinstance(service, type):
        return f"{service.__module__}.{service.__qualname__}"
    raise TypeError(f"Service identifiers must be strings or classes, got {type(service).__name__}")


def _import_path(path: str) -> Any:
    """Import the longest importable module prefix of a dotted path and walk the rest."""
    parts = path.split(".")
    for index in range(len(parts) - 1, 0, -1):
        try:
            target = importlib.import_module(".".join(parts[:index]))
        except (ImportError, ValueError, TypeError):
            continue
        try:
            for attribute in parts[index:]:
                target = getattr(target, attribute)
        except AttributeError:
            return None
        return target
    return None


def _type_label(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return repr(annotation).replace("typing.", "")


def _strip_annotated(annotation: Any) -> Tuple[Any, Optional[Inject]]:
    """Unwrap ``Annotated[T, ...]`` and pick out an ``Inject`` marker."""
    if get_origin(annotation) is not Annotated:
        return annotation, None
    base, *metadata = get_args(annotation)
    marker = next((item for item in metadata if isinstance(item, Inject)), None)
    return base, marker


class TypeIntrospector(ITypeIntrospector):
    """Reads classes and their declarative metadata for the resolver.

    Uses Python's inspect module and type hints to describe constructor
    parameters, and remembers every class it has identified so classes defined
    in local scopes stay resolvable by identifier.

    Attributes:
        _known_types: Identifier to class, for classes seen so far.
    """

    def __init__(self) -> None:
        self._known_types: Dict[str, type] = {}

    def identify(self, service: ServiceId) -> str:
        """Normalise a class or identifier, remembering classes.

        Args:
            service: A class or identifier string.

        Returns:
            The identifier string.
        """
        identifier = service_id(service)
        if isinstance(service, type):
            self._known_types[identifier] = service
        return identifier

    def lookup(self, type_id: str) -> Optional[type]:
        """Return the class an identifier names, importing it if needed.

        Args:
            type_id: Identifier, usually ``"<module>.<qualname>"``.

        Returns:
            The class, or None if the identifier names no class.
        """
        known = self._known_types.get(type_id)
        if known is not None:
            return known
        found = _import_path(type_id)
        if isinstance(found, type):
            self._known_types[type_id] = found
            return found
        return None

    def is_constructible(self, type_id: str) -> bool:
        """Return whether the identifier names a concrete, instantiable class.

        Abstract classes, protocols, enums and builtin value types are not
        constructible.
        """
        cls = self.lookup(type_id)
        if cls is None or cls in PRIMITIVE_TYPES:
            return False
        if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
            return False
        return not issubclass(cls, Enum)

    def constructor_parameters(self, type_id: str) -> List[ParameterDescriptor]:
        """Describe the constructor parameters of a class in declared order.

        ``*args`` and ``**kwargs`` are skipped. When some annotation does not
        evaluate, the others are evaluated one parameter at a time so they are
        still used.

        Args:
            type_id: Identifier of the class.

        Returns:
            One descriptor per injectable parameter.

        Raises:
            ResolutionError: If the identifier names no class or its
                constructor cannot be inspected, or a parameter without default
                has an annotation that cannot be evaluated.

        Example:
            >>> class UserService:
            ...     def __init__(self, repo: UserRepository, retries: int = 3):
            ...         ...
            >>> [p.name for p in introspector.constructor_parameters(service_id(UserService))]
            ['repo', 'retries']
        """
        cls = self.lookup(type_id)
        if cls is None:
            raise ResolutionError(type_id, "identifier does not name a class")

        if cls.__init__ is object.__init__:
            if cls.__new__ is object.__new__:
                return []
            target = cls.__new__
        else:
            target = cls.__init__

        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError, NameError) as e:
            raise ResolutionError(type_id, f"Cannot inspect constructor: {e}") from e

        try:
            type_hints: Optional[Dict[str, Any]] = get_type_hints(target, include_extras=True)
        except (NameError, TypeError):
            # Some annotation does not evaluate; evaluate the others one by one
            type_hints = None

        descriptors = []
        # First parameter is 'self' (or 'cls' for __new__)
        for param in list(signature.parameters.values())[1:]:
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            if type_hints is not None:
                annotation = type_hints.get(param.name, param.annotation)
            else:
                annotation = self._evaluate_parameter(type_id, target, param)
            descriptors.append(self._describe(param, annotation))
        return descriptors

    def _evaluate_parameter(self, type_id: str, target: Any, param: inspect.Parameter) -> Any:
        """Evaluate a single postponed annotation in the constructor's module.

        A parameter with a default whose annotation cannot be evaluated (for
        example a name only imported under ``TYPE_CHECKING``) is described
        without declared types, so its default is used.

        Raises:
            ResolutionError: If a parameter without default has an annotation
                that cannot be evaluated.
        """
        annotation = param.annotation
        if not isinstance(annotation, str):
            return annotation

        def holder() -> None:
            pass

        holder.__annotations__ = {param.name: annotation}
        try:
            return get_type_hints(holder, globalns=getattr(target, "__globals__", None), include_extras=True)[
                param.name
            ]
        except (NameError, TypeError, SyntaxError) as e:
            if param.default is not inspect.Parameter.empty:
                logger.warning(
                    "Cannot evaluate annotation %r of parameter '%s' for %s, using its default: %s",
                    annotation,
                    param.name,
                    type_id,
                    e,
                )
                return inspect.Parameter.empty
            raise ResolutionError(
                type_id, f"Cannot evaluate annotation {annotation!r} of parameter '{param.name}': {e}"
            ) from e

    def _describe(self, param: inspect.Parameter, annotation: Any) -> ParameterDescriptor:
        annotation, marker = _strip_annotated(annotation)

        if annotation is inspect.Parameter.empty or annotation is Any:
            members: Tuple[Any, ...] = ()
        elif get_origin(annotation) in _UNION_ORIGINS:
            members = get_args(annotation)
        else:
            members = (annotation,)

        declared_types = []
        labels = []
        allows_null = False
        for member in members:
            member, member_marker = _strip_annotated(member)
            marker = marker or member_marker
            if member is None or member is type(None):
                allows_null = True
                continue
            labels.append(_type_label(member))
            origin = get_origin(member)
            cls = origin if origin is not None else member
            if isinstance(cls, type):
                declared_types.append(cls)

        if allows_null:
            labels.append("None")

        return ParameterDescriptor(
            name=param.name,
            declared_types=tuple(declared_types),
            type_label=" | ".join(labels) or "Any",
            has_default=param.default is not inspect.Parameter.empty,
            default=None if param.default is inspect.Parameter.empty else param.default,
            allows_null=allows_null,
            inject_target=self.identify(marker.service_id) if marker else None,
            keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
        )

    def declared_lifecycle(self, type_id: str) -> Optional[Lifecycle]:
        cls = self.lookup(type_id)
        return markers.declared_lifecycle(cls) if cls is not None else None

    def declared_tags(self, type_id: str) -> Tuple[str, ...]:
        cls = self.lookup(type_id)
        return markers.declared_tags(cls) if cls is not None else ()
