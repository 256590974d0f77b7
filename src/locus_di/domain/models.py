from typing import Any, Callable, List, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from locus_di.domain.exceptions import CircularDependencyError

# A service is requested either by its string identifier or by the class itself.
ServiceId = Union[str, Type]


class FactoryDefinition(BaseModel):
    """Definition built lazily by calling a factory with the container.

    Attributes:
        factory: Callable receiving the container and returning the service.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    factory: Callable[[Any], Any] = Field(..., description="Factory receiving the container.")


class ValueDefinition(BaseModel):
    """Definition holding a pre-built value returned as-is.

    Attributes:
        value: The value to return on resolution.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = Field(..., description="Pre-built value returned on resolution.")


Definition = Union[FactoryDefinition, ValueDefinition]


def as_definition(raw: Any) -> Definition:
    """Wrap a raw registration into a Definition.

    Existing definitions are returned unchanged. Callables that are not classes
    become factories; everything else, classes included, is kept as a value.
    Wrap a callable in ``ValueDefinition`` explicitly to register it as a value.

    Args:
        raw: A Definition, a factory callable or a pre-built value.

    Returns:
        The matching Definition variant.

    Example:
        >>> as_definition(lambda c: Mailer())
        FactoryDefinition(factory=<function <lambda> ...>)
        >>> as_definition(Settings())
        ValueDefinition(value=Settings(...))
    """
    if isinstance(raw, (FactoryDefinition, ValueDefinition)):
        return raw
    if callable(raw) and not isinstance(raw, type):
        return FactoryDefinition(factory=raw)
    return ValueDefinition(value=raw)


class ParameterDescriptor(BaseModel):
    """Describes one constructor parameter as seen by the auto-wiring resolver.

    Attributes:
        name: Parameter name.
        declared_types: Declared classes in declaration order, ``None`` removed.
        type_label: Readable rendering of the annotation, used in errors.
        has_default: Whether the parameter declares a default value.
        default: The default value when ``has_default`` is set.
        allows_null: Whether the annotation admits ``None``.
        inject_target: Identifier from an ``Inject`` marker, if any.
        keyword_only: Whether the parameter must be passed by name.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The parameter name.")
    declared_types: Tuple[Type, ...] = Field(default=(), description="Declared classes, in order.")
    type_label: str = Field(default="Any", description="Readable declared type.")
    has_default: bool = Field(default=False, description="Whether a default value exists.")
    default: Any = Field(default=None, description="The default value.")
    allows_null: bool = Field(default=False, description="Whether None is accepted.")
    inject_target: Optional[str] = Field(default=None, description="Explicit injection identifier.")
    keyword_only: bool = Field(default=False, description="Whether the parameter is keyword-only.")


class ResolutionFrame(BaseModel):
    """Tracks the identifiers currently being resolved.

    Used for circular dependency detection. One frame exists per thread and
    only lives for the duration of a resolution chain.

    Attributes:
        stack: Identifiers currently being resolved, outermost first.
    """

    stack: List[str] = Field(
        default_factory=list,
        description="Stack of identifiers currently being resolved.",
    )

    def push(self, service_id: str) -> None:
        """Add an identifier to the resolution stack.

        Args:
            service_id: The identifier being resolved.

        Raises:
            CircularDependencyError: If the identifier is already in the stack.
        """
        if service_id in self.stack:
            cycle = self.stack[self.stack.index(service_id) :] + [service_id]
            raise CircularDependencyError(cycle)
        self.stack.append(service_id)

    def pop(self, service_id: str) -> None:
        """Remove the most recent occurrence of an identifier from the stack."""
        for index in range(len(self.stack) - 1, -1, -1):
            if self.stack[index] == service_id:
                del self.stack[index]
                return

    def clear(self) -> None:
        """Clear the entire resolution stack."""
        self.stack.clear()
