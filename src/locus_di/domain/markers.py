"""Declarative metadata read by the auto-wiring resolver.

Lifecycle and tags are stored as plain class attributes; ``Inject`` is placed
in ``typing.Annotated`` parameter metadata. None of these carry behaviour.
"""

from typing import Any, Callable, Optional, Tuple, Type, TypeVar, Union

from locus_di.domain.enums import Lifecycle

T = TypeVar("T", bound=type)

LIFECYCLE_ATTRIBUTE = "__di_lifecycle__"
TAGS_ATTRIBUTE = "__di_tags__"


class Inject:
    """Override type-based inference for one constructor parameter.

    Attributes:
        service_id: Identifier (or class) to resolve for the parameter.

    Example:
        >>> class Mailer:
        ...     def __init__(self, logger: Annotated[Logger, Inject("audit.logger")]):
        ...         self.logger = logger
    """

    __slots__ = ("service_id",)

    def __init__(self, service_id: Union[str, Type]) -> None:
        if not service_id:
            raise ValueError("Inject requires a service identifier")
        self.service_id = service_id

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Inject) and other.service_id == self.service_id

    def __hash__(self) -> int:
        return hash(("Inject", self.service_id))

    def __repr__(self) -> str:
        return f"Inject({self.service_id!r})"


def transient(cls: T) -> T:
    """Mark a class so that every auto-wired resolution builds a new instance."""
    setattr(cls, LIFECYCLE_ATTRIBUTE, Lifecycle.TRANSIENT)
    return cls


def singleton(cls: T) -> T:
    """Mark a class as singleton. This is the default and only documents intent."""
    setattr(cls, LIFECYCLE_ATTRIBUTE, Lifecycle.SINGLETON)
    return cls


def tagged(*tags: str) -> Callable[[T], T]:
    """Attach tags to a class; they are indexed the first time it is auto-wired.

    Decorators may be stacked; tags keep top-to-bottom declaration order.

    Args:
        *tags: One or more tag names.

    Raises:
        ValueError: If no tag or an empty tag is given.

    Example:
        >>> @tagged("event.listener")
        ... class AuditListener:
        ...     pass
    """
    if not tags or not all(isinstance(tag, str) and tag for tag in tags):
        raise ValueError("tagged requires one or more non-empty tag names")

    def decorator(cls: T) -> T:
        existing: Tuple[str, ...] = vars(cls).get(TAGS_ATTRIBUTE, ())
        added = tuple(dict.fromkeys(tag for tag in tags if tag not in existing))
        setattr(cls, TAGS_ATTRIBUTE, added + existing)
        return cls

    return decorator


def declared_lifecycle(cls: type) -> Optional[Lifecycle]:
    """Return the lifecycle declared directly on a class, if any."""
    return vars(cls).get(LIFECYCLE_ATTRIBUTE)


def declared_tags(cls: type) -> Tuple[str, ...]:
    """Return the tags declared directly on a class."""
    return tuple(vars(cls).get(TAGS_ATTRIBUTE, ()))
