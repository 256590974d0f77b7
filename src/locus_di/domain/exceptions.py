from typing import List, Optional


class DIException(Exception):
    """Base exception for DI-related errors."""


class ServiceNotFoundError(DIException):
    """Raised when no definition, binding or constructible type matches an identifier.

    Attributes:
        service_id: The identifier that was requested.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f"Service '{service_id}' not found")


class ResolutionError(DIException):
    """Raised when resolving a service fails structurally.

    This occurs when:
    - A type cannot be instantiated (abstract class, protocol, primitive).
    - A factory or constructor raises while building the service.
    - A constructor parameter cannot be resolved.

    Attributes:
        service_id: The identifier being resolved when the failure happened.
        reason: Optional reason for the failure.
    """

    def __init__(self, service_id: str, reason: Optional[str] = None) -> None:
        self.service_id = service_id
        self.reason = reason
        message = f"Cannot resolve service '{service_id}'"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class CircularDependencyError(ResolutionError):
    """Raised when an identifier is requested while it is already being resolved.

    Attributes:
        dependency_chain: Identifiers forming the cycle, first and last are equal.
    """

    def __init__(self, dependency_chain: List[str]) -> None:
        self.dependency_chain = dependency_chain
        DIException.__init__(self, f"Circular dependency detected: {' -> '.join(dependency_chain)}")
        self.service_id = dependency_chain[-1]
        self.reason = "circular dependency"


class UnresolvableParameterError(ResolutionError):
    """Raised when no rule produces a value for a constructor parameter.

    Attributes:
        owner: Identifier of the type whose constructor is being wired.
        parameter: Name of the parameter.
        type_label: Human readable declared type of the parameter.
    """

    def __init__(self, owner: str, parameter: str, type_label: str) -> None:
        self.owner = owner
        self.parameter = parameter
        self.type_label = type_label
        DIException.__init__(
            self,
            f"Cannot resolve constructor parameter '{parameter}' ({type_label}) for {owner}",
        )
        self.service_id = owner
        self.reason = f"unresolvable parameter '{parameter}'"


class UninstantiableTypeError(ServiceNotFoundError, ResolutionError):
    """Raised when an identifier names a class that cannot be instantiated.

    The container cannot produce the service (so ``has`` is false), and the
    cause is structural (abstract class, protocol, enum or builtin type), so
    this error is both a ``ServiceNotFoundError`` and a ``ResolutionError``.

    Attributes:
        service_id: The identifier of the class.
        reason: Why the class cannot be instantiated.
    """

    def __init__(self, service_id: str, reason: str = "type cannot be instantiated") -> None:
        self.service_id = service_id
        self.reason = reason
        DIException.__init__(self, f"Service '{service_id}' not found. Reason: {reason}")


class CompilationError(DIException):
    """Raised when compiled definitions cannot be written or loaded.

    This occurs when:
    - The target directory cannot be created.
    - The compiled file cannot be written or moved into place.
    - The compiled file exists but cannot be read, compiled or executed.
    """
