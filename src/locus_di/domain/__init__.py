"""
Domain layer - Core models and contracts.

This layer contains the fundamental rules and models for the service locator.
It has no dependencies on other layers.
"""

from .enums import Lifecycle
from .exceptions import (
    CircularDependencyError,
    CompilationError,
    DIException,
    ResolutionError,
    ServiceNotFoundError,
    UninstantiableTypeError,
    UnresolvableParameterError,
)
from .interfaces import IContainer, IResolver, ITypeIntrospector
from .markers import Inject, singleton, tagged, transient
from .models import (
    Definition,
    FactoryDefinition,
    ParameterDescriptor,
    ResolutionFrame,
    ServiceId,
    ValueDefinition,
    as_definition,
)

__all__ = [
    # Enums
    "Lifecycle",
    # Exceptions
    "DIException",
    "ServiceNotFoundError",
    "ResolutionError",
    "CircularDependencyError",
    "UninstantiableTypeError",
    "UnresolvableParameterError",
    "CompilationError",
    # Interfaces
    "IContainer",
    "IResolver",
    "ITypeIntrospector",
    # Markers
    "Inject",
    "singleton",
    "tagged",
    "transient",
    # Models
    "Definition",
    "FactoryDefinition",
    "ValueDefinition",
    "ParameterDescriptor",
    "ResolutionFrame",
    "ServiceId",
    "as_definition",
]
