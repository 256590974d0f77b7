"""
locus-di: Service locator with type-hint based auto-wiring, bindings and tags.

Public API exports for the locus-di package.
"""

# Application exports
from locus_di.application.builder import ContainerBuilder
from locus_di.application.container import DIContainer
from locus_di.application.introspector import service_id

# Domain exports
from locus_di.domain.enums import Lifecycle
from locus_di.domain.exceptions import (
    CircularDependencyError,
    CompilationError,
    DIException,
    ResolutionError,
    ServiceNotFoundError,
    UninstantiableTypeError,
    UnresolvableParameterError,
)
from locus_di.domain.interfaces import IContainer
from locus_di.domain.markers import Inject, singleton, tagged, transient
from locus_di.domain.models import FactoryDefinition, ValueDefinition

__version__ = "0.1.0"

__all__ = [
    # Container
    "DIContainer",
    "ContainerBuilder",
    "IContainer",
    "service_id",
    # Definitions
    "FactoryDefinition",
    "ValueDefinition",
    # Markers
    "Inject",
    "singleton",
    "tagged",
    "transient",
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
]
