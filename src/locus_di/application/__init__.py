"""
Application layer - Resolution engine and its collaborators.

This layer contains the container, the auto-wiring resolver and the stores
they read and write. It depends only on the Domain layer.
"""

from .builder import ContainerBuilder
from .circular_detector import CircularDependencyDetector
from .container import DIContainer
from .definition_store import DefinitionStore
from .instance_cache import InstanceCache
from .introspector import TypeIntrospector, service_id
from .resolver import DependencyResolver
from .settings import CompilationSettings
from .tag_index import TagIndex

__all__ = [
    "DIContainer",
    "ContainerBuilder",
    "DependencyResolver",
    "TypeIntrospector",
    "DefinitionStore",
    "InstanceCache",
    "TagIndex",
    "CircularDependencyDetector",
    "CompilationSettings",
    "service_id",
]
