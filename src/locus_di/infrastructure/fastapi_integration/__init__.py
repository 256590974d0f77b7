"""
FastAPI integration module.

Provides helpers and utilities for integrating locus-di with FastAPI.
"""

from .integration import (
    ContainerMiddleware,
    create_fastapi_dependency,
    create_request_dependency,
    create_tagged_dependency,
    inject_dependencies,
)

__all__ = [
    "create_fastapi_dependency",
    "create_request_dependency",
    "create_tagged_dependency",
    "inject_dependencies",
    "ContainerMiddleware",
]
