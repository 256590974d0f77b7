"""
Infrastructure layer - External integrations.

This layer contains compilation support and integrations with external
frameworks and tools. It depends on both Application and Domain layers.
"""

from . import compilation, testing

__all__ = [
    "compilation",
    "fastapi_integration",
    "testing",
]
