"""
Compilation module.

Dumps container definitions to a Python module of factories and loads them
back, avoiding constructor inspection at startup.
"""

from .compiled_container import CompiledContainer, load_compiled_definitions
from .dumper import ContainerDumper

__all__ = [
    "CompiledContainer",
    "ContainerDumper",
    "load_compiled_definitions",
]
