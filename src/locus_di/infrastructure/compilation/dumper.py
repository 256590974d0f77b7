import ast
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Union

from locus_di.application import DIContainer, TypeIntrospector, service_id
from locus_di.application.introspector import PRIMITIVE_TYPES
from locus_di.domain import (
    CompilationError,
    Definition,
    IContainer,
    ITypeIntrospector,
    ParameterDescriptor,
    ResolutionError,
    ValueDefinition,
)

logger = logging.getLogger(__name__)

_MODULE_HEADER = '''"""
Compiled container definitions.

Auto-generated by locus-di, do not edit.
Generated: {generated}
"""

import importlib


def _load(module, qualname):
    target = importlib.import_module(module)
    for attribute in qualname.split("."):
        target = getattr(target, attribute)
    return target


FACTORIES = {{
'''


def _literal(value: Any) -> Optional[str]:
    """Return source text for a value if it round-trips as a Python literal."""
    text = repr(value)
    try:
        parsed = ast.literal_eval(text)
    except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError):
        return None
    if type(parsed) is not type(value) or parsed != value:
        return None
    return text


def _importable(cls: type) -> bool:
    return "<locals>" not in cls.__qualname__


class ContainerDumper:
    """Writes a container's definitions as a Python module of factories.

    The generated module defines ``FACTORIES``, a dict mapping identifiers to
    ``lambda c: ...`` factories that instantiate classes directly, so a
    ``CompiledContainer`` skips constructor inspection at runtime.

    Only definitions whose identifier names an importable, constructible class
    are compiled, and they are compiled as direct instantiation of that class:
    custom factory logic is traded for startup speed. Pre-built values,
    aliases and classes with parameters that cannot be expressed statically
    are skipped and keep resolving through the runtime container.

    Example:
        >>> dumper = ContainerDumper()
        >>> dumper.dump(container, "/var/cache/app/compiled_container.py")
    """

    def __init__(self, introspector: Optional[ITypeIntrospector] = None) -> None:
        self._introspector = introspector or TypeIntrospector()

    def dump(self, container: DIContainer, output_path: Union[str, Path]) -> Path:
        """Write the compiled definitions module.

        The file is written to a temporary sibling and moved into place, so
        readers never see a partial module.

        Args:
            container: The container whose definitions are compiled.
            output_path: Target file path; parent directories are created.

        Returns:
            The path written.

        Raises:
            CompilationError: If the directory or file cannot be written.
        """
        path = Path(output_path)
        entries = []
        for identifier, definition in container.get_definitions().items():
            entry = self.export_definition(identifier, definition)
            if entry is not None:
                entries.append(entry)

        lines = [_MODULE_HEADER.format(generated=datetime.now().strftime("%Y-%m-%d %H:%M:%S"))]
        lines.extend(f"    {entry},\n" for entry in entries)
        lines.append("}\n")
        source = "".join(lines)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CompilationError(f"Cannot create directory: {path.parent}") from e

        handle, temporary = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(handle, "w", encoding="utf-8") as stream:
                stream.write(source)
            os.replace(temporary, path)
        except OSError as e:
            if os.path.exists(temporary):
                os.unlink(temporary)
            raise CompilationError(f"Cannot write compiled container to: {path}") from e

        logger.info("Compiled %d of %d definition(s) to %s", len(entries), len(container.get_definitions()), path)
        return path

    def export_definition(self, identifier: str, definition: Definition) -> Optional[str]:
        """Return the ``'id': factory`` source entry for a definition, or None to skip it."""
        if isinstance(definition, ValueDefinition):
            return None
        factory = self.generate_class_factory(identifier)
        if factory is None:
            logger.debug("Skipping %s: not compilable", identifier)
            return None
        return f"{identifier!r}: {factory}"

    def generate_class_factory(self, identifier: str) -> Optional[str]:
        """Generate a ``lambda c: ...`` that instantiates the class named by an identifier.

        Produces code like ``lambda c: _load('app.mail', 'Mailer')(c.get('app.smtp.Transport'), 25)``.

        Returns:
            The factory source, or None if the identifier cannot be compiled.
        """
        if not self._introspector.is_constructible(identifier):
            return None
        cls = self._introspector.lookup(identifier)
        if cls is None or not _importable(cls) or service_id(cls) != identifier:
            return None

        try:
            parameters = self._introspector.constructor_parameters(identifier)
        except ResolutionError:
            return None

        arguments: List[str] = []
        for parameter in parameters:
            expression = self._parameter_expression(parameter)
            if expression is None:
                return None
            arguments.append(f"{parameter.name}={expression}" if parameter.keyword_only else expression)

        return f"lambda c: _load({cls.__module__!r}, {cls.__qualname__!r})({', '.join(arguments)})"

    def _parameter_expression(self, parameter: ParameterDescriptor) -> Optional[str]:
        if parameter.inject_target is not None:
            return f"c.get({parameter.inject_target!r})"

        fallback = None
        if parameter.has_default:
            fallback = _literal(parameter.default)
            if fallback is None:
                return None
        elif parameter.allows_null:
            fallback = "None"

        if len(parameter.declared_types) != 1 or parameter.declared_types[0] in PRIMITIVE_TYPES:
            return fallback

        declared = parameter.declared_types[0]
        if issubclass(declared, IContainer):
            return "c"
        if not _importable(declared):
            return None

        target = service_id(declared)
        if fallback is None:
            return f"c.get({target!r})"
        return f"(c.get({target!r}) if c.has({target!r}) else {fallback})"
