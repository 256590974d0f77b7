import importlib.util
import logging
from importlib.machinery import SourceFileLoader
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from locus_di.application import DIContainer
from locus_di.domain import CompilationError, FactoryDefinition, ITypeIntrospector, ServiceId

logger = logging.getLogger(__name__)


class _SourceOnlyLoader(SourceFileLoader):
    """Loads a module from its source, never reading or writing a bytecode cache."""

    def get_code(self, fullname: str) -> Any:
        return self.source_to_code(self.get_data(self.path), self.path)


def load_compiled_definitions(compiled_file: Union[str, Path]) -> Dict[str, FactoryDefinition]:
    """Load the ``FACTORIES`` mapping from a compiled definitions module.

    The module is loaded from source on every call and is not registered in
    ``sys.modules``, so a file rewritten in place is never shadowed by stale
    bytecode or an earlier load.

    Args:
        compiled_file: Path of the module written by ``ContainerDumper``.

    Returns:
        Identifier to factory definition; empty if the file is missing or does
        not define a ``FACTORIES`` dict.

    Raises:
        CompilationError: If the file exists but cannot be read, compiled or
            executed.
    """
    path = Path(compiled_file)
    if not path.exists():
        logger.debug("No compiled definitions at %s", path)
        return {}

    module_name = f"locus_di_compiled_{path.stem}"
    loader = _SourceOnlyLoader(module_name, str(path))
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    if spec is None:
        raise CompilationError(f"Cannot load compiled container from: {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise CompilationError(f"Cannot load compiled container from: {path}") from e

    factories = getattr(module, "FACTORIES", None)
    if not isinstance(factories, dict):
        logger.warning("Compiled file %s does not define a FACTORIES dict, ignoring it", path)
        return {}

    definitions = {
        identifier: FactoryDefinition(factory=factory)
        for identifier, factory in factories.items()
        if isinstance(identifier, str) and callable(factory)
    }
    logger.info("Loaded %d compiled definition(s) from %s", len(definitions), path)
    return definitions


class CompiledContainer(DIContainer):
    """Container seeded with pre-compiled factories.

    Compiled factories are registered first and runtime definitions on top, so
    a runtime definition for the same identifier wins. Anything not compiled
    resolves exactly as in ``DIContainer``.

    Attributes:
        compiled_file: Path the compiled factories were loaded from.

    Example:
        >>> container = CompiledContainer(
        ...     "/var/cache/app/compiled_container.py",
        ...     {"feature.flags": lambda c: FeatureFlags.from_env()},
        ... )
    """

    def __init__(
        self,
        compiled_file: Union[str, Path],
        definitions: Optional[Mapping[ServiceId, Any]] = None,
        introspector: Optional[ITypeIntrospector] = None,
    ) -> None:
        self.compiled_file = Path(compiled_file)
        merged: Dict[ServiceId, Any] = dict(load_compiled_definitions(self.compiled_file))
        merged.update(definitions or {})
        super().__init__(merged, introspector)
