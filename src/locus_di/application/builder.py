import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from locus_di.application.container import DIContainer
from locus_di.application.settings import CompilationSettings
from locus_di.domain import ServiceId

logger = logging.getLogger(__name__)


class ContainerBuilder:
    """Fluent builder accumulating configuration before creating a container.

    Every method returns the builder so calls can be chained. ``build`` returns
    a ``CompiledContainer`` when compilation is enabled and a compiled file
    exists, otherwise a plain ``DIContainer``.

    Example:
        >>> container = (
        ...     ContainerBuilder()
        ...     .add_definitions({Settings: lambda c: Settings.from_env()})
        ...     .bind(UserRepository, SqlUserRepository)
        ...     .tag(AuditListener, "event.listener")
        ...     .transient(RequestContext)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._definitions: Dict[ServiceId, Any] = {}
        self._bindings: Dict[ServiceId, ServiceId] = {}
        self._tags: List[Tuple[ServiceId, Union[str, Iterable[str]]]] = []
        self._transients: List[ServiceId] = []
        self._compilation: Optional[CompilationSettings] = None

    def add_definitions(self, definitions: Mapping[ServiceId, Any]) -> "ContainerBuilder":
        """Merge definitions, keeping any already registered for the same service."""
        for service, definition in definitions.items():
            self._definitions.setdefault(service, definition)
        return self

    def set(self, service: ServiceId, definition: Any) -> "ContainerBuilder":
        """Register one definition, replacing an existing one."""
        self._definitions[service] = definition
        return self

    def bind(self, abstract: ServiceId, concrete: ServiceId) -> "ContainerBuilder":
        self._bindings[abstract] = concrete
        return self

    def tag(self, service: ServiceId, tags: Union[str, Iterable[str]]) -> "ContainerBuilder":
        if not isinstance(tags, str):
            tags = list(tags)
        self._tags.append((service, tags))
        return self

    def transient(self, service: ServiceId) -> "ContainerBuilder":
        self._transients.append(service)
        return self

    def enable_compilation(self, cache_dir: Union[str, Path], filename: Optional[str] = None) -> "ContainerBuilder":
        """Load definitions from a compiled module in ``cache_dir`` when one exists.

        Args:
            cache_dir: Directory holding the compiled definitions module.
            filename: Optional module file name, ``compiled_container.py`` by default.
        """
        options: Dict[str, Any] = {"cache_dir": Path(cache_dir)}
        if filename is not None:
            options["filename"] = filename
        self._compilation = CompilationSettings(**options)
        return self

    @property
    def compilation(self) -> Optional[CompilationSettings]:
        return self._compilation

    def build(self) -> DIContainer:
        """Create the container and apply bindings, tags and transient flags.

        Returns:
            A ``CompiledContainer`` if a compiled file is available, otherwise
            a ``DIContainer``.
        """
        if self._compilation is not None and self._compilation.compiled_file.exists():
            # Imported here: infrastructure depends on the application layer
            from locus_di.infrastructure.compilation import CompiledContainer

            logger.info("Building container from %s", self._compilation.compiled_file)
            container: DIContainer = CompiledContainer(self._compilation.compiled_file, self._definitions)
        else:
            container = DIContainer(self._definitions)

        for abstract, concrete in self._bindings.items():
            container.bind(abstract, concrete)

        for service, tags in self._tags:
            container.tag(service, tags)

        for service in self._transients:
            container.transient(service)

        return container
