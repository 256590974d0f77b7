import functools
import inspect
from typing import Any, Awaitable, Callable, List

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from locus_di.domain import IContainer, ServiceId


def create_fastapi_dependency(container: IContainer, service: ServiceId) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves from the DI container.

    The resolved instance lifecycle follows the container: singletons are
    shared across requests, transients are rebuilt on every call.

    Args:
        container: The DI container to resolve services from.
        service: Identifier or class to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = DIContainer()
        >>> container.set(UserRepository, lambda c: UserRepository(c.get(DatabaseConnection)))
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, UserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the service from the container."""
        return container.get(service)

    return dependency


def create_tagged_dependency(container: IContainer, tag: str) -> Callable[[], List[Any]]:
    """Create a FastAPI Depends() callable returning every service under a tag.

    Args:
        container: The DI container to resolve services from.
        tag: The tag name.

    Returns:
        A callable returning the tagged services in tagging order.

    Example:
        >>> get_health_checks = create_tagged_dependency(container, "health.check")
        >>>
        >>> @app.get("/health")
        >>> def health(checks: list = Depends(get_health_checks)):
        ...     return {check.name: check.run() for check in checks}
    """

    def tagged_dependency() -> List[Any]:
        """Resolve the tagged services from the container."""
        return container.get_tagged(tag)

    return tagged_dependency


def create_request_dependency(service: ServiceId) -> Callable[[Request], Any]:
    """Create a FastAPI dependency resolving from the container attached to the request.

    Requires the ContainerMiddleware to be installed.

    Args:
        service: Identifier or class to resolve.

    Returns:
        A callable that resolves from ``request.state.di_container``.

    Example:
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> get_mailer = create_request_dependency(Mailer)
        >>>
        >>> @app.post("/invite")
        >>> async def invite(mailer: Mailer = Depends(get_mailer)):
        ...     return await mailer.send_invite()
    """

    def request_dependency(request: Request) -> Any:
        """Resolve from the request's container."""
        if not hasattr(request.state, "di_container"):
            raise RuntimeError(
                "Request does not have a DI container. Did you forget to add ContainerMiddleware?"
            )
        container: IContainer = request.state.di_container
        return container.get(service)

    return request_dependency


class ContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that exposes the DI container on every request.

    The container is accessible via ``request.state.di_container``.

    Attributes:
        container: The DI container attached to requests.

    Example:
        >>> container = DIContainer()
        >>> app = FastAPI()
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> @app.get("/")
        >>> async def root(request: Request):
        ...     mailer = request.state.di_container.get(Mailer)
        ...     return {"message": "Hello"}
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with a container.

        Args:
            app: The FastAPI/Starlette application.
            container: The DI container to attach to requests.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the container to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.di_container = self.container
        return await call_next(request)


def inject_dependencies(container: IContainer, *services: ServiceId) -> Callable:
    """Decorator that injects services into an async endpoint function.

    Services are resolved on every call and passed as keyword arguments, in
    the order of the function's parameters, unless the caller already
    supplied them.

    Args:
        container: The DI container to resolve from.
        *services: Identifiers or classes to resolve and inject.

    Returns:
        A decorator function.

    Example:
        >>> @app.get("/users")
        >>> @inject_dependencies(container, UserService, AuditLog)
        >>> async def list_users(user_service: UserService, audit: AuditLog):
        ...     audit.record("Listing users")
        ...     return await user_service.get_all()
    """

    def decorator(func: Callable) -> Callable:
        """Wrap the function with dependency injection logic."""
        param_names = list(inspect.signature(func).parameters.keys())

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            """Resolve services and call the original function."""
            for param_name, service in zip(param_names, services):
                if param_name not in kwargs:
                    kwargs[param_name] = container.get(service)

            return await func(*args, **kwargs)

        return wrapper

    return decorator
