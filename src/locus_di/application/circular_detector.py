"""Application layer - Circular dependency detection."""

import threading
from contextlib import contextmanager
from typing import Iterator, List

from locus_di.domain import ResolutionFrame


class CircularDependencyDetector:
    """Detects circular dependencies during resolution.

    Uses thread-local storage to hold one resolution frame per thread, so
    resolution chains started from different threads never share cycle state.
    When an identifier appears twice in the frame, a circular dependency is
    detected.

    Attributes:
        _local: Thread-local storage for resolution frames.
    """

    def __init__(self) -> None:
        """Initialize the circular dependency detector with thread-local storage."""
        self._local = threading.local()

    def _get_frame(self) -> ResolutionFrame:
        """Get the current thread's resolution frame.

        Returns:
            The resolution frame for the current thread.
        """
        if not hasattr(self._local, "frame"):
            self._local.frame = ResolutionFrame()
        return self._local.frame

    def push(self, service_id: str) -> None:
        """Mark an identifier as in-flight.

        Args:
            service_id: The identifier being resolved.

        Raises:
            CircularDependencyError: If the identifier is already in-flight.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push("app.ServiceA")
            >>> detector.push("app.ServiceB")
            >>> detector.push("app.ServiceA")  # Raises CircularDependencyError
        """
        self._get_frame().push(service_id)

    def pop(self, service_id: str) -> None:
        """Clear the in-flight mark of an identifier.

        Args:
            service_id: The identifier whose resolution finished.
        """
        self._get_frame().pop(service_id)

    @contextmanager
    def guard(self, service_id: str) -> Iterator[None]:
        """Keep an identifier in-flight for the duration of the block.

        The mark is cleared on every exit path so a failed resolution does not
        leave the identifier looking circular to later attempts.

        Args:
            service_id: The identifier being resolved.

        Example:
            >>> with detector.guard("app.Mailer"):
            ...     mailer = factory(container)
        """
        self.push(service_id)
        try:
            yield
        finally:
            self.pop(service_id)

    def in_flight(self) -> List[str]:
        """Return a copy of the identifiers currently being resolved."""
        return list(self._get_frame().stack)

    def clear(self) -> None:
        """Clear the current thread's frame.

        Useful for testing or error recovery.
        """
        if hasattr(self._local, "frame"):
            self._local.frame.clear()
