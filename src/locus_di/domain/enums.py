from enum import Enum


class Lifecycle(str, Enum):
    """Defines how long a resolved service lives.

    Attributes:
        SINGLETON: First resolution is cached and reused until reset (default).
        TRANSIENT: Every resolution builds a new value, nothing is cached.
    """

    SINGLETON = "singleton"
    TRANSIENT = "transient"

    def __str__(self) -> str:
        return self.value
