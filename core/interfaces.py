"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod
from typing import Any, Callable


class Storage(ABC):
    """Abstract key-value port for persisted values.

    Implementations raise PersistenceUnavailable when the backend fails.
    """

    @abstractmethod
    def get(self, key: str) -> Any:
        """Read a value. Returns None if the key has never been written."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Write a JSON-serialisable value under key."""
        pass


class Scheduler(ABC):
    """Abstract host scheduler for frame updates and delayed callbacks.

    Every method returns a handle with an idempotent cancel().
    """

    @abstractmethod
    def on_frame(self, callback: Callable[[float], None]):
        """Invoke callback(elapsed_seconds) once per display refresh."""
        pass

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]):
        """Invoke callback once after delay seconds."""
        pass

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]):
        """Invoke callback every interval seconds until cancelled."""
        pass
