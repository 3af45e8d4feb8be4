"""
Output adapter registry

Maps adapter names used in configuration ("file", "multifile") to output
factories. A registry is built at startup and handed to the logger; there
is no process-wide registration.
"""

from __future__ import annotations
import threading
from typing import Any, Callable, Dict, List

ADAPTER_FILE = "file"
ADAPTER_MULTIFILE = "multifile"

AdapterFactory = Callable[[], Any]


class AdapterRegistry:
    """
    Named output factories.

    Thread Safety:
        All methods are thread-safe for concurrent access.

    Example:
        registry = default_registry()
        registry.register("custom", MyOutput)
        output = registry.create("multifile")
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._factories: Dict[str, AdapterFactory] = {}
        self._lock = threading.RLock()

    def register(self, name: str, factory: AdapterFactory) -> None:
        """
        Register an output factory under a name.

        Args:
            name: Unique adapter name
            factory: Zero-argument callable returning an unconfigured output

        Raises:
            ValueError: If name is already registered
        """
        if not callable(factory):
            raise TypeError(f"factory for adapter '{name}' is not callable")
        with self._lock:
            if name in self._factories:
                raise ValueError(f"Adapter '{name}' is already registered")
            self._factories[name] = factory

    def unregister(self, name: str) -> None:
        """
        Remove an adapter.

        Note:
            Does nothing if the adapter is not registered.
        """
        with self._lock:
            self._factories.pop(name, None)

    def create(self, name: str) -> Any:
        """
        Create a new, unconfigured output.

        Raises:
            KeyError: If no adapter has that name
        """
        with self._lock:
            factory = self._factories.get(name)
        if factory is None:
            raise KeyError(f"Unknown adapter '{name}'")
        return factory()

    def names(self) -> List[str]:
        """Registered adapter names."""
        with self._lock:
            return list(self._factories.keys())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._factories

    def __repr__(self) -> str:
        """String representation."""
        return f"AdapterRegistry(adapters={self.names()})"


def default_registry() -> AdapterRegistry:
    """New registry with the built-in file and multifile adapters."""
    from multifile_logger.writers.file_output import FileLogWriter
    from multifile_logger.writers.multi_file_output import MultiFileLogWriter

    registry = AdapterRegistry()
    registry.register(ADAPTER_FILE, FileLogWriter)
    registry.register(ADAPTER_MULTIFILE, MultiFileLogWriter)
    return registry
