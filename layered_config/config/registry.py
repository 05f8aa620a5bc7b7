"""
Singleton Registry
==================

Process-wide cache holding one LayeredConfig per filename. Entries are created
lazily on first request and live for the rest of the process.
"""

import logging
import os
import threading
from typing import Callable, Dict, List, Optional, Union

from .exceptions import LoadError, StateError
from .layered_config import DEFAULT_FILENAME, LayeredConfig

logger = logging.getLogger(__name__)


class ConfigRegistry:
    """Get-or-create cache of LayeredConfig instances keyed by filename."""

    def __init__(self, factory: Callable[[str], LayeredConfig] = LayeredConfig):
        """
        Args:
            factory: Builds a configuration from a filename
        """
        self._factory = factory
        self._instances: Dict[str, LayeredConfig] = {}
        self._lock = threading.Lock()

    def get(self, filename: Optional[Union[str, "os.PathLike[str]"]] = None) -> LayeredConfig:
        """
        Return the configuration for filename, loading it on first use.

        Concurrent first calls for the same filename construct exactly one
        instance. A failed load is not cached; the next call loads again.

        Args:
            filename: Properties file (defaults to DEFAULT_FILENAME)

        Raises:
            StateError: if the file cannot be loaded
        """
        key = os.fspath(filename) if filename is not None else DEFAULT_FILENAME

        with self._lock:
            instance = self._instances.get(key)
            if instance is not None:
                return instance

            try:
                instance = self._factory(key)
            except LoadError as e:
                logger.error(f"Singleton configuration {key} could not be loaded: {e}")
                raise StateError(f"Cannot create configuration singleton for {key}") from e

            self._instances[key] = instance
            logger.debug(f"Registered configuration singleton for {key}")
            return instance

    def filenames(self) -> List[str]:
        with self._lock:
            return list(self._instances)

    def __contains__(self, filename: object) -> bool:
        with self._lock:
            return filename in self._instances

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)


_default_registry = ConfigRegistry()


def default_registry() -> ConfigRegistry:
    """Process-wide registry used by singleton()."""
    return _default_registry


def singleton(filename: Optional[Union[str, "os.PathLike[str]"]] = None) -> LayeredConfig:
    """
    Shared LayeredConfig for filename from the process-wide registry.

    Raises:
        StateError: if the file cannot be loaded
    """
    return _default_registry.get(filename)


__all__ = ["ConfigRegistry", "default_registry", "singleton"]
