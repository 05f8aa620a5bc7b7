"""
Layered Configuration
=====================

Key/value configuration with a layered lookup:

1. Primary mapping: entries loaded from the instance's own properties file
2. Fallback chain: additional sources, consulted in the order they were added
3. Environment: process environment variables, always consulted last

The first layer holding a key wins. All access to one instance is serialised
by a per-instance lock.
"""

import logging
import os
import threading
from typing import Any, Dict, Iterator, KeysView, List, Optional, Tuple, Union

from .properties import load_properties
from .sources import EnvironmentSource, PropertySource

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = ".config/config"


class LayeredConfig:
    """
    Properties-file backed configuration with a fallback chain.

    As a member of another LayeredConfig's chain, an instance exposes only its
    own primary mapping, so the outer environment fallback stays last.
    """

    def __init__(self,
                 filename: Optional[Union[str, "os.PathLike[str]"]] = None,
                 *,
                 environment: Optional[EnvironmentSource] = None,
                 use_environment: bool = True):
        """
        Load the primary mapping from a properties file.

        Args:
            filename: Properties file to load (defaults to DEFAULT_FILENAME)
            environment: Final fallback source (defaults to os.environ)
            use_environment: Disable the final environment fallback when False

        Raises:
            LoadError: if the file cannot be opened or read
        """
        self.filename = os.fspath(filename) if filename is not None else DEFAULT_FILENAME
        self._properties: Dict[str, str] = load_properties(self.filename)
        self._chain: List[PropertySource] = []
        self._environment = None
        if use_environment:
            self._environment = environment if environment is not None else EnvironmentSource()
        self._lock = threading.RLock()

        logger.info(f"Loaded configuration from {self.filename} ({len(self._properties)} keys)")

    @classmethod
    def load(cls, filename=None, **kwargs) -> "LayeredConfig":
        """Alias of the constructor."""
        return cls(filename, **kwargs)

    # ------------------------------------------------------------------
    def add_sources(self, *sources: PropertySource) -> "LayeredConfig":
        """
        Append sources to the end of the fallback chain.

        The same source may be added more than once.

        Returns:
            self, for chaining calls
        """
        with self._lock:
            self._chain.extend(sources)
            logger.debug(f"Added {len(sources)} source(s) to {self.filename}, chain length {len(self._chain)}")
        return self

    def remove_sources(self, *sources: PropertySource) -> "LayeredConfig":
        """
        Remove every occurrence of each source from the fallback chain.

        Sources match by identity or equality. Absent sources are ignored.

        Returns:
            self, for chaining calls
        """
        with self._lock:
            before = len(self._chain)
            self._chain = [
                member for member in self._chain
                if not any(member is target or member == target for target in sources)
            ]
            logger.debug(f"Removed {before - len(self._chain)} source(s) from {self.filename}")
        return self

    @property
    def sources(self) -> Tuple[PropertySource, ...]:
        """Snapshot of the fallback chain."""
        with self._lock:
            return tuple(self._chain)

    # ------------------------------------------------------------------
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Look up a key through every layer.

        Args:
            key: Key to look up
            default: Returned when no layer holds the key

        Returns:
            Value from the primary mapping, else the first chain source that
            contains the key, else the environment, else default
        """
        with self._lock:
            if key in self._properties:
                return self._properties[key]

            for source in self._chain:
                if key in source:
                    return source[key]

            if self._environment is not None:
                value = self._environment.lookup(key)
                if value is not None:
                    return value

        return default

    # PropertySource view over the primary mapping -------------------------
    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __getitem__(self, key: str) -> str:
        return self._properties[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def keys(self) -> KeysView[str]:
        return self._properties.keys()

    def __repr__(self) -> str:
        return f"LayeredConfig(filename={self.filename!r}, keys={len(self._properties)}, sources={len(self._chain)})"


def load(filename: Optional[Union[str, "os.PathLike[str]"]] = None, **kwargs: Any) -> LayeredConfig:
    """
    Load a LayeredConfig from a properties file.

    Args:
        filename: Properties file (defaults to DEFAULT_FILENAME)
        **kwargs: Passed through to LayeredConfig

    Returns:
        New LayeredConfig instance
    """
    return LayeredConfig(filename, **kwargs)


__all__ = ["LayeredConfig", "load", "DEFAULT_FILENAME"]
