"""
Property Sources
================

Anything that can answer "does it contain key K, and what is K's value" can
sit in a LayeredConfig fallback chain. Plain dicts, other LayeredConfig
instances and the sources below all qualify.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Protocol, Union, runtime_checkable

import yaml
from dotenv import dotenv_values

from .exceptions import LoadError
from .properties import load_properties

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


@runtime_checkable
class PropertySource(Protocol):
    """Key lookup capability used by the fallback chain."""

    def __contains__(self, key: object) -> bool:
        ...

    def __getitem__(self, key: str) -> Any:
        ...


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested mappings into dotted keys."""
    flat: Dict[str, str] = {}

    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, full_key))
        elif value is not None:
            flat[full_key] = str(value)

    return flat


class MappingSource:
    """
    Read-only snapshot of key/value pairs.

    Values are stored as strings. Equality is by name and content, so an
    identical source can be removed from a chain by an equal copy.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None, name: Optional[str] = None):
        self.name = name or "mapping"
        self._data: Dict[str, str] = {
            str(key): str(value) for key, value in (data or {}).items()
        }

    @classmethod
    def from_yaml(cls, path: PathLike) -> "MappingSource":
        """
        Load a YAML document, flattening nested sections to dotted keys.

        Args:
            path: YAML file path

        Returns:
            MappingSource named after the file
        """
        path = Path(path)

        try:
            with path.open("r", encoding="utf-8") as f:
                document = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load YAML source {path}: {e}")
            raise LoadError(f"Cannot load YAML source {path}: {e}", filename=str(path)) from e

        if not isinstance(document, Mapping):
            raise LoadError(
                f"YAML source {path} must contain a mapping, got {type(document).__name__}",
                filename=str(path),
            )

        return cls(_flatten(document), name=str(path))

    @classmethod
    def from_dotenv(cls, path: PathLike) -> "MappingSource":
        """Load a ``.env`` file. Keys declared without a value are skipped."""
        path = Path(path)

        if not path.is_file():
            logger.error(f"Dotenv source not found: {path}")
            raise LoadError(f"Cannot load dotenv source {path}: file not found", filename=str(path))

        values = dotenv_values(path, encoding="utf-8")
        return cls({k: v for k, v in values.items() if v is not None}, name=str(path))

    @classmethod
    def from_properties(cls, path: PathLike) -> "MappingSource":
        """Load another properties file as a plain fallback source."""
        return cls(load_properties(path), name=os.fspath(path))

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MappingSource):
            return NotImplemented
        return self.name == other.name and self._data == other._data

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self._data.items())))

    def __repr__(self) -> str:
        return f"MappingSource(name={self.name!r}, keys={len(self._data)})"


class EnvironmentSource:
    """
    Live view of the process environment.

    Consulted by LayeredConfig after the whole fallback chain. A read refused
    with PermissionError counts as a missing key.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def lookup(self, key: str) -> Optional[str]:
        try:
            return self._environ.get(key)
        except PermissionError as e:
            logger.debug(f"Environment read of {key!r} denied, treating as not found: {e}")
            return None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.lookup(key) is not None

    def __getitem__(self, key: str) -> str:
        value = self.lookup(key)
        if value is None:
            raise KeyError(key)
        return value

    def __repr__(self) -> str:
        return "EnvironmentSource()"


__all__ = ["PropertySource", "MappingSource", "EnvironmentSource"]
