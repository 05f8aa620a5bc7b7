"""Configuration package.

Provides the LayeredConfig lookup plus property sources and the singleton registry.
"""
from .exceptions import ConfigurationError, LoadError, PropertiesFormatError, StateError  # noqa: F401
from .layered_config import DEFAULT_FILENAME, LayeredConfig, load  # noqa: F401
from .registry import ConfigRegistry, default_registry, singleton  # noqa: F401
from .sources import EnvironmentSource, MappingSource, PropertySource  # noqa: F401
