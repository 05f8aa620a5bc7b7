"""
Layered Config
==============

Configuration lookup from a properties file, an ordered chain of fallback
sources and the process environment.

Modules:
- config: LayeredConfig, property sources, properties parser, singleton registry
- utils: Logging setup
"""

__version__ = "1.0.0"

from .config import (
    DEFAULT_FILENAME,
    ConfigRegistry,
    ConfigurationError,
    EnvironmentSource,
    LayeredConfig,
    LoadError,
    MappingSource,
    PropertiesFormatError,
    PropertySource,
    StateError,
    load,
    singleton,
)
from .utils.logger import setup_logging, get_logger

__all__ = [
    "DEFAULT_FILENAME",
    "ConfigRegistry",
    "ConfigurationError",
    "EnvironmentSource",
    "LayeredConfig",
    "LoadError",
    "MappingSource",
    "PropertiesFormatError",
    "PropertySource",
    "StateError",
    "load",
    "singleton",
    "setup_logging",
    "get_logger",
]
