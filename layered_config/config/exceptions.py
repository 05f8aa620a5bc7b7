"""
Configuration Errors
====================

Exception hierarchy raised while loading configuration files and while the
singleton registry constructs instances.
"""

from typing import Optional


class ConfigurationError(Exception):
    """Base class for all layered configuration errors."""


class LoadError(ConfigurationError):
    """A configuration file could not be opened, read or parsed."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename


class PropertiesFormatError(LoadError):
    """Malformed escape sequence in a properties file."""


class StateError(ConfigurationError, RuntimeError):
    """
    Registry failed to construct a configuration.

    Callers should treat this as a fatal configuration problem.
    """
