"""
Logging Utilities
=================

Logging setup whose settings are resolved through a LayeredConfig, so a
``logging.level`` entry can live in the properties file, any fallback source
or the environment.
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from ..config.layered_config import LayeredConfig

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass
class LoggingSettings:
    """Logging options, one field per ``logging.*`` configuration key."""

    level: str = "INFO"
    file: Optional[str] = None
    max_file_size: str = "10MB"
    backup_count: int = 5

    @classmethod
    def from_config(cls, config: LayeredConfig, defaults: Optional["LoggingSettings"] = None) -> "LoggingSettings":
        """Resolve each field through the layered lookup, falling back to defaults."""
        defaults = defaults or cls()
        return cls(
            level=config.get('logging.level', defaults.level),
            file=config.get('logging.file', defaults.file),
            max_file_size=config.get('logging.max_file_size', defaults.max_file_size),
            backup_count=int(config.get('logging.backup_count', str(defaults.backup_count))),
        )

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.level.upper(), logging.INFO)


def _build_handlers(settings: LoggingSettings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.file:
        log_dir = os.path.dirname(settings.file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            settings.file,
            maxBytes=_parse_size(settings.max_file_size),
            backupCount=settings.backup_count,
            encoding='utf-8'
        ))

    return handlers


def setup_logging(
    config: Optional[LayeredConfig] = None,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_file_size: str = "10MB",
    backup_count: int = 5
) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        config: Configuration whose ``logging.*`` keys override the arguments
        log_level: Logging level
        log_file: Rotating log file path, console only when None
        max_file_size: Rotation size, e.g. '10MB'
        backup_count: Rotated files to keep

    Returns:
        The package logger
    """
    settings = LoggingSettings(log_level, log_file, max_file_size, backup_count)
    if config is not None:
        settings = LoggingSettings.from_config(config, defaults=settings)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(settings):
        handler.setLevel(settings.numeric_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    package_logger = logging.getLogger('layered_config')
    package_logger.info(f"Logging initialized - Level: {settings.level}, File: {settings.file}")
    return package_logger


def _parse_size(size_str: str) -> int:
    """Parse a size such as '10MB' or '512' into bytes."""
    size_str = size_str.upper().strip()

    for suffix, factor in (('KB', 1024), ('MB', 1024 ** 2), ('GB', 1024 ** 3)):
        if size_str.endswith(suffix):
            return int(float(size_str[:-2]) * factor)

    return int(size_str)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
