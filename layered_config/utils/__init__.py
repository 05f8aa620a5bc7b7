"""
Utilities Module
================

Contains logging helpers.
"""

from .logger import setup_logging, get_logger, LoggingSettings

__all__ = [
    'setup_logging',
    'get_logger',
    'LoggingSettings',
]
