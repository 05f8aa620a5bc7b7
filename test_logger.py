"""
Test Logging Setup
==================

Logging configured from layered configuration values.
"""

import logging
import logging.handlers

import pytest

from layered_config import EnvironmentSource, LayeredConfig, setup_logging
from layered_config.utils.logger import LoggingSettings, _parse_size


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_from_layered_config(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    path = tmp_path / "config"
    path.write_text("logging.level=DEBUG\n", encoding="utf-8")
    config = LayeredConfig(path, environment=EnvironmentSource({}))
    config.add_sources({"logging.file": str(log_file), "logging.backup_count": "2"})

    app_logger = setup_logging(config)
    app_logger.debug("hello")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert log_file.exists()
    rotating = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].backupCount == 2


def test_setup_logging_defaults():
    setup_logging(log_level="warning")

    assert logging.getLogger().level == logging.WARNING


def test_parse_size():
    assert _parse_size("10MB") == 10 * 1024 * 1024
    assert _parse_size("1kb") == 1024
    assert _parse_size("512") == 512


def test_settings_resolve_through_environment_fallback(tmp_path):
    path = tmp_path / "config"
    path.write_text("logging.max_file_size=1MB\n", encoding="utf-8")
    config = LayeredConfig(path, environment=EnvironmentSource({"logging.level": "ERROR"}))

    settings = LoggingSettings.from_config(config, defaults=LoggingSettings(backup_count=7))

    assert settings.level == "ERROR"
    assert settings.numeric_level == logging.ERROR
    assert settings.max_file_size == "1MB"
    assert settings.backup_count == 7
    assert settings.file is None


def test_file_handler_writes_non_bmp_values(tmp_path):
    log_file = tmp_path / "app.log"
    path = tmp_path / "config"
    path.write_text("greeting=hi \\uD83D\\uDE00\n", encoding="utf-8")
    config = LayeredConfig(path, environment=EnvironmentSource({}))

    app_logger = setup_logging(log_file=str(log_file))
    app_logger.info(f"greeting: {config.get('greeting')}")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "greeting: hi \U0001F600" in log_file.read_text(encoding="utf-8")
