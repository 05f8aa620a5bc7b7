"""
Test Property Sources
=====================

MappingSource loaders (YAML, dotenv, properties) and the environment source.
"""

import pytest

from layered_config import EnvironmentSource, LoadError, MappingSource, PropertySource


def test_mapping_source_stores_strings():
    source = MappingSource({"port": 8080, "debug": True})

    assert source["port"] == "8080"
    assert source["debug"] == "True"
    assert "port" in source
    assert "missing" not in source
    assert sorted(source) == ["debug", "port"]
    assert len(source) == 2


def test_mapping_source_is_snapshot():
    data = {"a": "1"}
    source = MappingSource(data)
    data["a"] = "2"

    assert source["a"] == "1"


def test_sources_satisfy_protocol():
    assert isinstance(MappingSource(), PropertySource)
    assert isinstance(EnvironmentSource({}), PropertySource)
    assert isinstance({}, PropertySource)


def test_from_yaml_flattens_sections(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "database:\n"
        "  host: db.local\n"
        "  port: 5432\n"
        "logging:\n"
        "  level: DEBUG\n"
        "name: service\n"
        "unset:\n",
        encoding="utf-8",
    )

    source = MappingSource.from_yaml(path)

    assert source["database.host"] == "db.local"
    assert source["database.port"] == "5432"
    assert source["logging.level"] == "DEBUG"
    assert source["name"] == "service"
    assert "unset" not in source
    assert source.name == str(path)


def test_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(LoadError):
        MappingSource.from_yaml(path)


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(LoadError):
        MappingSource.from_yaml(tmp_path / "missing.yaml")


def test_from_dotenv(tmp_path):
    path = tmp_path / ".env"
    path.write_text("API_KEY=secret\nexport REGION=eu\nNO_VALUE\n", encoding="utf-8")

    source = MappingSource.from_dotenv(path)

    assert source["API_KEY"] == "secret"
    assert source["REGION"] == "eu"
    assert "NO_VALUE" not in source


def test_from_dotenv_missing_file(tmp_path):
    with pytest.raises(LoadError):
        MappingSource.from_dotenv(tmp_path / ".env")


def test_from_properties(tmp_path):
    path = tmp_path / "extra.properties"
    path.write_text("x=1\n", encoding="utf-8")

    assert MappingSource.from_properties(path)["x"] == "1"


def test_environment_source_reads_process_environment(monkeypatch):
    monkeypatch.setenv("LAYERED_CONFIG_SOURCE_KEY", "yes")
    source = EnvironmentSource()

    assert source.lookup("LAYERED_CONFIG_SOURCE_KEY") == "yes"
    assert "LAYERED_CONFIG_SOURCE_KEY" in source
    assert source["LAYERED_CONFIG_SOURCE_KEY"] == "yes"


def test_environment_source_missing_key():
    source = EnvironmentSource({})

    assert source.lookup("missing") is None
    assert "missing" not in source
    with pytest.raises(KeyError):
        source["missing"]


def test_environment_source_permission_denied():
    class DeniedEnviron(dict):
        def get(self, key, default=None):
            raise PermissionError("denied")

    source = EnvironmentSource(DeniedEnviron())

    assert source.lookup("HOME") is None
    assert "HOME" not in source
