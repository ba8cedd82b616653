"""Tests for project file loading."""

import tempfile
from pathlib import Path

import pytest
import yaml

from localdb.config import load_config
from localdb.errors import ConfigError, DirectoryNotFoundError
from localdb.schema.validator import validate
from localdb.server.models import ServerStatus


def _write_config(tmpdir: str, data) -> Path:
    path = Path(tmpdir) / "localdb.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


def _sample(tmpdir: str) -> Path:
    (Path(tmpdir) / "data").mkdir()
    return _write_config(
        tmpdir,
        {
            "servers": [
                {"name": "demo", "directory": "data"},
                {"name": "cold", "directory": "data", "start": False},
            ],
            "schemas": {
                "user": {"name": "string", "age": "number", "tags": ["string"]},
            },
        },
    )


def test_load_servers_and_schemas():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(_sample(tmpdir))

        assert [s.name for s in config.servers] == ["demo", "cold"]
        assert config.servers[0].start is True
        assert config.servers[1].start is False
        assert Path(config.servers[0].directory) == Path(tmpdir).resolve() / "data"

        user = config.get_schema("user")
        assert user.name == "user"
        assert validate(user.node, {"name": "Ana", "age": 30, "tags": ["a"]})
        assert not validate(user.node, {"name": "Ana", "age": "30", "tags": []})


def test_build_registers_and_starts():
    with tempfile.TemporaryDirectory() as tmpdir:
        db = load_config(_sample(tmpdir)).build()

        assert db.get_server("demo").status == ServerStatus.RUNNING
        assert db.get_server("cold").status == ServerStatus.INIT


def test_build_with_missing_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_config(
            tmpdir, {"servers": [{"name": "demo", "directory": "absent"}]}
        )
        with pytest.raises(DirectoryNotFoundError):
            load_config(path).build()


def test_unknown_schema():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(_sample(tmpdir))
        with pytest.raises(ConfigError, match="Unknown schema 'order'"):
            config.get_schema("order")


def test_missing_file():
    with pytest.raises(ConfigError, match="not found"):
        load_config("/nonexistent/localdb.yaml")


def test_invalid_yaml():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "localdb.yaml"
        path.write_text("{{invalid yaml::: [")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)


def test_empty_file_is_empty_config():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "localdb.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.servers == []
        assert config.schemas == {}


def test_malformed_sections():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ConfigError):
            load_config(_write_config(tmpdir, ["not", "a", "mapping"]))
        with pytest.raises(ConfigError):
            load_config(_write_config(tmpdir, {"servers": {"name": "demo"}}))
        with pytest.raises(ConfigError, match="missing 'directory'"):
            load_config(_write_config(tmpdir, {"servers": [{"name": "demo"}]}))
        with pytest.raises(ConfigError):
            load_config(_write_config(tmpdir, {"schemas": ["user"]}))


def test_start_must_be_boolean():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write_config(
            tmpdir,
            {"servers": [{"name": "demo", "directory": ".", "start": "false"}]},
        )
        with pytest.raises(ConfigError, match="'start' must be true or false"):
            load_config(path)
