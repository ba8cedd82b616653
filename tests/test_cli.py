"""Tests for the command-line interface."""

import json
import os
import subprocess
import sys
import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from localdb.cli import main


def _project(tmpdir: str) -> str:
    (Path(tmpdir) / "data").mkdir()
    path = Path(tmpdir) / "localdb.yaml"
    with open(path, "w") as f:
        yaml.dump(
            {
                "servers": [
                    {"name": "demo", "directory": "data"},
                    {"name": "cold", "directory": "data", "start": False},
                ],
                "schemas": {"user": {"name": "string", "age": "number"}},
            },
            f,
        )
    return str(path)


def test_greet():
    runner = CliRunner()
    result = runner.invoke(main, ["greet", "Ana"])
    assert result.exit_code == 0
    assert "Hello Ana!" in result.output

    result = runner.invoke(main, ["greet"])
    assert "Hello!" in result.output


def test_servers_table():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = CliRunner().invoke(main, ["-c", _project(tmpdir), "servers"])
        assert result.exit_code == 0
        assert "demo" in result.output
        assert "cold" in result.output


def test_save_and_read_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _project(tmpdir)
        runner = CliRunner()

        result = runner.invoke(
            main, ["-c", config, "save", "user", '{"name": "Ana", "age": 30}', "-s", "demo"]
        )
        assert result.exit_code == 0, result.output
        assert (Path(tmpdir) / "data" / "user.js").exists()

        result = runner.invoke(main, ["-c", config, "read", "user", "-s", "demo", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"name": "Ana", "age": 30}]


def test_read_table_and_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _project(tmpdir)
        runner = CliRunner()

        result = runner.invoke(main, ["-c", config, "read", "user", "-s", "demo"])
        assert result.exit_code == 0
        assert "No records" in result.output

        runner.invoke(main, ["-c", config, "save", "user", '{"name": "Ana", "age": 30}', "-s", "demo"])
        result = runner.invoke(main, ["-c", config, "read", "user", "-s", "demo"])
        assert "Ana" in result.output


def test_save_schema_mismatch_fails():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _project(tmpdir)
        result = CliRunner().invoke(
            main, ["-c", config, "save", "user", '{"name": "Bo"}', "-s", "demo"]
        )
        assert result.exit_code == 1
        assert "age" in result.output
        assert not (Path(tmpdir) / "data" / "user.js").exists()


def test_save_to_stopped_server_fails():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _project(tmpdir)
        result = CliRunner().invoke(
            main, ["-c", config, "save", "user", '{"name": "Ana", "age": 1}', "-s", "cold"]
        )
        assert result.exit_code == 1
        assert "not started" in result.output


def test_unknown_server_and_bad_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _project(tmpdir)
        runner = CliRunner()

        result = runner.invoke(main, ["-c", config, "read", "user", "-s", "nope"])
        assert result.exit_code == 1
        assert "Unknown server" in result.output

        result = runner.invoke(main, ["-c", config, "save", "user", "{oops", "-s", "demo"])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output


def test_validate_command():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _project(tmpdir)
        runner = CliRunner()

        result = runner.invoke(main, ["-c", config, "validate", "user", '{"name": "Ana", "age": 3}'])
        assert result.exit_code == 0
        assert "Valid" in result.output

        result = runner.invoke(main, ["-c", config, "validate", "user", '{"name": 3, "age": 3}'])
        assert result.exit_code == 1
        assert "expected string" in result.output


def test_missing_config():
    result = CliRunner().invoke(main, ["-c", "/nonexistent/localdb.yaml", "servers"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_config_from_environment():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = CliRunner().invoke(
            main, ["servers"], env={"LOCALDB_CONFIG": _project(tmpdir)}
        )
        assert result.exit_code == 0
        assert "demo" in result.output


def _run(*args: str) -> subprocess.CompletedProcess:
    root = str(Path(__file__).resolve().parents[1])
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (root, env.get("PYTHONPATH")) if p)
    return subprocess.run(
        [sys.executable, "-m", "localdb.cli", *args],
        capture_output=True,
        text=True,
        env=env,
    )


def test_read_json_stdout_is_pure_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _project(tmpdir)

        saved = _run("-c", config, "save", "user", '{"name": "Ana", "age": 30}', "-s", "demo")
        assert saved.returncode == 0, saved.stderr

        result = _run("-c", config, "read", "user", "-s", "demo", "--json")
        assert result.returncode == 0, result.stderr
        assert json.loads(result.stdout) == [{"name": "Ana", "age": 30}]
        assert "Server demo is running" in result.stderr


def test_read_json_over_corrupt_file_keeps_stdout_clean():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = _project(tmpdir)
        (Path(tmpdir) / "data" / "user.js").write_text("garbage")

        result = _run("-c", config, "read", "user", "-s", "demo", "--json")
        assert result.returncode == 0, result.stderr
        assert json.loads(result.stdout) == []
        assert "corrupt" in result.stderr

