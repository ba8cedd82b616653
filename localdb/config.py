"""Project configuration — servers and schemas declared in a YAML file.

Example ``localdb.yaml``::

    servers:
      - name: demo
        directory: ./data
        start: true
    schemas:
      user:
        name: string
        age: number
        tags: [string]

Relative server directories resolve against the folder holding the file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from localdb.api import LocalDB
from localdb.errors import ConfigError
from localdb.schema.models import Schema
from localdb.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "localdb.yaml"


@dataclass
class ServerConfig:
    """A server declared in the project file."""

    name: str
    directory: str
    start: bool = True


@dataclass
class ProjectConfig:
    """Parsed project file."""

    servers: list[ServerConfig] = field(default_factory=list)
    schemas: dict[str, Schema] = field(default_factory=dict)
    source: str = ""

    def get_schema(self, name: str) -> Schema:
        schema = self.schemas.get(name)
        if schema is None:
            known = ", ".join(sorted(self.schemas)) or "none"
            raise ConfigError(f"Unknown schema '{name}' (defined: {known})")
        return schema

    def build(self, db: Optional[LocalDB] = None) -> LocalDB:
        """Register every declared server and start those marked ``start``."""
        db = db or LocalDB()
        for server_cfg in self.servers:
            server = db.create_server(server_cfg.name, server_cfg.directory)
            if server_cfg.start:
                db.start_server(server)
        return db


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> ProjectConfig:
    """Load and check a project file.

    Raises:
        ConfigError: If the file is missing, not valid YAML, or malformed.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    base_dir = config_path.resolve().parent
    config = ProjectConfig(
        servers=_parse_servers(data.get("servers") or [], base_dir),
        schemas=_parse_schemas(data.get("schemas") or {}),
        source=str(config_path.resolve()),
    )
    logger.debug(
        "Loaded %d server(s) and %d schema(s) from %s",
        len(config.servers),
        len(config.schemas),
        config_path,
    )
    return config


def _parse_servers(raw: object, base_dir: Path) -> list[ServerConfig]:
    if not isinstance(raw, list):
        raise ConfigError("'servers' must be a list")

    servers = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ConfigError(f"Server {i + 1} must be a mapping")
        name = item.get("name")
        directory = item.get("directory")
        if not name:
            raise ConfigError(f"Server {i + 1} missing 'name'")
        if not directory:
            raise ConfigError(f"Server '{name}' missing 'directory'")

        start = item.get("start", True)
        if not isinstance(start, bool):
            raise ConfigError(f"Server '{name}' 'start' must be true or false, got {start!r}")

        path = Path(str(directory)).expanduser()
        if not path.is_absolute():
            path = base_dir / path
        servers.append(
            ServerConfig(
                name=str(name),
                directory=str(path),
                start=start,
            )
        )
    return servers


def _parse_schemas(raw: object) -> dict[str, Schema]:
    if not isinstance(raw, dict):
        raise ConfigError("'schemas' must be a mapping of name to shape")
    return {str(name): Schema(name=str(name), schema=shape) for name, shape in raw.items()}
