"""In-memory server registry.

Each registry is an ordinary object: callers own it and pass it where it
is needed. Descriptors are never removed once registered.
"""

from __future__ import annotations

from pathlib import Path

from localdb.errors import (
    DirectoryNotFoundError,
    MissingArgumentError,
    ServerExistsError,
)
from localdb.server.models import ServerDescriptor, ServerStatus
from localdb.utils.logger import get_logger

logger = get_logger(__name__)


class ServerRegistry:
    """Named server descriptors with lookup and status transitions."""

    def __init__(self) -> None:
        self._servers: dict[str, ServerDescriptor] = {}

    def create(self, name: str, directory: str | Path) -> ServerDescriptor:
        """Register a new server bound to an existing directory.

        The directory is resolved to an absolute path immediately. Nothing
        is registered if any check fails.
        """
        if not name:
            raise MissingArgumentError("Server name is required")
        if not directory:
            raise MissingArgumentError("Server directory is required")
        if name in self._servers:
            raise ServerExistsError(
                f"Server '{name}' is already registered",
                details={"name": name},
            )

        path = Path(directory).expanduser().resolve()
        if not path.is_dir():
            raise DirectoryNotFoundError(
                f"Directory does not exist: {path}",
                details={"name": name, "directory": str(path)},
            )

        server = ServerDescriptor(name=name, directory=str(path))
        self._servers[name] = server
        logger.debug("Registered server %s at %s", name, path)
        return server

    def lookup(self, name: str) -> ServerDescriptor | None:
        """Get a server by name. Returns None if not registered."""
        return self._servers.get(name)

    get = lookup

    def list_all(self) -> list[ServerDescriptor]:
        """List all registered servers in registration order."""
        return list(self._servers.values())

    def start(self, server: ServerDescriptor | None) -> ServerDescriptor | None:
        """Mark a server as running."""
        return self._transition(server, ServerStatus.RUNNING)

    def stop(self, server: ServerDescriptor | None) -> ServerDescriptor | None:
        """Mark a server as stopped."""
        return self._transition(server, ServerStatus.STOPPED)

    def _transition(
        self, server: ServerDescriptor | None, status: ServerStatus
    ) -> ServerDescriptor | None:
        registered = self._servers.get(server.name) if server else None
        # Descriptors are owned by the registry that created them.
        if registered is None or registered is not server:
            name = server.name if server else None
            logger.warning("Server %r not found, cannot set status %s", name, status.value)
            return None

        registered.status = status
        logger.info("Server %s is %s", registered.name, status.value)
        return registered

    def __contains__(self, name: str) -> bool:
        return name in self._servers

    def __len__(self) -> int:
        return len(self._servers)
