"""Server data models — descriptors and lifecycle status."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ServerStatus(Enum):
    """Lifecycle of a server: init -> running -> stopped."""

    INIT = "init"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class ServerDescriptor:
    """A named logical database bound to a directory."""

    name: str
    directory: str  # Absolute path
    status: ServerStatus = ServerStatus.INIT
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def is_running(self) -> bool:
        return self.status == ServerStatus.RUNNING
