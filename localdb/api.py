"""LocalDB facade — one registry plus one record store behind a single object.

Every ``LocalDB`` owns its own registry, so independent instances never
see each other's servers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from localdb.greeting import greet
from localdb.schema.models import Schema
from localdb.schema.validator import validate
from localdb.server.models import ServerDescriptor
from localdb.server.registry import ServerRegistry
from localdb.store.models import ReadResult
from localdb.store.record_store import RecordStore


class LocalDB:
    """Public operations surface of the store."""

    def __init__(
        self,
        registry: Optional[ServerRegistry] = None,
        store: Optional[RecordStore] = None,
    ) -> None:
        self.registry = registry or ServerRegistry()
        self.store = store or RecordStore()

    greet = staticmethod(greet)

    # -- Servers ---------------------------------------------------------

    def create_server(self, name: str, directory: str | Path) -> ServerDescriptor:
        return self.registry.create(name, directory)

    def get_server(self, name: str) -> ServerDescriptor | None:
        return self.registry.lookup(name)

    def list_servers(self) -> list[ServerDescriptor]:
        return self.registry.list_all()

    def start_server(self, server: ServerDescriptor | None) -> ServerDescriptor | None:
        return self.registry.start(server)

    def stop_server(self, server: ServerDescriptor | None) -> ServerDescriptor | None:
        return self.registry.stop(server)

    # -- Records ---------------------------------------------------------

    def save_record(
        self, server: ServerDescriptor | None, schema: Schema | None, data: Any
    ) -> None:
        self.store.save(server, schema, data)

    def read_records(
        self, server: ServerDescriptor | None, schema: Schema | None
    ) -> list[Any] | None:
        return self.store.read(server, schema)

    def load_records(
        self, server: ServerDescriptor | None, schema: Schema | None
    ) -> ReadResult | None:
        return self.store.load(server, schema)

    @staticmethod
    def validate(schema: Schema | Any, data: Any) -> bool:
        """Check ``data`` against a ``Schema`` or a raw schema value."""
        node = schema.node if isinstance(schema, Schema) else schema
        return validate(node, data)
