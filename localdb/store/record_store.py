"""Record store — validated, append-only collections persisted per schema.

Each (server, schema) pair maps to one file,
``<server.directory>/<schema.name>.js``, holding the full collection in
the wrapper format. Saving is read-modify-rewrite: the existing
collection is loaded, the record appended, and the whole file replaced.

Writes are serialized per file within a process and land through a
temporary file plus ``os.replace``, so a failed write never leaves a
half-written collection behind. Separate processes are not coordinated.
"""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

from localdb.errors import (
    InvalidArgumentError,
    MissingArgumentError,
    PersistError,
    SchemaMismatchError,
)
from localdb.schema.models import Schema
from localdb.schema.validator import explain
from localdb.server.models import ServerDescriptor
from localdb.store import wrapper
from localdb.store.models import ReadResult
from localdb.utils.logger import get_logger

logger = get_logger(__name__)


class RecordStore:
    """Saves and reads stored collections for running servers."""

    def __init__(self) -> None:
        # One lock per path written, kept for the store's lifetime.
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def save(
        self,
        server: Optional[ServerDescriptor],
        schema: Optional[Schema],
        data: Any,
    ) -> None:
        """Validate ``data`` against ``schema`` and append it to the collection.

        Does nothing (beyond a warning) if the server is not running.

        Records are stored as JSON: tuples read back as lists and mapping
        keys read back as strings.

        Raises:
            MissingArgumentError: server, server name, schema or data missing.
            InvalidArgumentError: schema name is not a plain file name.
            SchemaMismatchError: data does not conform to the schema.
            PersistError: the collection could not be written.
        """
        _check_arguments(server, schema)
        if data is None:
            raise MissingArgumentError("Data is required")

        if not server.is_running:
            logger.warning(
                "Server %s is not running (status: %s), record not saved",
                server.name,
                server.status.value,
            )
            return

        issue = explain(schema.node, data)
        if issue is not None:
            raise SchemaMismatchError(
                f"Data does not match schema '{schema.name}': {issue}",
                schema_name=schema.name,
                details={"server": server.name, "issue": issue},
            )

        directory = Path(server.directory)
        path = collection_path(server, schema)

        with self._lock_for(path):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise PersistError(
                    f"Could not create directory {directory}: {e}",
                    path=str(path),
                ) from e

            current = self._load_path(path)
            if current.is_corrupt:
                logger.warning(
                    "Stored collection %s is unreadable (%s), starting a new one",
                    path,
                    current.reason,
                )
            records = current.records + [data]
            self._write(path, records)

        logger.debug("Saved record #%d to %s", len(records), path)

    def read(
        self,
        server: Optional[ServerDescriptor],
        schema: Optional[Schema],
    ) -> list[Any] | None:
        """Return every stored record for the pair, oldest first.

        Returns None if the server is not running, and an empty list when
        nothing is stored yet or the stored file is corrupt.
        """
        result = self.load(server, schema)
        if result is None:
            return None
        return result.records

    def load(
        self,
        server: Optional[ServerDescriptor],
        schema: Optional[Schema],
    ) -> ReadResult | None:
        """Like ``read`` but keeps empty, corrupt and data outcomes apart."""
        _check_arguments(server, schema)

        if not server.is_running:
            logger.warning(
                "Server %s is not running (status: %s), nothing read",
                server.name,
                server.status.value,
            )
            return None

        path = collection_path(server, schema)
        result = self._load_path(path)
        if result.is_corrupt:
            logger.warning("Stored collection %s is corrupt: %s", path, result.reason)
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lock_for(self, path: Path) -> threading.Lock:
        key = str(path)
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def _load_path(self, path: Path) -> ReadResult:
        if not path.exists():
            return ReadResult.empty(str(path))

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return ReadResult.corrupt(str(e), str(path))

        try:
            records = wrapper.parse(text)
        except wrapper.WrapperFormatError as e:
            return ReadResult.corrupt(str(e), str(path))

        if not records:
            return ReadResult.empty(str(path))
        return ReadResult.data(records, str(path))

    def _write(self, path: Path, records: list[Any]) -> None:
        try:
            text = wrapper.dump(records)
        except (TypeError, ValueError) as e:
            raise PersistError(
                f"Records for {path.name} are not JSON serializable: {e}",
                path=str(path),
            ) from e

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistError(f"Could not write {path}: {e}", path=str(path)) from e


def collection_path(server: ServerDescriptor, schema: Schema) -> Path:
    """Path of the file holding the collection for a (server, schema) pair."""
    return Path(server.directory) / f"{schema.name}.{wrapper.FILE_EXTENSION}"


def _check_arguments(
    server: Optional[ServerDescriptor], schema: Optional[Schema]
) -> None:
    if server is None:
        raise MissingArgumentError("Server is required")
    if not getattr(server, "name", None):
        raise MissingArgumentError("Server name is required")
    if schema is None:
        raise MissingArgumentError("Schema is required")
    if not getattr(schema, "name", None):
        raise MissingArgumentError("Schema name is required")

    name = schema.name
    if name in (".", "..") or any(c in name for c in ("/", "\\", os.sep, "\0")):
        raise InvalidArgumentError(
            f"Schema name '{name}' must be a plain file name",
            details={"schema": name},
        )
