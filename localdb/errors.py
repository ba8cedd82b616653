"""
Exception hierarchy for localdb.

All errors inherit from LocalDBError so callers can catch broadly or
narrowly as needed. Each exception carries structured context in
``details`` for logging/debugging.
"""

from __future__ import annotations


class LocalDBError(Exception):
    """Base exception for all localdb errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class ArgumentError(LocalDBError):
    """A required input is missing or malformed. Raised before any I/O."""
    pass


class MissingArgumentError(ArgumentError):
    """A required argument was not supplied."""
    pass


class InvalidArgumentError(ArgumentError):
    """An argument was supplied but cannot be used."""
    pass


class SchemaMismatchError(LocalDBError):
    """A record does not conform to its schema."""

    def __init__(self, message: str, *, schema_name: str = "", **kwargs) -> None:
        self.schema_name = schema_name
        super().__init__(message, **kwargs)


class PersistError(LocalDBError):
    """Writing a stored collection to disk failed."""

    def __init__(self, message: str, *, path: str = "", **kwargs) -> None:
        self.path = path
        super().__init__(message, **kwargs)


class RegistryError(LocalDBError):
    """A server could not be registered."""
    pass


class ServerExistsError(RegistryError):
    """A server with the same name is already registered."""
    pass


class DirectoryNotFoundError(RegistryError):
    """The directory a server is bound to does not exist."""
    pass


class ConfigError(LocalDBError):
    """The project configuration file could not be loaded."""
    pass
