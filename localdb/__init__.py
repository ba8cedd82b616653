"""localdb — a minimal embedded local data store.

Register named servers bound to directories, validate records against
declarative schemas, and persist them as appended collections on disk.
"""

__version__ = "0.1.0"

from localdb.api import LocalDB
from localdb.greeting import greet
from localdb.schema.models import Schema
from localdb.server.models import ServerDescriptor, ServerStatus

__all__ = [
    "LocalDB",
    "Schema",
    "ServerDescriptor",
    "ServerStatus",
    "greet",
]
