"""Record store data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ReadStatus(Enum):
    """Outcome of loading a stored collection."""

    EMPTY = "empty"  # No file, or an empty file
    CORRUPT = "corrupt"  # File present but unparseable
    DATA = "data"  # Parsed collection


@dataclass
class ReadResult:
    """Tagged result of loading a stored collection."""

    status: ReadStatus
    records: list[Any] = field(default_factory=list)
    reason: str = ""
    path: str = ""

    @classmethod
    def empty(cls, path: str = "") -> ReadResult:
        return cls(status=ReadStatus.EMPTY, path=path)

    @classmethod
    def corrupt(cls, reason: str, path: str = "") -> ReadResult:
        return cls(status=ReadStatus.CORRUPT, reason=reason, path=path)

    @classmethod
    def data(cls, records: list[Any], path: str = "") -> ReadResult:
        return cls(status=ReadStatus.DATA, records=records, path=path)

    @property
    def is_corrupt(self) -> bool:
        return self.status == ReadStatus.CORRUPT
