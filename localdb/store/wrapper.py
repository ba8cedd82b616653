"""Wrapper format — the on-disk envelope around a stored collection.

Collections are stored as small source-like files::

    const data = [ ...JSON array... ];

    module.exports = data;

The delimiters are kept byte-for-byte so existing stores stay readable.
"""

from __future__ import annotations

import json
import re
from typing import Any

FILE_EXTENSION = "js"

PREFIX = "const data = "
SUFFIX = "module.exports = data;"

_WRAPPER_RE = re.compile(
    r"\A\s*const data = (?P<body>.*?);\s*module\.exports = data;\s*\Z",
    re.DOTALL,
)


class WrapperFormatError(ValueError):
    """Text does not match the wrapper shape or does not hold a JSON array."""


def parse(text: str) -> list[Any]:
    """Extract the stored collection from wrapper text.

    Empty or whitespace-only text is an empty collection.

    Raises:
        WrapperFormatError: If the text is not a well-formed wrapper.
    """
    if not text.strip():
        return []

    match = _WRAPPER_RE.match(text)
    if match is None:
        raise WrapperFormatError("content does not match the 'const data = ...;' wrapper")

    try:
        data = json.loads(match.group("body"))
    except json.JSONDecodeError as e:
        raise WrapperFormatError(f"invalid JSON array: {e}") from e

    if not isinstance(data, list):
        raise WrapperFormatError(
            f"expected a JSON array, got {type(data).__name__}"
        )
    return data


def dump(records: list[Any]) -> str:
    """Serialize a collection into wrapper text."""
    body = json.dumps(list(records), indent=2, ensure_ascii=False)
    return f"{PREFIX}{body};\n\n{SUFFIX}\n"
