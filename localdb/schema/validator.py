"""Schema validator — recursive structural check of a record against a schema.

Schemas are a lower bound: a mapping value may carry keys the schema does
not mention. Nodes that do not describe a shape are ``Unconstrained`` and
accept anything.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from localdb.schema.models import (
    ArrayOf,
    ObjectShape,
    SchemaNode,
    TypeTag,
    compile_node,
    kind_of,
)


def validate(schema_node: Any, value: Any) -> bool:
    """Return True when ``value`` conforms to ``schema_node``.

    Args:
        schema_node: A compiled node or a raw schema value.
        value: The record (or part of a record) to check.
    """
    return explain(schema_node, value) is None


def explain(schema_node: Any, value: Any, path: str = "") -> str | None:
    """Return a message for the first mismatch, or None if ``value`` is valid."""
    node = compile_node(schema_node)
    return _check(node, value, path)


def _check(node: SchemaNode, value: Any, path: str) -> str | None:
    if isinstance(node, ArrayOf):
        if not isinstance(value, (list, tuple)):
            return f"{path or '/'}: expected an array, got {_kind_label(value)}"
        for i, item in enumerate(value):
            issue = _check(node.item, item, f"{path}[{i}]")
            if issue:
                return issue
        return None

    if isinstance(node, ObjectShape):
        if not isinstance(value, Mapping):
            return f"{path or '/'}: expected an object, got {_kind_label(value)}"
        for key, child in node.fields:
            if key not in value:
                return f"{path or '/'}: missing required property '{key}'"
            issue = _check(child, value[key], f"{path}.{key}")
            if issue:
                return issue
        return None

    if isinstance(node, TypeTag):
        actual = kind_of(value)
        if actual != node.kind:
            return f"{path or '/'}: expected {node.kind.value}, got {_kind_label(value)}"
        return None

    # Unconstrained
    return None


def _kind_label(value: Any) -> str:
    kind = kind_of(value)
    return kind.value if kind else type(value).__name__
