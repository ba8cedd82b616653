"""Schema data models — named schemas and the compiled node tree.

A raw schema is written with plain Python values:

- a type tag: a zero-argument constructor (``str``, ``int``, ``bool``...)
  or a kind name (``"string"``, ``"number"``...)
- a mapping of field name to raw schema
- a one-element list whose element applies to every array item

``compile_node`` turns a raw schema into an immutable tree of
``TypeTag``, ``ObjectShape``, ``ArrayOf`` and ``Unconstrained`` nodes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class Kind(Enum):
    """Primitive kinds a value can have."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"


# Names accepted in YAML/JSON schemas. "integer" and "float" name the
# number kind, the same as int() and float() do.
KIND_NAMES: dict[str, Kind] = {
    "string": Kind.STRING,
    "str": Kind.STRING,
    "number": Kind.NUMBER,
    "integer": Kind.NUMBER,
    "int": Kind.NUMBER,
    "float": Kind.NUMBER,
    "boolean": Kind.BOOLEAN,
    "bool": Kind.BOOLEAN,
    "null": Kind.NULL,
    "none": Kind.NULL,
    "object": Kind.OBJECT,
    "dict": Kind.OBJECT,
    "array": Kind.ARRAY,
    "list": Kind.ARRAY,
}


def kind_of(value: Any) -> Kind | None:
    """Return the primitive kind of ``value``, or None for unsupported types."""
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, (int, float)):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if value is None:
        return Kind.NULL
    if isinstance(value, Mapping):
        return Kind.OBJECT
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY
    return None


@dataclass(frozen=True)
class TypeTag:
    """Leaf node: the value's kind must equal ``kind``."""

    kind: Kind


@dataclass(frozen=True)
class ObjectShape:
    """Mapping node: every listed field must be present and valid."""

    fields: tuple[tuple[str, SchemaNode], ...] = ()

    def as_dict(self) -> dict[str, SchemaNode]:
        return dict(self.fields)


@dataclass(frozen=True)
class ArrayOf:
    """Array node: every element must validate against ``item``."""

    item: SchemaNode


@dataclass(frozen=True)
class Unconstrained:
    """Any value is accepted.

    Produced for raw schema values that are not a type tag, mapping or
    one-element list.
    """


SchemaNode = Union[TypeTag, ObjectShape, ArrayOf, Unconstrained]

NODE_TYPES = (TypeTag, ObjectShape, ArrayOf, Unconstrained)


def compile_node(raw: Any) -> SchemaNode:
    """Compile a raw schema value into a node tree."""
    if isinstance(raw, NODE_TYPES):
        return raw

    if isinstance(raw, (list, tuple)):
        if len(raw) == 1:
            return ArrayOf(item=compile_node(raw[0]))
        return Unconstrained()

    if isinstance(raw, Mapping):
        return ObjectShape(
            fields=tuple((str(k), compile_node(v)) for k, v in raw.items())
        )

    if isinstance(raw, str):
        kind = KIND_NAMES.get(raw.strip().lower())
        return TypeTag(kind) if kind else Unconstrained()

    if isinstance(raw, Kind):
        return TypeTag(raw)

    if callable(raw):
        kind = _tag_kind(raw)
        return TypeTag(kind) if kind else Unconstrained()

    return Unconstrained()


def _tag_kind(tag) -> Kind | None:
    """Invoke a type tag with no arguments and report the kind it produces."""
    try:
        sample = tag()
    except TypeError:
        # Needs arguments, so it is not a zero-argument type tag.
        return None
    return kind_of(sample)


def describe(node: SchemaNode) -> Any:
    """Render a node tree back into kind names, for display."""
    if isinstance(node, TypeTag):
        return node.kind.value
    if isinstance(node, ObjectShape):
        return {name: describe(child) for name, child in node.fields}
    if isinstance(node, ArrayOf):
        return [describe(node.item)]
    return "any"


@dataclass(frozen=True)
class Schema:
    """A named schema. ``name`` is the key of the stored collection file."""

    name: str
    schema: Any = field(default_factory=dict)

    @property
    def node(self) -> SchemaNode:
        return compile_node(self.schema)
