"""Schemas — declarative record shapes and the validator that checks them."""

from localdb.schema.models import Schema, compile_node
from localdb.schema.validator import explain, validate

__all__ = ["Schema", "compile_node", "explain", "validate"]
