"""Classify a schema node once, so every consumer agrees on its shape."""

from __future__ import annotations

from enum import Enum
from typing import Any

TEMPORAL_FORMATS = frozenset({"date-time", "date", "time"})

SCALAR_TYPES = frozenset({"string", "integer", "number", "boolean"})


class SchemaShape(str, Enum):
    """Shape of a schema node, checked in this priority order."""

    ONE_OF = "one_of"
    ALL_OF = "all_of"
    OBJECT = "object"
    ENUM = "enum"
    SCALAR = "scalar"
    ARRAY = "array"
    REF = "ref"
    UNRECOGNIZED = "unrecognized"


def schema_types(schema: dict[str, Any]) -> tuple[str, ...]:
    """Return the declared types of a node, ignoring "null"."""
    node_type = schema.get("type")
    if isinstance(node_type, list):
        return tuple(t for t in node_type if isinstance(t, str) and t != "null")
    if isinstance(node_type, str) and node_type != "null":
        return (node_type,)
    return ()


def is_null_schema(schema: Any) -> bool:
    return isinstance(schema, dict) and schema.get("type") == "null"


def _raw_branches(schema: dict[str, Any]) -> list[Any] | None:
    for key in ("oneOf", "anyOf"):
        if isinstance(schema.get(key), list):
            return schema[key]
    return None


def is_nullable(schema: Any) -> bool:
    """Check if a node admits null.

    Covers OpenAPI 3.0 ``nullable``, a 3.1 ``"null"`` type entry, a null
    oneOf/anyOf branch and a None enum value.
    """
    if not isinstance(schema, dict):
        return False
    node_type = schema.get("type")
    if isinstance(node_type, list) and "null" in node_type:
        return True
    if isinstance(schema.get("enum"), list) and None in schema["enum"]:
        return True
    branches = _raw_branches(schema)
    if branches and any(is_null_schema(b) for b in branches):
        return True
    return schema.get("nullable") is True


def union_branches(schema: dict[str, Any]) -> list[Any]:
    """Return the non-null alternatives of a oneOf/anyOf or multi-type node."""
    branches = _raw_branches(schema)
    if branches is None:
        branches = [{**schema, "type": t} for t in schema_types(schema)]
    return [b for b in branches if not is_null_schema(b)]


def is_named_branch(schema: Any) -> bool:
    """True for union branches that become their own named definition."""
    return classify(schema) in (SchemaShape.OBJECT, SchemaShape.ENUM)


def classify(schema: Any) -> SchemaShape:
    """Classify one schema node."""
    if not isinstance(schema, dict) or not schema:
        return SchemaShape.UNRECOGNIZED
    if isinstance(schema.get("oneOf"), list) or isinstance(schema.get("anyOf"), list):
        return SchemaShape.ONE_OF
    if "allOf" in schema:
        return SchemaShape.ALL_OF

    types = schema_types(schema)
    if len(types) > 1:
        return SchemaShape.ONE_OF
    kind = types[0] if types else None

    if kind in (None, "object") and isinstance(schema.get("properties"), dict):
        return SchemaShape.OBJECT
    if (
        kind in (None, "string")
        and isinstance(schema.get("enum"), list)
        and schema.get("format") not in TEMPORAL_FORMATS
    ):
        return SchemaShape.ENUM
    if kind in SCALAR_TYPES:
        return SchemaShape.SCALAR
    if kind == "array" and isinstance(schema.get("items"), dict):
        return SchemaShape.ARRAY
    if isinstance(schema.get("$ref"), str):
        return SchemaShape.REF
    return SchemaShape.UNRECOGNIZED
