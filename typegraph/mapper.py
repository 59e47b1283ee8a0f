"""Map resolved schemas to canonical type descriptors.

Handles:
- oneOf/anyOf and multi-type nodes -> Union (duplicates dropped, first-seen order)
- inline objects -> Reference, plus the object's definition as a side effect
- string enums -> Enum, plus the enum's definition as a side effect
- date-time/date/time formats, integer, number, boolean
- arrays (the array adds no naming level)
- $ref -> Reference to the declared schema
- anything else -> string

Side-effect definitions are returned to the caller, never registered here.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable
from typing import Any

from .descriptors import (
    Array,
    Enum,
    Reference,
    Scalar,
    ScalarKind,
    TypeDescriptor,
    Union,
    dedupe,
)
from .graph import Attribute, TypeDefinition
from .merger import merge_all_of
from .naming import ITEM_FIELD, derive_name, union_branch_names
from .resolver import ref_name
from .shapes import SchemaShape, classify, is_nullable, schema_types, union_branches

logger = logging.getLogger(__name__)

MapResult = tuple[TypeDescriptor, list[TypeDefinition]]

_FORMAT_KINDS: dict[str, ScalarKind] = {
    "date-time": ScalarKind.DATETIME,
    "date": ScalarKind.DATE,
    "time": ScalarKind.TIME,
}

_TYPE_KINDS: dict[str, ScalarKind] = {
    "string": ScalarKind.STRING,
    "integer": ScalarKind.INTEGER,
    "number": ScalarKind.DECIMAL,
    "boolean": ScalarKind.BOOLEAN,
}


def _anonymous_name(schema: dict[str, Any]) -> str:
    """Name an object reached without any field context, from its content."""
    digest = hashlib.sha1(
        json.dumps(schema, sort_keys=True, default=str).encode("utf-8")
    ).hexdigest()
    return f"Anonymous{digest[:8]}"


def _type_name(parent_name: str | None, property_name: str | None, schema: dict[str, Any]) -> str:
    if property_name:
        return derive_name(parent_name, property_name)
    return parent_name or _anonymous_name(schema)


def _description(schema: Any) -> str | None:
    if isinstance(schema, dict) and isinstance(schema.get("description"), str):
        return schema["description"]
    return None


def _prepare(schema: Any, spec: dict[str, Any] | None) -> Any:
    if spec is not None and isinstance(schema, dict) and "allOf" in schema:
        return merge_all_of(schema, spec)
    return schema


def map_type(
    schema: Any,
    parent_name: str | None = None,
    property_name: str | None = None,
    *,
    spec: dict[str, Any] | None = None,
) -> MapResult:
    """Map one schema node to a descriptor and any definitions it requires."""
    schema = _prepare(schema, spec)
    handler = _HANDLERS.get(classify(schema), _map_fallback)
    return handler(schema, parent_name, property_name, spec)


def _map_union(schema, parent_name, property_name, spec) -> MapResult:
    branches = [_prepare(b, spec) for b in union_branches(schema)]
    names = union_branch_names(parent_name, property_name or "", branches)

    variants: list[TypeDescriptor] = []
    definitions: list[TypeDefinition] = []
    for index, branch in enumerate(branches):
        if index in names and classify(branch) is SchemaShape.ENUM:
            definition = _enum_definition(names[index], branch)
            variants.append(Enum(definition.name, definition.values))
            definitions.append(definition)
        elif index in names:
            definition, nested = map_object(names[index], branch, spec=spec)
            variants.append(Reference(names[index]))
            definitions.extend([definition, *nested])
        else:
            descriptor, extra = map_type(branch, parent_name, property_name, spec=spec)
            variants.append(descriptor)
            definitions.extend(extra)

    unique = dedupe(variants)
    if not unique:
        return Scalar(ScalarKind.STRING), definitions
    # A lone variant left over from dropping null branches is just nullable
    if len(unique) == 1 and is_nullable(schema):
        return unique[0], definitions
    return Union(unique), definitions


def _map_object(schema, parent_name, property_name, spec) -> MapResult:
    name = _type_name(parent_name, property_name, schema)
    definition, nested = map_object(name, schema, spec=spec)
    return Reference(name), [definition, *nested]


def _enum_definition(name: str, schema: dict[str, Any]) -> TypeDefinition:
    return TypeDefinition(
        name=name,
        kind="enum",
        values=tuple(v for v in schema["enum"] if v is not None),
        title=schema.get("title"),
        description=_description(schema),
    )


def _map_enum(schema, parent_name, property_name, spec) -> MapResult:
    definition = _enum_definition(_type_name(parent_name, property_name, schema), schema)
    return Enum(definition.name, definition.values), [definition]


def _map_scalar(schema, parent_name, property_name, spec) -> MapResult:
    kind = schema_types(schema)[0]
    if kind == "string":
        return Scalar(_FORMAT_KINDS.get(schema.get("format"), ScalarKind.STRING)), []
    return Scalar(_TYPE_KINDS[kind]), []


def _map_array(schema, parent_name, property_name, spec) -> MapResult:
    element, definitions = map_type(schema["items"], parent_name, property_name, spec=spec)
    return Array(element), definitions


def _map_ref(schema, parent_name, property_name, spec) -> MapResult:
    return Reference(ref_name(schema["$ref"])), []


def _map_fallback(schema, parent_name, property_name, spec) -> MapResult:
    logger.debug(
        "No mapping for %s.%s, falling back to string", parent_name, property_name
    )
    return Scalar(ScalarKind.STRING), []


_HANDLERS: dict[SchemaShape, Callable[..., MapResult]] = {
    SchemaShape.ONE_OF: _map_union,
    SchemaShape.OBJECT: _map_object,
    SchemaShape.ENUM: _map_enum,
    SchemaShape.SCALAR: _map_scalar,
    SchemaShape.ARRAY: _map_array,
    SchemaShape.REF: _map_ref,
}


def map_object(
    name: str,
    schema: dict[str, Any],
    *,
    spec: dict[str, Any] | None = None,
) -> tuple[TypeDefinition, list[TypeDefinition]]:
    """Map an object schema's properties into a definition named ``name``."""
    required = set(schema.get("required") or [])
    attributes: list[Attribute] = []
    definitions: list[TypeDefinition] = []

    for prop_name, prop in (schema.get("properties") or {}).items():
        descriptor, extra = map_type(prop, name, prop_name, spec=spec)
        attributes.append(Attribute(
            name=prop_name,
            type=descriptor,
            required=prop_name in required,
            nullable=is_nullable(prop),
            description=_description(prop),
        ))
        definitions.extend(extra)

    definition = TypeDefinition(
        name=name,
        kind="object",
        attributes=tuple(attributes),
        title=schema.get("title"),
        description=_description(schema),
    )
    return definition, definitions


def map_definition(
    name: str,
    schema: dict[str, Any],
    *,
    spec: dict[str, Any] | None = None,
) -> tuple[TypeDefinition, list[TypeDefinition]]:
    """Map one named-table entry to its definition.

    Objects become object definitions, string enums become enum definitions,
    anything else an alias of its mapped descriptor. Inline objects inside an
    alias are named ``{name}Item``.
    """
    shape = classify(schema)
    if shape is SchemaShape.OBJECT:
        return map_object(name, schema, spec=spec)
    if shape is SchemaShape.ENUM:
        return _enum_definition(name, schema), []

    target, definitions = map_type(schema, name, ITEM_FIELD, spec=spec)
    definition = TypeDefinition(
        name=name,
        kind="alias",
        target=target,
        title=schema.get("title"),
        description=_description(schema),
    )
    return definition, definitions
