"""Discover inline object schemas that must become named types.

Handles:
- inline objects under properties
- arrays of inline objects (the array adds no name level)
- inline object branches of oneOf/anyOf, including nested unions
- arbitrarily deep nesting, each level named after its immediate parent
"""

from __future__ import annotations

import logging
from typing import Any

from .graph import NamedTypeTable
from .merger import merge_all_of
from .naming import ITEM_FIELD, derive_name, union_branch_names
from .shapes import SchemaShape, classify, union_branches

logger = logging.getLogger(__name__)


def extract_nested(
    schema: dict[str, Any],
    spec: dict[str, Any],
    parent_name: str | None = None,
) -> dict[str, dict[str, Any]]:
    """Extract nested object schemas from a schema's properties.

    Returns name -> resolved schema for every promoted descendant.
    """
    table = NamedTypeTable()
    _walk_properties(schema, spec, parent_name, table)
    return {name: body for name, body in table.items()}


def extract_declared(
    name: str,
    schema: dict[str, Any],
    spec: dict[str, Any],
) -> dict[str, dict[str, Any]]:
    """Extract the nested schemas of one declared component schema.

    Objects are walked property by property. Any other shape (array, union)
    is walked as a single member called ``item``.
    """
    if classify(schema) is SchemaShape.OBJECT:
        return extract_nested(schema, spec, name)
    table = NamedTypeTable()
    _visit(schema, spec, name, ITEM_FIELD, table)
    return {nested: body for nested, body in table.items()}


def _walk_properties(
    schema: dict[str, Any],
    spec: dict[str, Any],
    parent_name: str | None,
    table: NamedTypeTable,
) -> None:
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return
    for field_name, prop in properties.items():
        if _needs_merge(prop):
            prop = merge_all_of(prop, spec)
        _visit(prop, spec, parent_name, field_name, table)


def _needs_merge(node: Any) -> bool:
    return isinstance(node, dict) and "allOf" in node


def _visit(
    node: Any,
    spec: dict[str, Any],
    parent_name: str | None,
    field_name: str,
    table: NamedTypeTable,
) -> None:
    shape = classify(node)

    if shape is SchemaShape.OBJECT:
        _promote(derive_name(parent_name, field_name), node, spec, table)

    elif shape is SchemaShape.ARRAY:
        items = node["items"]
        if _needs_merge(items):
            items = merge_all_of(items, spec)
        _visit(items, spec, parent_name, field_name, table)

    elif shape is SchemaShape.ONE_OF:
        branches = [merge_all_of(b, spec) if _needs_merge(b) else b for b in union_branches(node)]
        names = union_branch_names(parent_name, field_name, branches)
        for index, branch in enumerate(branches):
            if index in names and classify(branch) is SchemaShape.OBJECT:
                _promote(names[index], branch, spec, table)
            elif index not in names:
                _visit(branch, spec, parent_name, field_name, table)


def _promote(
    name: str,
    schema: dict[str, Any],
    spec: dict[str, Any],
    table: NamedTypeTable,
) -> None:
    logger.debug("Promoting nested schema %s", name)
    table.register(name, schema)
    _walk_properties(schema, spec, name, table)
