"""Flatten allOf composition into single schemas.

Branches are folded left to right onto the parent schema (minus its
``allOf``) with ``deep_merge_schemas``. The merge is last-writer-wins except
for ``properties`` (merged map-wise, recursively) and ``required``
(accumulated as a union).

After the fold, ``properties``, ``items`` and ``oneOf``/``anyOf`` branches
are resolved in the same pass:
  - ``$ref`` to a declared component schema  -> kept, maps to a named type
  - ``$ref`` to any other local node         -> inlined and merged
  - dangling ``$ref``                        -> ``{}`` (logged)
  - inline schema                            -> merged recursively
"""

from __future__ import annotations

import logging
from typing import Any

from .resolver import CircularReferenceError, is_schema_ref, resolve_ref

logger = logging.getLogger(__name__)

# Upper bound on allOf re-merge passes for one node
MAX_MERGE_PASSES = 32

_BRANCH_KEYS = ("oneOf", "anyOf")


def _unique(values: list[Any]) -> list[Any]:
    result: list[Any] = []
    for value in values:
        if value not in result:
            result.append(value)
    return result


def deep_merge_schemas(base: dict[str, Any], incoming: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two schemas, handling properties and required specially."""
    merged = dict(base)
    for key, value in incoming.items():
        if key not in merged:
            merged[key] = value
            continue

        current = merged[key]
        if key == "properties" and isinstance(current, dict) and isinstance(value, dict):
            props = dict(current)
            for name, prop in value.items():
                if isinstance(props.get(name), dict) and isinstance(prop, dict):
                    props[name] = deep_merge_schemas(props[name], prop)
                else:
                    props[name] = prop
            merged[key] = props
        elif key == "required" and isinstance(current, list) and isinstance(value, list):
            merged[key] = _unique(current + value)
        else:
            merged[key] = value
    return merged


def merge_all_of(
    schema: Any,
    spec: dict[str, Any],
    _active: frozenset[str] = frozenset(),
) -> dict[str, Any]:
    """Resolve and merge all allOf references in a schema.

    The result never carries ``$ref`` or ``allOf`` at its top level.
    """
    if not isinstance(schema, dict):
        return {}
    if "$ref" in schema:
        return _merge_ref(schema["$ref"], spec, _active)

    merged = schema
    passes = 0
    while "allOf" in merged:
        passes += 1
        if passes > MAX_MERGE_PASSES:
            raise CircularReferenceError(
                f"allOf did not settle after {MAX_MERGE_PASSES} passes"
            )
        branches = merged.get("allOf") or []
        accumulator = {k: v for k, v in merged.items() if k != "allOf"}
        for branch in branches:
            resolved = _resolve_branch(branch, spec, _active)
            if resolved:
                accumulator = deep_merge_schemas(accumulator, resolved)
        merged = accumulator

    return _resolve_members(merged, spec, _active)


def _merge_ref(ref: str, spec: dict[str, Any], active: frozenset[str]) -> dict[str, Any]:
    if ref in active:
        raise CircularReferenceError(f"Circular composition through {ref}")
    target = resolve_ref(spec, ref)
    if not isinstance(target, dict):
        logger.warning("Unresolvable reference %s, substituting an empty schema", ref)
        return {}
    return merge_all_of(target, spec, active | {ref})


def _resolve_branch(branch: Any, spec: dict[str, Any], active: frozenset[str]) -> dict[str, Any]:
    if not isinstance(branch, dict):
        return {}
    if "$ref" in branch:
        return _merge_ref(branch["$ref"], spec, active)
    if "allOf" in branch:
        return merge_all_of(branch, spec, active)
    return branch


def _resolve_member(node: Any, spec: dict[str, Any], active: frozenset[str]) -> Any:
    if not isinstance(node, dict):
        return node
    if "$ref" in node:
        if is_schema_ref(spec, node["$ref"]):
            return node
        return _merge_ref(node["$ref"], spec, active)
    return merge_all_of(node, spec, active)


def _resolve_members(
    schema: dict[str, Any], spec: dict[str, Any], active: frozenset[str]
) -> dict[str, Any]:
    resolved = dict(schema)

    properties = schema.get("properties")
    if isinstance(properties, dict):
        resolved["properties"] = {
            name: _resolve_member(prop, spec, active) for name, prop in properties.items()
        }

    if isinstance(schema.get("items"), dict):
        resolved["items"] = _resolve_member(schema["items"], spec, active)

    for key in _BRANCH_KEYS:
        if isinstance(schema.get(key), list):
            resolved[key] = [_resolve_member(branch, spec, active) for branch in schema[key]]

    return resolved
