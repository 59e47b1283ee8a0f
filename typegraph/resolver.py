"""Resolve local $ref pointers against a spec document.

Only same-document fragments (``#/components/schemas/Station``) are
supported. A pointer that leads nowhere resolves to None; callers decide
how to substitute for it.
"""

from __future__ import annotations

from typing import Any

from .loader import SpecError

SCHEMA_REF_PREFIX = "#/components/schemas/"


class UnsupportedReferenceError(SpecError):
    """Raised for $ref values pointing outside the current document."""


class CircularReferenceError(SpecError):
    """Raised when a chain of $ref or allOf links loops back on itself."""


def is_local_ref(ref: Any) -> bool:
    """Check if a $ref value is a same-document fragment."""
    return isinstance(ref, str) and (ref == "#" or ref.startswith("#/"))


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def resolve_ref(spec: dict[str, Any], ref: str) -> Any | None:
    """Resolve a $ref pointer in the spec.

    Returns None when any segment is missing or the walk hits a non-mapping.
    """
    if not is_local_ref(ref):
        raise UnsupportedReferenceError(f"Only local references are supported: {ref!r}")

    node: Any = spec
    for part in ref[1:].split("/")[1:]:
        if not isinstance(node, dict):
            return None
        key = _unescape(part)
        if key not in node:
            return None
        node = node[key]
    return node


def ref_name(ref: str) -> str:
    """Return the last path segment of a $ref, used as the type name."""
    return _unescape(ref.rsplit("/", 1)[-1])


def is_schema_ref(spec: dict[str, Any], ref: Any) -> bool:
    """Check if a $ref names an existing entry of components.schemas."""
    if not isinstance(ref, str) or not ref.startswith(SCHEMA_REF_PREFIX):
        return False
    tail = ref[len(SCHEMA_REF_PREFIX):]
    return "/" not in tail and isinstance(resolve_ref(spec, ref), dict)
