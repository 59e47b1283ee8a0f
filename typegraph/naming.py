"""Derive type names for nested schemas.

Pattern: {Parent}{Field}, field camelized and singularized
  - Station.location        -> StationLocation
  - Station.platforms[]     -> StationPlatform
  - Trip.stops[].platforms  -> TripStopPlatform
  - (no parent) platforms   -> Platform

The extractor and the mapper both call ``derive_name`` with the same
(parent, field) pair, so a promoted schema and the reference that points
at it always carry the same name.
"""

from __future__ import annotations

import re
from typing import Any

from .shapes import is_named_branch

# Field name used for anonymous members of a non-object declared schema
ITEM_FIELD = "item"

# Stands in for a field name with no usable characters, and prefixes
# names that would otherwise start with a digit
FALLBACK_FIELD = "Field"


def camelize(name: str) -> str:
    """Convert snake_case, kebab-case or dotted names to PascalCase.

    Existing capitals inside a piece are kept: ``departureTime`` becomes
    ``DepartureTime``.
    """
    pieces = [p for p in re.split(r"[^0-9A-Za-z]+", name) if p]
    return "".join(p[0].upper() + p[1:] for p in pieces)


def singularize(word: str) -> str:
    """Strip a single trailing plural 's' from a word.

    Words ending in ``ss`` are not plurals and are left alone.
    """
    if word.lower().endswith("s") and not word.lower().endswith("ss"):
        return word[:-1]
    return word


def derive_name(parent_name: str | None, field_name: str) -> str:
    """Build a type name from an optional parent name and a field name."""
    field_part = singularize(camelize(field_name)) or FALLBACK_FIELD
    name = f"{parent_name}{field_part}" if parent_name else field_part
    if name[0].isdigit():
        return f"{FALLBACK_FIELD}{name}"
    return name


def union_branch_names(
    parent_name: str | None,
    field_name: str,
    branches: list[Any],
) -> dict[int, str]:
    """Name the inline object and enum branches of a oneOf/anyOf field.

    Returns branch index -> name. A single named branch takes the plain
    derived name; several are told apart by their ``title`` or, failing
    that, by their 1-based position among the named branches.
    """
    base = derive_name(parent_name, field_name)
    positions = [i for i, branch in enumerate(branches) if is_named_branch(branch)]
    if len(positions) == 1:
        return {positions[0]: base}

    names: dict[int, str] = {}
    for ordinal, index in enumerate(positions, start=1):
        title = branches[index].get("title")
        suffix = camelize(title) if isinstance(title, str) and camelize(title) else str(ordinal)
        names[index] = f"{base}{suffix}"
    return names
