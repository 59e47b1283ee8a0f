"""Canonical type descriptors produced by the mapper.

Descriptors are frozen dataclasses, so two descriptors built from the same
schema compare (and hash) equal. Code emitters walk these instead of raw
schema dicts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum as _Enum
from typing import Any, Union as _Union


class ScalarKind(str, _Enum):
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"


@dataclass(frozen=True)
class Scalar:
    kind: ScalarKind


@dataclass(frozen=True)
class Enum:
    name: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Array:
    element: TypeDescriptor


@dataclass(frozen=True)
class Union:
    variants: tuple[TypeDescriptor, ...]


@dataclass(frozen=True)
class Reference:
    name: str


TypeDescriptor = _Union[Scalar, Enum, Array, Union, Reference]


def dedupe(descriptors: list[TypeDescriptor]) -> tuple[TypeDescriptor, ...]:
    """Drop structural duplicates, keeping first-seen order."""
    seen: list[TypeDescriptor] = []
    for descriptor in descriptors:
        if descriptor not in seen:
            seen.append(descriptor)
    return tuple(seen)


def to_notation(descriptor: TypeDescriptor) -> str:
    """Render a descriptor as a short, language-neutral string.

    Examples: ``string``, ``list[StationLocation]``, ``string | integer``.
    """
    if isinstance(descriptor, Scalar):
        return descriptor.kind.value
    if isinstance(descriptor, (Enum, Reference)):
        return descriptor.name
    if isinstance(descriptor, Array):
        return f"list[{to_notation(descriptor.element)}]"
    if isinstance(descriptor, Union):
        return " | ".join(to_notation(v) for v in descriptor.variants)
    raise TypeError(f"Not a type descriptor: {descriptor!r}")


def to_dict(descriptor: TypeDescriptor) -> dict[str, Any]:
    """Convert a descriptor to a JSON-compatible dict."""
    if isinstance(descriptor, Scalar):
        return {"kind": "scalar", "type": descriptor.kind.value}
    if isinstance(descriptor, Enum):
        return {"kind": "enum", "name": descriptor.name, "values": list(descriptor.values)}
    if isinstance(descriptor, Array):
        return {"kind": "array", "element": to_dict(descriptor.element)}
    if isinstance(descriptor, Union):
        return {"kind": "union", "variants": [to_dict(v) for v in descriptor.variants]}
    if isinstance(descriptor, Reference):
        return {"kind": "reference", "name": descriptor.name}
    raise TypeError(f"Not a type descriptor: {descriptor!r}")
