"""Containers for one generation run: the named type table and the graph."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .descriptors import TypeDescriptor, to_dict, to_notation
from .loader import SpecError


class NameCollisionError(SpecError):
    """Raised when two different schemas derive the same type name."""


class NamedTypeTable:
    """Ordered name -> resolved schema mapping with collision detection."""

    def __init__(self) -> None:
        self._schemas: dict[str, dict[str, Any]] = {}

    def register(self, name: str, schema: dict[str, Any]) -> None:
        """Add a schema under a name.

        Registering an identical body again is a no-op; a different body
        under a taken name raises NameCollisionError.
        """
        existing = self._schemas.get(name)
        if existing is None:
            self._schemas[name] = schema
        elif existing != schema:
            raise NameCollisionError(f"Type name {name!r} derived for two different schemas")

    def update(self, schemas: dict[str, dict[str, Any]]) -> None:
        for name, schema in schemas.items():
            self.register(name, schema)

    def __getitem__(self, name: str) -> dict[str, Any]:
        return self._schemas[name]

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def items(self):
        return self._schemas.items()

    def names(self) -> list[str]:
        return list(self._schemas)


@dataclass(frozen=True)
class Attribute:
    name: str
    type: TypeDescriptor
    required: bool = False
    nullable: bool = False
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": to_dict(self.type),
            "notation": to_notation(self.type),
            "required": self.required,
            "nullable": self.nullable,
            "description": self.description,
        }


@dataclass(frozen=True)
class TypeDefinition:
    """One type to emit: an object resource, an enum, or an alias."""

    name: str
    kind: str
    attributes: tuple[Attribute, ...] = ()
    values: tuple[Any, ...] = ()
    target: TypeDescriptor | None = None
    title: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "kind": self.kind}
        if self.title:
            data["title"] = self.title
        if self.description:
            data["description"] = self.description
        if self.kind == "object":
            data["attributes"] = [a.to_dict() for a in self.attributes]
        elif self.kind == "enum":
            data["values"] = list(self.values)
        elif self.target is not None:
            data["target"] = to_dict(self.target)
            data["notation"] = to_notation(self.target)
        return data


@dataclass
class TypeGraph:
    """The resolved type graph handed to code emission."""

    schemas: NamedTypeTable
    definitions: dict[str, TypeDefinition] = field(default_factory=dict)

    def add(self, definition: TypeDefinition) -> None:
        existing = self.definitions.get(definition.name)
        if existing is None:
            self.definitions[definition.name] = definition
        elif existing != definition:
            raise NameCollisionError(
                f"Type name {definition.name!r} derived for two different definitions"
            )

    def objects(self) -> list[TypeDefinition]:
        return [d for d in self.definitions.values() if d.kind == "object"]

    def enums(self) -> list[TypeDefinition]:
        return [d for d in self.definitions.values() if d.kind == "enum"]

    def aliases(self) -> list[TypeDefinition]:
        return [d for d in self.definitions.values() if d.kind == "alias"]

    def to_dict(self) -> dict[str, Any]:
        return {"types": [d.to_dict() for d in self.definitions.values()]}
