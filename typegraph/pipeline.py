"""Build the resolved type graph from an OpenAPI document.

Steps, in order:
  1. merge every declared component schema (allOf flattened, refs resolved)
  2. extract the nested inline schemas of each into the named type table
  3. map every table entry to a type definition

Version checking is the caller's job (``loader.validate_openapi_version``).
"""

from __future__ import annotations

import logging
from typing import Any

from .extractor import extract_declared
from .graph import NamedTypeTable, TypeGraph
from .loader import SpecError, get_schemas
from .mapper import map_definition
from .merger import merge_all_of

logger = logging.getLogger(__name__)


def extract_schemas(spec: dict[str, Any]) -> NamedTypeTable:
    """Extract all declared and nested schemas from an OpenAPI document."""
    table = NamedTypeTable()
    declared = get_schemas(spec)

    for name, schema in declared.items():
        table.register(name, merge_all_of(schema, spec))

    for name in declared:
        table.update(extract_declared(name, table[name], spec))

    logger.debug(
        "Extracted %d schemas (%d declared)", len(table), len(declared)
    )
    return table


def build_type_graph(spec: dict[str, Any]) -> TypeGraph:
    """Build the type graph for every schema in the document."""
    table = extract_schemas(spec)
    graph = TypeGraph(schemas=table)

    for name, schema in list(table.items()):
        definition, extra = map_definition(name, schema, spec=spec)
        graph.add(definition)
        for nested in extra:
            if nested.kind == "object" and nested.name not in table:
                raise SpecError(f"Mapped type {nested.name!r} has no extracted schema")
            graph.add(nested)

    logger.debug("Built type graph with %d definitions", len(graph.definitions))
    return graph
