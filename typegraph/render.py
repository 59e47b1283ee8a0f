"""Render a type graph for downstream consumers.

Markdown catalog via the Jinja2 template in templates/, or plain JSON.
"""

from __future__ import annotations

import json
from pathlib import Path

import jinja2

from .descriptors import to_notation
from .graph import TypeGraph

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["notation"] = to_notation
    return env


def render_catalog(graph: TypeGraph, title: str = "Type catalog") -> str:
    """Render the markdown catalog of every definition in the graph."""
    template = _environment().get_template("catalog.md.j2")
    return template.render(
        title=title,
        objects=graph.objects(),
        enums=graph.enums(),
        aliases=graph.aliases(),
        type_count=len(graph.definitions),
    )


def render_json(graph: TypeGraph) -> str:
    return json.dumps(graph.to_dict(), indent=2) + "\n"


def write_output(content: str, output_path: Path) -> Path:
    """Write rendered output, creating parent directories as needed."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    return output_path
