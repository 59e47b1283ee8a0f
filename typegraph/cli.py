"""Command line interface entry point."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from .loader import SpecError, load_spec, validate_openapi_version
from .pipeline import build_type_graph
from .render import render_catalog, render_json, write_output

LOG_LEVEL_ENV = "TYPEGRAPH_LOG_LEVEL"


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("spec_file", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["markdown", "json"], case_sensitive=False),
    default="markdown",
    show_default=True,
    help="Output format of the type catalog",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="File to write instead of stdout",
)
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details to stderr")
def cli(spec_file: Path, output_format: str, output_path: Path | None, verbose: bool) -> None:
    """Resolve the schemas of an OpenAPI 3.x document into a named type graph."""
    _configure_logging(verbose)

    spec = load_spec(spec_file)
    validate_openapi_version(spec)
    graph = build_type_graph(spec)

    if output_format.lower() == "json":
        content = render_json(graph)
    else:
        title = (spec.get("info") or {}).get("title") or "Type catalog"
        content = render_catalog(graph, title=title)

    if output_path is None:
        click.echo(content, nl=False)
        return
    written = write_output(content, output_path)
    click.echo(f"Generated {written} ({len(graph.definitions)} types)", err=True)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except SpecError as exc:
        click.echo(f"Error: {exc}", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
