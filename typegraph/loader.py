"""Load an OpenAPI document and check that the engine can handle it.

Reads a JSON or YAML file into a plain dict. The engine never mutates the
returned document.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

_YAML_SUFFIXES = {".yaml", ".yml"}


class SpecError(Exception):
    """Raised when a spec document cannot be loaded or processed."""


def load_spec(path: str | Path) -> dict[str, Any]:
    """Load the OpenAPI spec from disk."""
    spec_file = Path(path)
    suffix = spec_file.suffix.lower()
    if suffix != ".json" and suffix not in _YAML_SUFFIXES:
        raise SpecError(
            f"Unsupported file format {suffix or '(none)'!r}. Please use .json, .yml, or .yaml"
        )

    try:
        with open(spec_file, encoding="utf-8") as f:
            if suffix == ".json":
                spec = json.load(f)
            else:
                spec = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise SpecError(f"Spec file not found: {spec_file}") from exc
    except json.JSONDecodeError as exc:
        raise SpecError(f"Invalid JSON in {spec_file}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SpecError(f"Invalid YAML in {spec_file}: {exc}") from exc

    if not isinstance(spec, dict):
        raise SpecError(f"Spec root must be a mapping, got {type(spec).__name__}")
    return spec


def validate_openapi_version(spec: dict[str, Any]) -> None:
    """Reject anything that is not an OpenAPI 3.x document."""
    version = spec.get("openapi")
    if not isinstance(version, str) or not version.startswith("3."):
        raise SpecError(
            f"Only OpenAPI 3.x documents are supported (found version {version!r})"
        )


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    components = spec.get("components") or {}
    return components.get("schemas") or {}
