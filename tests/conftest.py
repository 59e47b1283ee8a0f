"""Shared fixtures for the type graph tests.

The train travel document in fixtures/openapi.yaml covers nested objects,
arrays of objects, enums, allOf composition, oneOf unions and aliases.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from typegraph.loader import load_spec

FIXTURES_DIR = Path(__file__).parent / "fixtures"
TRAIN_SPEC_PATH = FIXTURES_DIR / "openapi.yaml"


@pytest.fixture
def train_spec_path() -> Path:
    return TRAIN_SPEC_PATH


@pytest.fixture
def train_spec() -> dict[str, Any]:
    """Fresh copy of the train travel document for each test."""
    return load_spec(TRAIN_SPEC_PATH)


def make_spec(schemas: dict[str, Any]) -> dict[str, Any]:
    """Wrap component schemas in a minimal OpenAPI 3 document."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Test", "version": "1.0.0"},
        "components": {"schemas": schemas},
    }
