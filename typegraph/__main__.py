"""Entry point: python -m typegraph path/to/openapi.yaml

Resolves the document's component schemas and prints the type catalog.
"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
