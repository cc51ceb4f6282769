"""Load the entity schema from disk.

Reads a JSON document whose top-level keys are entity names.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

SCHEMA_PATH = Path("schema.json")


def load_schema(path: Path | str | None = None) -> Any:
    """Load a schema document, keeping object key order."""
    schema_file = Path(path) if path is not None else SCHEMA_PATH
    with open(schema_file, encoding="utf-8") as f:
        return json.load(f)


def get_properties(entity_def: dict[str, Any]) -> Any:
    """Return the raw ``properties`` member of an entity definition, or None."""
    return entity_def.get("properties")
