"""Sequence one generation run.

schema -> entities -> (manifest, source) -> files -> formatter

``generate`` is pure and only raises SchemaError subclasses; ``run`` adds
the file-system and formatter steps, whose errors surface unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import codegen, sql
from .errors import InvalidNameError
from .loader import load_schema
from .model import Entity
from .naming import is_valid_project_name
from .schema_parser import build_entities

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Artifacts:
    """Everything produced for one project."""

    project_name: str
    manifest: str
    source: str
    entities: tuple[Entity, ...]


def generate(schema: Any, project_name: str, *, db_schema: str = sql.DEFAULT_SCHEMA) -> Artifacts:
    """Build the model from *schema* and render both artifacts.

    *project_name* must be a PEP 508 distribution name; it becomes the
    manifest name and the output folder.
    """
    if not is_valid_project_name(project_name):
        raise InvalidNameError(project_name, "is not a valid project name (letters, digits, ., _, -)")
    entities = build_entities(schema)
    return Artifacts(
        project_name=project_name,
        manifest=codegen.render_manifest(project_name),
        source=codegen.render_source(entities, db_schema),
        entities=tuple(entities),
    )


def write_artifacts(artifacts: Artifacts, output_dir: Path | None = None) -> Path:
    """Write both artifacts; returns the generated source path."""
    return codegen.write_project(
        artifacts.manifest, artifacts.source, artifacts.project_name, output_dir,
    )


def run(
    schema_path: Path | str,
    project_name: str,
    output_dir: Path | None = None,
    *,
    db_schema: str = sql.DEFAULT_SCHEMA,
    formatter: str | None = None,
) -> Path:
    """Load, generate, write and optionally format one project."""
    logger.info("Loading schema from %s", schema_path)
    schema = load_schema(schema_path)

    artifacts = generate(schema, project_name, db_schema=db_schema)
    source_path = write_artifacts(artifacts, output_dir)

    if formatter:
        codegen.format_source(source_path, formatter)

    logger.info(
        "Generated project %s (%d entities)", project_name, len(artifacts.entities),
    )
    return source_path
