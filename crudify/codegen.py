"""Render templates and write generated output.

Takes the context from context_builder and produces the service source
(src/main.py) and its manifest (pyproject.toml).
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Sequence

import jinja2

from . import sql
from .context_builder import build_context
from .model import Entity

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
OUTPUT_DIR = Path("generated")
DEFAULT_FORMATTER = "black --quiet"

SOURCE_TEMPLATE = "main.py.j2"
MANIFEST_TEMPLATE = "pyproject.toml.j2"


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["pyrepr"] = repr
    return env


def render_source(entities: list[Entity], schema: str = sql.DEFAULT_SCHEMA) -> str:
    """Render the generated service module for *entities*."""
    context = build_context(entities, schema)
    output = _environment().get_template(SOURCE_TEMPLATE).render(**context)
    logger.debug(
        "Rendered %s (%d entities, %d routes)",
        SOURCE_TEMPLATE, context["entity_count"], context["route_count"],
    )
    return output


def render_manifest(project_name: str) -> str:
    """Render the project manifest with *project_name* filled in."""
    return _environment().get_template(MANIFEST_TEMPLATE).render(project_name=project_name)


def project_dir(output_dir: Path, project_name: str) -> Path:
    return output_dir / project_name


def write_project(manifest: str, source: str, project_name: str, output_dir: Path | None = None) -> Path:
    """Write pyproject.toml and src/main.py under ``<output_dir>/<project_name>``.

    Returns the path of the written source file.
    """
    root = project_dir(output_dir or OUTPUT_DIR, project_name)
    src_dir = root / "src"
    src_dir.mkdir(parents=True, exist_ok=True)

    (root / "pyproject.toml").write_text(manifest, encoding="utf-8")
    source_path = src_dir / "main.py"
    source_path.write_text(source, encoding="utf-8")

    logger.info("Generated %s", source_path)
    return source_path


def format_source(path: Path, command: str | Sequence[str] = DEFAULT_FORMATTER) -> None:
    """Run an external formatter over *path*. Formatter failures propagate."""
    argv = shlex.split(command) if isinstance(command, str) else list(command)
    logger.info("Formatting %s with %s", path, argv[0])
    subprocess.run([*argv, str(path)], check=True)
