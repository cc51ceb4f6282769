"""Entry point: python -m crudify SCHEMA_FILE --project NAME

Reads the schema, writes <output-dir>/<project>/pyproject.toml and
<output-dir>/<project>/src/main.py.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import codegen, sql
from .errors import SchemaError
from .pipeline import run


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Send crudify log records to stderr as bare messages."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("crudify")
    root.handlers[:] = [handler]
    root.setLevel(level)


@click.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--project", "-p", "project_name", required=True, help="Project name and output folder.")
@click.option(
    "--output-dir", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=codegen.OUTPUT_DIR, show_default=True, envvar="CRUDIFY_OUTPUT_DIR",
    help="Directory that receives the project folder.",
)
@click.option(
    "--db-schema", default=sql.DEFAULT_SCHEMA, show_default=True, envvar="CRUDIFY_DB_SCHEMA",
    help="PostgreSQL schema the tables live in.",
)
@click.option("--format/--no-format", "run_formatter", default=False, help="Run the formatter on the generated source.")
@click.option(
    "--formatter", default=codegen.DEFAULT_FORMATTER, show_default=True, envvar="CRUDIFY_FORMATTER",
    help="Formatter command used with --format.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log per-entity detail.")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors.")
def main(
    schema_file: Path,
    project_name: str,
    output_dir: Path,
    db_schema: str,
    run_formatter: bool,
    formatter: str,
    verbose: bool,
    quiet: bool,
) -> None:
    """Generate a CRUD service from SCHEMA_FILE."""
    _configure_logging(verbose, quiet)
    try:
        source_path = run(
            schema_file,
            project_name,
            output_dir,
            db_schema=db_schema,
            formatter=formatter if run_formatter else None,
        )
    except SchemaError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(str(source_path))


if __name__ == "__main__":
    main()
