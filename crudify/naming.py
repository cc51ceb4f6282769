"""Derive table names, handler names, attribute names and URL paths.

Entity names are used verbatim for generated class names and lower-cased
everywhere else:

  Order -> table  public.order
        -> routes /api/order, /api/order/{id}
        -> handlers list_order, create_order, update_order, delete_order

Property names become pydantic attributes. Names Python or pydantic
cannot hold as-is (``_id``, ``from``, ``model_config``) get a safe
attribute name and keep the original as the field alias.
"""

from __future__ import annotations

import builtins
import keyword
import re

from .model import Entity

API_PREFIX = "/api"
ID_PARAM = "id"
BODY_PARAM = "body"

# Handler verb -> (HTTP method, addresses a single row)
HANDLER_VERBS: dict[str, tuple[str, bool]] = {
    "list": ("GET", False),
    "create": ("POST", False),
    "update": ("PUT", True),
    "delete": ("DELETE", True),
}

# Module-level names bound by main.py.j2 itself
GENERATED_NAMES = frozenset({
    "annotations", "contextlib", "datetime", "logging", "asyncpg", "uvicorn",
    "FastAPI", "Request", "JSONResponse", "BaseModel", "ConfigDict", "Field",
    "DATABASE_URL", "HOST", "PORT", "MAX_CONNECTIONS", "logger",
    "AppError", "app_error_handler", "postgres_error_handler",
    "CREATE_TABLE_STATEMENTS", "init_tables", "lifespan", "build_app", "app", "main",
})

# Attribute names a pydantic model reserves or the class body needs unshadowed
_MODEL_RESERVED = frozenset({
    "copy", "dict", "json", "schema", "schema_json", "construct", "validate",
    "parse_obj", "parse_raw", "parse_file", "from_orm", "update_forward_refs",
    "int", "float", "str", "bool", "datetime",
})

_PROJECT_NAME = re.compile(r"^([A-Z0-9]|[A-Z0-9][A-Z0-9._-]*[A-Z0-9])$", re.IGNORECASE)


def entity_name_problem(name: str) -> str | None:
    """Why *name* cannot be a generated class name, or None if it can."""
    if not name.isidentifier() or keyword.iskeyword(name):
        return "is not a valid Python identifier"
    if name.startswith("_"):
        return "must not start with an underscore"
    if name in GENERATED_NAMES or hasattr(builtins, name):
        return "clashes with a name the generated service defines or uses"
    return None


def is_valid_project_name(name: str) -> bool:
    """PEP 508 distribution name check; also rules out path separators."""
    return bool(_PROJECT_NAME.match(name))


def _base_attribute(prop: str) -> str:
    attr = re.sub(r"\W", "_", prop).lstrip("_")
    if not attr or attr[0].isdigit():
        attr = f"f_{attr}"
    if keyword.iskeyword(attr) or attr in _MODEL_RESERVED or attr.startswith("model_"):
        attr += "_"
    return attr


def attribute_names(entity: Entity) -> list[str]:
    """Python attribute name per field, in field order and unique within the model."""
    taken = {f.name for f in entity.fields if _base_attribute(f.name) == f.name}
    names = []
    for f in entity.fields:
        attr = _base_attribute(f.name)
        if attr != f.name:
            while attr in taken:
                attr += "_"
        taken.add(attr)
        names.append(attr)
    return names


def table_name(entity: Entity, schema: str) -> str:
    """Schema-qualified SQL table name."""
    return f"{schema}.{entity.lower_name}"


def handler_name(verb: str, entity: Entity) -> str:
    """Name of a generated request handler, e.g. ``list_order``."""
    return f"{verb}_{entity.lower_name}"


def route_path(entity: Entity, with_id: bool = False) -> str:
    """URL template for an entity's collection or single-row routes."""
    path = f"{API_PREFIX}/{entity.lower_name}"
    if with_id:
        path += f"/{{{ID_PARAM}}}"
    return path
