"""Build Jinja2 template context from the entity model.

Produces, per entity, the SQL literals plus the index-based row extraction
and positional binding expressions for main.py.j2, and the route table
for build_app().

Extraction index and binding slot both come from ``Field.position``, the
value sql.py used to number that field's placeholder. Both go through the
field's Python attribute, which differs from the column name only when
the column name is not a usable pydantic field name.
"""

from __future__ import annotations

from typing import Any

from . import sql
from .model import Entity, ScalarType
from .naming import (
    BODY_PARAM,
    HANDLER_VERBS,
    ID_PARAM,
    attribute_names,
    handler_name,
    route_path,
)
from .type_mapper import python_type

# Path parameter type for entities that declare no ``id`` property
_DEFAULT_ID_TYPE = python_type(ScalarType.STRING)


def _id_type(entity: Entity) -> str:
    """Python type of the ``{id}`` path parameter."""
    id_field = entity.field(ID_PARAM)
    if id_field is None:
        return _DEFAULT_ID_TYPE
    return python_type(id_field.scalar_type)


def _build_fields(entity: Entity) -> list[dict[str, Any]]:
    return [
        {
            "name": f.name,
            "attr": attr,
            # None when the attribute already carries the column name
            "alias": f.name if attr != f.name else None,
            "type": python_type(f.scalar_type),
            "position": f.position,
        }
        for f, attr in zip(entity.fields, attribute_names(entity))
    ]


def _build_entity(entity: Entity, schema: str) -> dict[str, Any]:
    statements = sql.statements(entity, schema)
    has_update = "update" in statements
    handlers = {
        verb: handler_name(verb, entity)
        for verb in HANDLER_VERBS
        if verb in statements
    }
    fields = _build_fields(entity)
    bind_args = [f"{BODY_PARAM}.{f['attr']}" for f in fields]

    return {
        "name": entity.name,
        "fields": fields,
        "sql": statements,
        "handlers": handlers,
        "has_update": has_update,
        "row_kwargs": ", ".join(f"{f['attr']}=row[{f['position']}]" for f in fields),
        "bind_args": bind_args,
        # Identifier goes after the SET values, matching sql.id_placeholder()
        "update_args": bind_args + [ID_PARAM] if has_update else [],
        "id_param": ID_PARAM,
        "body_param": BODY_PARAM,
        "id_type": _id_type(entity),
    }


def _build_routes(entity: Entity, handlers: dict[str, str]) -> list[dict[str, str]]:
    routes = []
    for verb, (method, with_id) in HANDLER_VERBS.items():
        if verb not in handlers:
            continue
        routes.append({
            "path": route_path(entity, with_id=with_id),
            "method": method,
            "handler": handlers[verb],
        })
    return routes


def build_context(entities: list[Entity], schema: str = sql.DEFAULT_SCHEMA) -> dict[str, Any]:
    """Build the full template context for main.py.j2."""
    entity_contexts: list[dict[str, Any]] = []
    routes: list[dict[str, str]] = []

    for entity in entities:
        ctx = _build_entity(entity, schema)
        entity_contexts.append(ctx)
        routes.extend(_build_routes(entity, ctx["handlers"]))

    return {
        "entities": entity_contexts,
        "routes": routes,
        "create_tables": [ctx["sql"]["create_table"] for ctx in entity_contexts],
        "entity_count": len(entity_contexts),
        "route_count": len(routes),
    }
