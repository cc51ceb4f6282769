"""Render PostgreSQL statements for one entity.

Every statement uses numbered ``$n`` placeholders (asyncpg style) and
reads columns from ``Entity.fields``, so placeholder ``$k`` always binds
the field whose ``position`` is ``k - 1``.

The row identifier in UPDATE is its own parameter, numbered after the
SET values, so it does not depend on where ``id`` sits among the fields.
"""

from __future__ import annotations

from .errors import EmptyEntityError
from .model import Entity
from .naming import ID_PARAM, table_name
from .type_mapper import sql_type

DEFAULT_SCHEMA = "public"


def select_all(entity: Entity, schema: str = DEFAULT_SCHEMA) -> str:
    """``SELECT <cols> FROM <table>``; ``*`` when the entity has no properties."""
    cols = ", ".join(entity.columns) or "*"
    return f"SELECT {cols} FROM {table_name(entity, schema)}"


def insert(entity: Entity, schema: str = DEFAULT_SCHEMA) -> str:
    table = table_name(entity, schema)
    if not entity.fields:
        return f"INSERT INTO {table} DEFAULT VALUES"
    cols = ", ".join(entity.columns)
    placeholders = ", ".join(f.placeholder for f in entity.fields)
    return f"INSERT INTO {table} ({cols}) VALUES ({placeholders})"


def id_placeholder(entity: Entity) -> str:
    """Placeholder bound to the row identifier in UPDATE."""
    return f"${len(entity.fields) + 1}"


def update(entity: Entity, schema: str = DEFAULT_SCHEMA) -> str:
    """``UPDATE ... SET c1 = $1, ..., cN = $N WHERE id = $N+1``.

    Raises EmptyEntityError when the entity has no columns to set.
    """
    if not entity.fields:
        raise EmptyEntityError(entity.name)
    assignments = ", ".join(f"{f.name} = {f.placeholder}" for f in entity.fields)
    return (
        f"UPDATE {table_name(entity, schema)} SET {assignments} "
        f"WHERE {ID_PARAM} = {id_placeholder(entity)}"
    )


def delete(entity: Entity, schema: str = DEFAULT_SCHEMA) -> str:
    return f"DELETE FROM {table_name(entity, schema)} WHERE {ID_PARAM} = $1"


def create_table(entity: Entity, schema: str = DEFAULT_SCHEMA) -> str:
    col_defs = ", ".join(f"{f.name} {sql_type(f.scalar_type)}" for f in entity.fields)
    return f"CREATE TABLE IF NOT EXISTS {table_name(entity, schema)} ({col_defs});"


def statements(entity: Entity, schema: str = DEFAULT_SCHEMA) -> dict[str, str]:
    """All statements for one entity, keyed by handler verb.

    ``update`` is left out for entities without properties.
    """
    result = {
        "create_table": create_table(entity, schema),
        "list": select_all(entity, schema),
        "create": insert(entity, schema),
        "delete": delete(entity, schema),
    }
    if entity.fields:
        result["update"] = update(entity, schema)
    return result
