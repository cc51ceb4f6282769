"""Build the entity model from a schema document.

Handles:
- one Entity per top-level key, in document order
- optional ``properties`` containers (absent means no fields)
- per-property type resolution via type_mapper
- extra keys (``type: object``, ``required``, ``description``) ignored
- entity names checked against what the generated module can hold

Any value that should be an object and is not aborts the whole build
with SchemaShapeError; an unusable entity name aborts it with
InvalidNameError.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import InvalidNameError, SchemaShapeError
from .loader import get_properties
from .model import Entity, ScalarType
from .naming import HANDLER_VERBS, entity_name_problem, handler_name
from .type_mapper import map_type

logger = logging.getLogger(__name__)


def parse_properties(entity_def: dict[str, Any]) -> dict[str, ScalarType]:
    """Resolve every property of one entity definition, keeping key order."""
    properties = get_properties(entity_def)
    if properties is None and "properties" not in entity_def:
        return {}
    if not isinstance(properties, dict):
        raise SchemaShapeError(properties)

    resolved: dict[str, ScalarType] = {}
    for prop_name, prop_node in properties.items():
        if not isinstance(prop_node, dict):
            raise SchemaShapeError(prop_node)
        resolved[prop_name] = map_type(prop_node)
    return resolved


def _check_entity_name(name: str, taken: dict[str, str]) -> None:
    """Reject *name* if it is unusable or collides with an earlier entity.

    *taken* maps every generated module-level name (class, table,
    handlers) to the entity that claimed it.
    """
    problem = entity_name_problem(name)
    if problem:
        raise InvalidNameError(name, problem)

    entity = Entity(name)
    claimed = [name, entity.lower_name]
    claimed += [handler_name(verb, entity) for verb in HANDLER_VERBS]
    for generated in claimed:
        owner = taken.get(generated)
        if owner is not None and owner != name:
            raise InvalidNameError(name, f"generates {generated!r}, already used by entity {owner!r}")
    for generated in claimed:
        taken[generated] = name


def build_entities(schema: Any) -> list[Entity]:
    """Convert a schema document into an ordered list of entities."""
    if not isinstance(schema, dict):
        raise SchemaShapeError(schema)

    entities: list[Entity] = []
    taken: dict[str, str] = {}
    for name, entity_def in schema.items():
        if not isinstance(entity_def, dict):
            raise SchemaShapeError(entity_def)
        _check_entity_name(name, taken)
        entity = Entity.from_properties(name, parse_properties(entity_def))
        logger.debug(
            "entity %s: %s",
            name,
            ", ".join(f"{f.name}:{f.scalar_type.value}" for f in entity.fields) or "(no properties)",
        )
        entities.append(entity)

    logger.info("Parsed %d entities", len(entities))
    return entities
