"""Errors raised while turning a schema into generated code."""

from __future__ import annotations

import json
from typing import Any


class SchemaError(Exception):
    """Base class for every error that aborts a generation run."""


class SchemaShapeError(SchemaError):
    """A value expected to be a JSON object (or a ``{type, format}`` node) is not one."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Could not convert value to object: {_render(value)}")


class InvalidNameError(SchemaError):
    """An entity or project name cannot be used in the generated project."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class EmptyEntityError(SchemaError):
    """An UPDATE statement was requested for an entity without properties."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"Entity {entity!r} has no properties to update")


def _render(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
