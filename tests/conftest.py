"""Shared schema fixtures for the crudify tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from crudify.model import Entity, ScalarType

ORDER_SCHEMA: dict[str, Any] = {
    "Order": {
        "type": "object",
        "properties": {
            "id": {"type": "integer", "format": "int64"},
            "name": {"type": "string"},
            "total": {"type": "number", "format": "double"},
            "paid": {"type": "boolean"},
            "placed_at": {"type": "string", "format": "date-time"},
        },
    },
    "Customer": {
        "type": "object",
        "properties": {
            "email": {"type": "string"},
            "id": {"type": "integer", "format": "int32"},
        },
    },
    "Marker": {"type": "object"},
}


@pytest.fixture
def order_schema() -> dict[str, Any]:
    """A fresh copy of the three-entity schema."""
    return json.loads(json.dumps(ORDER_SCHEMA))


@pytest.fixture
def order() -> Entity:
    return Entity.from_properties("Order", {
        "id": ScalarType.I64,
        "name": ScalarType.STRING,
    })


@pytest.fixture
def empty_entity() -> Entity:
    return Entity.from_properties("Marker", {})


@pytest.fixture
def schema_file(tmp_path: Path, order_schema: dict[str, Any]) -> Path:
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(order_schema), encoding="utf-8")
    return path
