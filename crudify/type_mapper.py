"""Map schema property nodes to ScalarTypes.

Resolution order for a node ``{"type": ..., "format": ...}``:
  1. ``format`` found in the format table
  2. ``type`` found in the type table
  3. fall back to STRING

Unknown type/format strings are not errors. Only nodes that cannot be read
as the ``{type, format}`` shape at all raise SchemaShapeError.
"""

from __future__ import annotations

from typing import Any

from .errors import SchemaShapeError
from .model import ScalarType

DEFAULT_TYPE = ScalarType.STRING

_FORMAT_TYPES: dict[str, ScalarType] = {
    "int32": ScalarType.I32,
    "int64": ScalarType.I64,
    "float": ScalarType.F32,
    "double": ScalarType.F64,
    "byte": ScalarType.U8,
    "password": ScalarType.STRING,
    "date": ScalarType.DATE,
    "date-time": ScalarType.DATETIME,
}

_TYPE_TYPES: dict[str, ScalarType] = {
    "integer": ScalarType.I64,
    "number": ScalarType.F64,
    "string": ScalarType.STRING,
    "boolean": ScalarType.BOOL,
}

_PYTHON_TYPES: dict[ScalarType, str] = {
    ScalarType.U8: "int",
    ScalarType.I32: "int",
    ScalarType.I64: "int",
    ScalarType.F32: "float",
    ScalarType.F64: "float",
    ScalarType.STRING: "str",
    ScalarType.BOOL: "bool",
    ScalarType.DATE: "datetime.date",
    ScalarType.DATETIME: "datetime.datetime",
}

_SQL_TYPES: dict[ScalarType, str] = {
    ScalarType.U8: "smallint",
    ScalarType.I32: "integer",
    ScalarType.I64: "bigint",
    ScalarType.F32: "real",
    ScalarType.F64: "double precision",
    ScalarType.STRING: "text",
    ScalarType.BOOL: "boolean",
    ScalarType.DATE: "date",
    ScalarType.DATETIME: "timestamp",
}


def _optional_str(node: dict[str, Any], key: str) -> str | None:
    """Read an optional string member; JSON null counts as absent."""
    value = node.get(key)
    if value is None or isinstance(value, str):
        return value
    raise SchemaShapeError(node)


def map_type(node: Any) -> ScalarType:
    """Resolve a property node to its ScalarType."""
    if not isinstance(node, dict):
        raise SchemaShapeError(node)

    schema_type = _optional_str(node, "type")
    schema_format = _optional_str(node, "format")

    if schema_format is not None and schema_format in _FORMAT_TYPES:
        return _FORMAT_TYPES[schema_format]
    if schema_type is not None and schema_type in _TYPE_TYPES:
        return _TYPE_TYPES[schema_type]
    return DEFAULT_TYPE


def python_type(scalar_type: ScalarType) -> str:
    """Python annotation used for a field in the generated source."""
    return _PYTHON_TYPES[scalar_type]


def sql_type(scalar_type: ScalarType) -> str:
    """PostgreSQL column type used in CREATE TABLE."""
    return _SQL_TYPES[scalar_type]
