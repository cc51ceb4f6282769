"""Internal entity model shared by the SQL and source emitters.

An Entity owns one tuple of Fields. Both emitters read that tuple, so a
field's ``position`` is at once its row index, its binding slot and
(plus one) its SQL placeholder number.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


class ScalarType(enum.Enum):
    """Closed set of column/field kinds."""

    U8 = "u8"
    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"
    STRING = "string"
    BOOL = "bool"
    DATE = "date"
    DATETIME = "datetime"


@dataclass(frozen=True)
class Field:
    name: str
    scalar_type: ScalarType
    position: int

    @property
    def placeholder(self) -> str:
        """Positional SQL parameter marker (``$1`` for the first field)."""
        return f"${self.position + 1}"


@dataclass(frozen=True)
class Entity:
    name: str
    fields: tuple[Field, ...] = ()

    @classmethod
    def from_properties(cls, name: str, properties: Mapping[str, ScalarType]) -> Entity:
        """Build an entity, numbering fields in the mapping's iteration order."""
        fields = tuple(
            Field(prop, scalar_type, position)
            for position, (prop, scalar_type) in enumerate(properties.items())
        )
        return cls(name, fields)

    @property
    def properties(self) -> Mapping[str, ScalarType]:
        """Read-only ordered view: property name -> ScalarType."""
        return MappingProxyType({f.name: f.scalar_type for f in self.fields})

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def lower_name(self) -> str:
        return self.name.lower()

    def field(self, name: str) -> Field | None:
        """Return the field called *name*, or None."""
        for f in self.fields:
            if f.name == name:
                return f
        return None
