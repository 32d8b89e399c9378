"""Compiled mapping plan data classes.

Frozen dataclasses holding the canonical form of a MappingDefinition.
Built by MapRegistry at load time and consumed by the mapper.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldPlan:
    """A scalar field: attribute name and column name (without prefix)."""

    name: str
    column: str


@dataclass(frozen=True)
class RelationPlan:
    """An association or collection: attribute name, target map and prefix."""

    name: str
    map_id: str
    column_prefix: str = ""


@dataclass(frozen=True)
class EntityPlan:
    """Mapping plan for one map id."""

    map_id: str
    id_fields: tuple[FieldPlan, ...]
    properties: tuple[FieldPlan, ...] | None  # None -> inferred from the row
    associations: tuple[RelationPlan, ...] = ()
    collections: tuple[RelationPlan, ...] = ()
    factory: Callable[[], Any] = field(default=dict)

    def create(self) -> Any:
        """Create a new, empty target instance."""
        return self.factory()

    @property
    def references(self) -> tuple[RelationPlan, ...]:
        """Associations followed by collections."""
        return self.associations + self.collections
