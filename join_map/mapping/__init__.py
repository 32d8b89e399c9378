"""Mapping layer - turn joined rows into nested, deduplicated objects."""

from __future__ import annotations

from join_map.mapping.definition import (
    FieldDefinition,
    MappingDefinition,
    RelationDefinition,
)
from join_map.mapping.mapper import ResultMapper, map_collection, map_single
from join_map.mapping.plan import EntityPlan, FieldPlan, RelationPlan
from join_map.mapping.registry import MapRegistry
from join_map.mapping.resolver import (
    identity_key,
    infer_properties,
    resolve_id_property,
    resolve_properties,
    typed_key,
)

__all__ = [
    "map_collection",
    "map_single",
    "ResultMapper",
    "MapRegistry",
    "MappingDefinition",
    "FieldDefinition",
    "RelationDefinition",
    "EntityPlan",
    "FieldPlan",
    "RelationPlan",
    "resolve_id_property",
    "resolve_properties",
    "infer_properties",
    "identity_key",
    "typed_key",
]
