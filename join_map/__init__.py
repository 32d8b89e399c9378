"""join_map - map flat joined result sets to nested object graphs."""

from __future__ import annotations

from join_map.core.exceptions import (
    ConfigurationError,
    CyclicMappingError,
    DuplicateMapError,
    JoinMapError,
    MappingError,
    NotFoundError,
    UnknownMapError,
)
from join_map.mapping.definition import (
    FieldDefinition,
    MappingDefinition,
    RelationDefinition,
)
from join_map.mapping.mapper import ResultMapper, map_collection, map_single
from join_map.mapping.registry import MapRegistry

__all__ = [
    # Mapping
    "map_collection",
    "map_single",
    "ResultMapper",
    # Definitions
    "MapRegistry",
    "MappingDefinition",
    "FieldDefinition",
    "RelationDefinition",
    # Exceptions
    "JoinMapError",
    "MappingError",
    "NotFoundError",
    "ConfigurationError",
    "UnknownMapError",
    "DuplicateMapError",
    "CyclicMappingError",
]
