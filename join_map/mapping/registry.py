"""Map registry - loads, normalizes and validates mapping definitions.

The registry is the single preprocessing pass over a definition set:

    maps = MapRegistry([
        {"mapId": "user", "collections": [
            {"name": "orders", "mapId": "order", "columnPrefix": "order_"},
        ]},
        {"mapId": "order"},
    ])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from join_map.core.exceptions import (
    CyclicMappingError,
    DuplicateMapError,
    UnknownMapError,
)
from join_map.mapping.definition import MappingDefinition
from join_map.mapping.plan import EntityPlan, RelationPlan
from join_map.mapping.resolver import resolve_id_property, resolve_properties

logger = logging.getLogger(__name__)


def _compile(definition: MappingDefinition) -> EntityPlan:
    """Compile a definition into its canonical EntityPlan."""
    return EntityPlan(
        map_id=definition.map_id,
        id_fields=resolve_id_property(definition.id_property),
        properties=resolve_properties(definition.properties),
        associations=tuple(
            RelationPlan(a.name, a.map_id, a.column_prefix) for a in definition.associations
        ),
        collections=tuple(
            RelationPlan(c.name, c.map_id, c.column_prefix) for c in definition.collections
        ),
        factory=definition.create_new or dict,
    )


class MapRegistry:
    """Compiled, validated set of mapping definitions keyed by map id.

    The registry is immutable after loading and may be shared between
    threads: mapping never writes back to it.

    Args:
        maps: MappingDefinition instances or plain mappings in the same shape.

    Raises:
        DuplicateMapError: If two definitions share a map id.
        UnknownMapError: If a relation references an undefined map id.
        CyclicMappingError: If relations form a cycle.
        pydantic.ValidationError: If a plain mapping has the wrong shape.
    """

    def __init__(self, maps: Iterable[MappingDefinition | Mapping[str, Any]]) -> None:
        self._plans: dict[str, EntityPlan] = {}
        self._load(maps)
        self._check_references()
        self._check_cycles()
        logger.debug("Loaded %d mapping definitions: %s", len(self._plans), self.map_ids)

    def _load(self, maps: Iterable[MappingDefinition | Mapping[str, Any]]) -> None:
        for item in maps:
            if isinstance(item, MappingDefinition):
                definition = item
            else:
                definition = MappingDefinition.model_validate(item)

            if definition.map_id in self._plans:
                raise DuplicateMapError(definition.map_id)
            self._plans[definition.map_id] = _compile(definition)

    def _check_references(self) -> None:
        for plan in self._plans.values():
            for relation in plan.references:
                if relation.map_id not in self._plans:
                    raise UnknownMapError(relation.map_id, referenced_by=plan.map_id)

    def _check_cycles(self) -> None:
        """Depth-first search over the relation graph."""
        done: set[str] = set()

        def visit(map_id: str, path: list[str]) -> None:
            if map_id in path:
                raise CyclicMappingError(path[path.index(map_id) :] + [map_id])
            if map_id in done:
                return
            path.append(map_id)
            for relation in self._plans[map_id].references:
                visit(relation.map_id, path)
            path.pop()
            done.add(map_id)

        for map_id in self._plans:
            visit(map_id, [])

    def get(self, map_id: str) -> EntityPlan:
        """Look up the compiled plan for a map id.

        Raises:
            UnknownMapError: If no definition has this map id.
        """
        try:
            return self._plans[map_id]
        except KeyError:
            raise UnknownMapError(map_id) from None

    def has(self, map_id: str) -> bool:
        """Check if a map id is registered."""
        return map_id in self._plans

    @property
    def map_ids(self) -> list[str]:
        """All registered map ids, in definition order."""
        return list(self._plans)

    def __contains__(self, map_id: object) -> bool:
        return map_id in self._plans

    def __iter__(self) -> Iterator[EntityPlan]:
        return iter(self._plans.values())

    def __len__(self) -> int:
        """Number of registered definitions."""
        return len(self._plans)


def as_registry(maps: MapRegistry | Iterable[MappingDefinition | Mapping[str, Any]]) -> MapRegistry:
    """Return ``maps`` unchanged if already a registry, else load it."""
    if isinstance(maps, MapRegistry):
        return maps
    return MapRegistry(maps)
