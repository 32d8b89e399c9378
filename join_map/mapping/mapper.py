"""Result set mapper.

Reconstructs nested object graphs from flat, joined result sets in a
single pass. Objects are deduplicated by identity key at every level;
the first non-null value written to a field wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

from join_map.core.exceptions import NotFoundError
from join_map.mapping.definition import MappingDefinition
from join_map.mapping.plan import EntityPlan, FieldPlan
from join_map.mapping.registry import MapRegistry, as_registry
from join_map.mapping.resolver import identity_key, infer_properties, typed_key

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
Maps = MapRegistry | Iterable[MappingDefinition | Mapping[str, Any]]


def _get_field(target: Any, name: str) -> Any:
    if isinstance(target, Mapping):
        return target.get(name)
    return getattr(target, name, None)


def _set_field(target: Any, name: str, value: Any) -> None:
    if isinstance(target, MutableMapping):
        target[name] = value
    else:
        setattr(target, name, value)


class _MappingRun:
    """State of a single mapping call.

    Holds the properties inferred per map id and the identity index of
    every collection being filled. Discarded when the call returns.
    """

    def __init__(self, registry: MapRegistry) -> None:
        self._registry = registry
        self._inferred: dict[str, tuple[FieldPlan, ...]] = {}
        # id(list) -> (list, identity key -> member)
        self._indexes: dict[int, tuple[list[Any], dict[tuple[Any, ...], Any]]] = {}

    def _properties(self, plan: EntityPlan, row: Row, prefix: str) -> tuple[FieldPlan, ...]:
        if plan.properties is not None:
            return plan.properties
        inferred = self._inferred.get(plan.map_id)
        if inferred is None:
            inferred = infer_properties(row, prefix)
            self._inferred[plan.map_id] = inferred
            logger.debug(
                "Inferred properties for map '%s' (prefix %r): %s",
                plan.map_id,
                prefix,
                [p.name for p in inferred],
            )
        return inferred

    def _index(self, members: list[Any], plan: EntityPlan) -> dict[tuple[Any, ...], Any]:
        entry = self._indexes.get(id(members))
        if entry is None:
            # Members may already exist if the factory pre-populated the list
            index = {
                typed_key(tuple(_get_field(m, f.name) for f in plan.id_fields)): m
                for m in members
            }
            entry = (members, index)
            self._indexes[id(members)] = entry
        return entry[1]

    def inject_into_collection(
        self, row: Row, members: list[Any], map_id: str, prefix: str
    ) -> None:
        """Find or create the member identified by this row, then fill it."""
        plan = self._registry.get(map_id)
        key = identity_key(row, plan.id_fields, prefix)
        # Ignore joins to null records
        if key is None:
            return

        key = typed_key(key)
        index = self._index(members, plan)
        target = index.get(key)
        if target is None:
            target = plan.create()
            members.append(target)
            index[key] = target

        self.inject_into_object(row, target, map_id, prefix)

    def inject_into_object(self, row: Row, target: Any, map_id: str, prefix: str) -> None:
        """Copy identity fields, properties, associations and collections."""
        plan = self._registry.get(map_id)

        for field in plan.id_fields + self._properties(plan, row, prefix):
            if _get_field(target, field.name) is None:
                _set_field(target, field.name, row.get(prefix + field.column))

        for association in plan.associations:
            associated = _get_field(target, association.name)
            if associated is None:
                associated_plan = self._registry.get(association.map_id)
                if identity_key(row, associated_plan.id_fields, association.column_prefix) is None:
                    _set_field(target, association.name, None)
                    continue
                associated = associated_plan.create()
                _set_field(target, association.name, associated)

            self.inject_into_object(row, associated, association.map_id, association.column_prefix)

        for collection in plan.collections:
            members = _get_field(target, collection.name)
            if members is None:
                members = []
                _set_field(target, collection.name, members)

            self.inject_into_collection(row, members, collection.map_id, collection.column_prefix)


def map_collection(
    result_set: Iterable[Row],
    maps: Maps,
    map_id: str,
    column_prefix: str = "",
) -> list[Any]:
    """Map a result set to a list of objects.

    Args:
        result_set: Rows as column -> value mappings; any iterable,
            including a cursor or generator, is consumed once.
        maps: A MapRegistry, or definitions to load into one.
        map_id: Map id of the top-level objects.
        column_prefix: Prefix of the top-level objects' columns.

    Returns:
        One object per distinct identity key, in first-occurrence order.

    Raises:
        UnknownMapError: If ``map_id`` is not defined.
    """
    registry = as_registry(maps)
    registry.get(map_id)

    run = _MappingRun(registry)
    mapped: list[Any] = []
    row_count = 0
    for row in result_set:
        run.inject_into_collection(row, mapped, map_id, column_prefix)
        row_count += 1

    logger.debug("Mapped %d rows to %d '%s' objects", row_count, len(mapped), map_id)
    return mapped


def map_single(
    result_set: Iterable[Row],
    maps: Maps,
    map_id: str,
    column_prefix: str = "",
    required: bool = True,
    message: str = "EmptyResponse",
) -> Any:
    """Map a result set to a single object.

    The result set may still hold many rows (one per child of a
    one-to-many join); only the first mapped object is returned.

    Raises:
        NotFoundError: If nothing was mapped and ``required`` is true.
    """
    mapped = map_collection(result_set, maps, map_id, column_prefix)
    if mapped:
        return mapped[0]
    if required:
        raise NotFoundError(message)
    return None


class ResultMapper:
    """Reusable mapper bound to a registry, a root map id and a prefix.

    Args:
        maps: A MapRegistry, or definitions to load into one.
        map_id: Map id of the top-level objects.
        column_prefix: Prefix of the top-level objects' columns.

    Raises:
        UnknownMapError: If ``map_id`` is not defined.
    """

    def __init__(self, maps: Maps, map_id: str, column_prefix: str = "") -> None:
        self._registry = as_registry(maps)
        self._registry.get(map_id)
        self._map_id = map_id
        self._column_prefix = column_prefix

    @property
    def registry(self) -> MapRegistry:
        return self._registry

    def map_many(self, rows: Iterable[Row]) -> list[Any]:
        """Map rows to a deduplicated list of top-level objects."""
        return map_collection(rows, self._registry, self._map_id, self._column_prefix)

    def map_one(
        self,
        rows: Iterable[Row],
        required: bool = True,
        message: str = "EmptyResponse",
    ) -> Any:
        """Map rows to the first top-level object (see map_single)."""
        return map_single(
            rows,
            self._registry,
            self._map_id,
            self._column_prefix,
            required=required,
            message=message,
        )
