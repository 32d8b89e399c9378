"""Identity-key and property resolution helpers.

All functions are pure: they never mutate their arguments.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from join_map.mapping.definition import FieldDefinition
from join_map.mapping.plan import FieldPlan

DEFAULT_ID_FIELDS: tuple[FieldPlan, ...] = (FieldPlan(name="id", column="id"),)


def _to_field_plan(spec: Any) -> FieldPlan:
    """Normalize one field spec into a FieldPlan."""
    if isinstance(spec, FieldPlan):
        return spec
    if isinstance(spec, str):
        return FieldPlan(name=spec, column=spec)
    if isinstance(spec, FieldDefinition):
        return FieldPlan(name=spec.name, column=spec.column)
    if isinstance(spec, Mapping):
        name = spec["name"]
        return FieldPlan(name=name, column=spec.get("column") or name)
    raise TypeError(f"Cannot interpret {spec!r} as a field definition")


def _to_field_plans(spec: Any) -> tuple[FieldPlan, ...]:
    if isinstance(spec, (str, Mapping, FieldDefinition, FieldPlan)):
        return (_to_field_plan(spec),)
    if isinstance(spec, Sequence):
        return tuple(_to_field_plan(item) for item in spec)
    raise TypeError(f"Cannot interpret {spec!r} as a list of field definitions")


def resolve_id_property(spec: Any) -> tuple[FieldPlan, ...]:
    """Normalize an ``idProperty`` spec into ordered (name, column) pairs.

    ``None`` (or an empty sequence) resolves to a single ``id`` field; a
    bare string to name=column; mappings get ``column`` defaulted to
    ``name``.
    """
    if spec is None:
        return DEFAULT_ID_FIELDS
    fields = _to_field_plans(spec)
    return fields or DEFAULT_ID_FIELDS


def resolve_properties(spec: Any) -> tuple[FieldPlan, ...] | None:
    """Normalize a ``properties`` spec; ``None`` stays ``None`` (inferred later)."""
    if spec is None:
        return None
    return _to_field_plans(spec)


def infer_properties(row: Mapping[str, Any], prefix: str = "") -> tuple[FieldPlan, ...]:
    """Infer properties from the row columns that start with ``prefix``."""
    return tuple(
        FieldPlan(name=column[len(prefix) :], column=column[len(prefix) :])
        for column in row
        if column.startswith(prefix)
    )


def identity_key(
    row: Mapping[str, Any],
    id_fields: Sequence[FieldPlan],
    prefix: str = "",
) -> tuple[Any, ...] | None:
    """Return the identity value tuple, or None if any identity column is null.

    A column missing from the row counts as null.
    """
    key = tuple(row.get(prefix + field.column) for field in id_fields)
    if any(value is None for value in key):
        return None
    return key


def typed_key(key: tuple[Any, ...]) -> tuple[tuple[type, Any], ...]:
    """Pair each identity value with its type.

    Keeps ``1``, ``1.0`` and ``True`` apart when keys are hashed, since
    they compare and hash equal in Python.
    """
    return tuple((type(value), value) for value in key)
