"""Mapping definition models.

Definitions are the user-facing configuration: one per logical entity,
looked up by map id. They accept the legacy camelCase keys (``mapId``,
``idProperty``, ``columnPrefix``, ``createNew``) as well as snake_case,
and normalize the string shorthand for fields at load time.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class FieldDefinition(BaseModel):
    """A (name, column) pair. ``"title"`` is shorthand for name=column="title"."""

    model_config = _CONFIG

    name: str
    column: str

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"name": value, "column": value}
        if isinstance(value, dict) and not value.get("column"):
            # The default for column name is property name
            return {**value, "column": value.get("name")}
        return value


class RelationDefinition(BaseModel):
    """An association or collection pointing at another map id."""

    model_config = _CONFIG

    name: str
    map_id: str
    column_prefix: str = ""


class MappingDefinition(BaseModel):
    """How rows are turned into one kind of object.

    Attributes:
        map_id: Unique key of this definition within a set.
        id_property: Identity fields. ``None`` means a single ``id`` column.
        properties: Scalar fields. ``None`` means infer them from the row.
        associations: Single nested objects.
        collections: Nested lists of objects.
        create_new: Zero-argument factory for new instances (default: dict).
    """

    model_config = _CONFIG

    map_id: str
    id_property: list[FieldDefinition] | None = None
    properties: list[FieldDefinition] | None = None
    associations: list[RelationDefinition] = []
    collections: list[RelationDefinition] = []
    create_new: Callable[[], Any] | None = None

    @field_validator("id_property", mode="before")
    @classmethod
    def _wrap_single_id(cls, value: Any) -> Any:
        if isinstance(value, (str, dict, FieldDefinition)):
            return [value]
        return value

    @field_validator("associations", "collections", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
