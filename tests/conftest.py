"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def parent_child_maps() -> list[dict[str, Any]]:
    """A parent with a "children" collection of child objects (prefix "child_")."""
    return [
        {
            "mapId": "parent",
            "properties": ["name"],
            "collections": [{"name": "children", "mapId": "child", "columnPrefix": "child_"}],
        },
        {"mapId": "child", "properties": ["name"]},
    ]


@pytest.fixture
def parent_child_rows() -> list[dict[str, Any]]:
    """Two parents, the first joined to two children, the second to none."""
    return [
        {"id": 1, "name": "A", "child_id": 10, "child_name": "X"},
        {"id": 1, "name": "A", "child_id": 11, "child_name": "Y"},
        {"id": 2, "name": "B", "child_id": None, "child_name": None},
    ]


@pytest.fixture
def team_maps() -> list[dict[str, Any]]:
    """Teams with a coach association and members that each own tasks.

    Exercises association, collection and a collection nested in a
    collection member.
    """
    return [
        {
            "mapId": "team",
            "properties": ["name"],
            "associations": [{"name": "coach", "mapId": "coach", "columnPrefix": "coach_"}],
            "collections": [{"name": "members", "mapId": "member", "columnPrefix": "member_"}],
        },
        {"mapId": "coach", "properties": ["name"]},
        {
            "mapId": "member",
            "properties": [{"name": "fullName", "column": "full_name"}],
            "collections": [{"name": "tasks", "mapId": "task", "columnPrefix": "task_"}],
        },
        {"mapId": "task", "properties": ["title"]},
    ]
