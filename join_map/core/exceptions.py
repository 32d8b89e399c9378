"""join_map exception hierarchy.

NotFoundError is the only error raised while mapping rows. The others
come from loading a definition set or looking up an undefined map id.
"""

from __future__ import annotations


class JoinMapError(Exception):
    """Base exception for all join_map errors."""


# --- Mapping ---


class MappingError(JoinMapError):
    """Base for mapping errors."""


class NotFoundError(MappingError):
    """Raised by map_single when no object was produced and one is required."""

    def __init__(self, message: str = "Not Found") -> None:
        self.message = message
        super().__init__(message)


# --- Configuration ---


class ConfigurationError(JoinMapError):
    """Base for mapping definition set errors."""


class UnknownMapError(ConfigurationError, KeyError):
    """Raised when a map id is referenced but never defined."""

    def __init__(self, map_id: str, referenced_by: str | None = None) -> None:
        self.map_id = map_id
        self.referenced_by = referenced_by
        if referenced_by is None:
            detail = f"Map not found: '{map_id}'"
        else:
            detail = f"Map '{referenced_by}' references undefined map '{map_id}'"
        super().__init__(detail)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class DuplicateMapError(ConfigurationError):
    """Raised when two definitions share the same map id."""

    def __init__(self, map_id: str) -> None:
        self.map_id = map_id
        super().__init__(f"Duplicate map id '{map_id}'")


class CyclicMappingError(ConfigurationError):
    """Raised when associations/collections form a cycle between maps."""

    def __init__(self, path: list[str]) -> None:
        self.path = path
        super().__init__(f"Cyclic mapping: {' -> '.join(path)}")
