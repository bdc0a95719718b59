"""Exceptions raised by the graph memory store and its tool layer."""

from typing import Any, Iterable, Mapping


class GraphMemoryError(Exception):
    """Base class for graph memory failures."""


class EntityNotFoundError(GraphMemoryError, LookupError):
    """One or more entity names did not resolve to an entity."""

    def __init__(self, message: str, names: Iterable[str] = ()):
        super().__init__(message)
        self.names = list(names)


class MissingFieldError(GraphMemoryError, ValueError):
    """A required request field was absent."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


def validate_fields(data: Mapping[str, Any], required_fields: Iterable[str]) -> None:
    """
    Check that every required field is present in a request record.

    A field explicitly set to None counts as missing.

    Raises:
        MissingFieldError: For the first field that is absent
    """
    for field in required_fields:
        if field not in data or data[field] is None:
            raise MissingFieldError(field)
