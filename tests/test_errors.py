"""Request field validation tests."""

from __future__ import annotations

import pytest

from graph_memory.errors import EntityNotFoundError, GraphMemoryError, MissingFieldError, validate_fields


def test_validate_fields_accepts_complete_record() -> None:
    validate_fields({"name": "Alice", "entityType": "Person"}, ["name", "entityType"])


def test_validate_fields_reports_first_missing_field() -> None:
    with pytest.raises(MissingFieldError) as excinfo:
        validate_fields({"name": "Alice"}, ["name", "entityType", "observations"])
    assert excinfo.value.field == "entityType"
    assert str(excinfo.value) == "Missing required field: entityType"


def test_validate_fields_treats_none_as_missing() -> None:
    with pytest.raises(MissingFieldError, match="name"):
        validate_fields({"name": None}, ["name"])


def test_error_hierarchy() -> None:
    assert issubclass(EntityNotFoundError, GraphMemoryError)
    assert issubclass(EntityNotFoundError, LookupError)
    assert issubclass(MissingFieldError, ValueError)
