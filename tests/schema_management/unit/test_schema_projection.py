"""Schema loading and flattening tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from restdocs_schema_validator.schema_management import (
    SchemaError,
    flatten_schema,
    load_schema_document,
    read_schema_document,
)


def _samples_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "samples" / "economic"


def test_customers_sample_flattens_into_collection_fields() -> None:
    document = read_schema_document(_samples_dir() / "customers.get.schema.json")

    fields = flatten_schema(document)
    names = [field.path for field in fields]

    assert names[:3] == ["collection", "collection[].address", "collection[].balance"]
    assert "collection[].customerGroup.self" in names
    assert "pagination.firstPage" in names
    assert names[-1] == "self"
    assert "metaData" in names


def test_flattened_fields_carry_required_and_listing_flags() -> None:
    document = read_schema_document(_samples_dir() / "customers.get.schema.json")

    fields = {field.path: field for field in flatten_schema(document)}

    assert fields["collection[].currency"].required is True
    assert fields["collection[].currency"].type_names == ("string",)
    assert fields["collection[].email"].required is False
    assert fields["collection[].balance"].read_only is True
    assert fields["collection[].balance"].sortable is True
    assert fields["collection[].barred"].sortable is False
    assert fields["collection[].barred"].filterable is True
    assert fields["self"].required is True


def test_required_lists_are_honoured_when_flattening() -> None:
    document = load_schema_document(
        '{"type": "object", "required": ["id"], '
        '"properties": {"id": {"type": "integer"}, "label": {"type": "string"}}}'
    )

    fields = flatten_schema(document)

    assert [(field.path, field.required) for field in fields] == [
        ("id", True),
        ("label", False),
    ]


def test_nullable_types_are_reported_without_null() -> None:
    document = load_schema_document(
        '{"type": "object", "properties": {"note": {"type": ["string", "null"]}}}'
    )

    (field,) = flatten_schema(document)

    assert field.type_names == ("string",)


def test_schema_root_without_properties_is_rejected() -> None:
    document = load_schema_document('{"type": "array", "items": {"type": "string"}}')

    with pytest.raises(SchemaError, match="root must define object properties"):
        flatten_schema(document)


def test_invalid_json_text_is_rejected() -> None:
    with pytest.raises(SchemaError, match="Invalid JSON"):
        load_schema_document("{not json")


def test_non_object_root_is_rejected() -> None:
    with pytest.raises(SchemaError, match="root must be a JSON object"):
        load_schema_document("[1, 2, 3]")


def test_missing_schema_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(SchemaError, match="Schema file not found"):
        read_schema_document(tmp_path / "absent.get.schema.json")


def test_document_read_from_disk_carries_resource_descriptor() -> None:
    document = read_schema_document(
        _samples_dir() / "customers.customerNumber.contacts.contactNumber.get.schema.json"
    )

    assert document.name == "customers.customerNumber.contacts.contactNumber.get.schema.json"
    assert document.resource is not None
    assert document.resource.route == "/customers/{customerNumber}/contacts/{contactNumber}"


def test_inline_document_has_placeholder_name() -> None:
    document = load_schema_document('{"type": "object", "properties": {}}')

    assert document.name == "<inline>"
    assert document.resource is None
