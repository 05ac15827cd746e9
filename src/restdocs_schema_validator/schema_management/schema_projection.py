"""Schema loading and flattening service."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .resource_naming import describe_resource
from .schema_errors import SchemaError
from .schema_models import FlattenedField, SchemaDocument


def load_schema_document(text: str, *, source_path: Path | None = None) -> SchemaDocument:
    """Parse schema text into a structured document."""
    label = source_path.name if source_path is not None else "inline"
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid JSON in {label} schema: {exc}") from exc
    if not isinstance(root, Mapping):
        raise SchemaError(f"The {label} schema root must be a JSON object.")

    resource = describe_resource(source_path, root) if source_path is not None else None
    return SchemaDocument(root=root, source_path=source_path, resource=resource)


def read_schema_document(path: Path | str) -> SchemaDocument:
    """Read one schema file from disk."""
    schema_path = Path(path)
    if not schema_path.is_file():
        raise SchemaError(f"Schema file not found: {schema_path}")
    try:
        text = schema_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Failed to read schema file {schema_path}: {exc}") from exc
    return load_schema_document(text, source_path=schema_path)


def flatten_schema(document: SchemaDocument) -> list[FlattenedField]:
    """Return deterministic flattened fields."""
    fields: list[FlattenedField] = []
    seen_paths: set[str] = set()
    root = document.root
    if not isinstance(root.get("properties"), Mapping):
        raise SchemaError("JSON schema root must define object properties.")
    _flatten_json_schema(
        root, prefix="", required=False, fields=fields, seen_paths=seen_paths
    )
    return fields


def _flatten_json_schema(
    node: Any,
    *,
    prefix: str,
    required: bool,
    fields: list[FlattenedField],
    seen_paths: set[str],
) -> None:
    if not isinstance(node, Mapping):
        raise SchemaError("JSON schema nodes must be objects.")

    node_types = _json_schema_types(node)
    properties = node.get("properties")
    if isinstance(properties, Mapping) and properties and (
        not node_types or "object" in node_types
    ):
        listed = node.get("required")
        listed_names = set(listed) if isinstance(listed, list) else set()
        for key, child in properties.items():
            child_path = key if not prefix else f"{prefix}.{key}"
            child_required = key in listed_names or (
                isinstance(child, Mapping) and child.get("required") is True
            )
            _flatten_json_schema(
                child,
                prefix=child_path,
                required=child_required,
                fields=fields,
                seen_paths=seen_paths,
            )
        return

    items = node.get("items")
    if "array" in node_types and isinstance(items, Mapping) and "properties" in items:
        _register_field(prefix, node, required, fields, seen_paths)
        _flatten_json_schema(
            items, prefix=f"{prefix}[]", required=False, fields=fields, seen_paths=seen_paths
        )
        return

    if prefix:
        _register_field(prefix, node, required, fields, seen_paths)
        return

    raise SchemaError("JSON schema root must define object properties.")


def _json_schema_types(node: Mapping[str, Any]) -> tuple[str, ...]:
    node_type = node.get("type")
    if isinstance(node_type, list):
        filtered = [value for value in node_type if isinstance(value, str) and value != "null"]
        return tuple(filtered) if filtered else ("null",)
    if isinstance(node_type, str):
        return (node_type,)
    return ()


def _register_field(
    path: str,
    definition: Mapping[str, Any],
    required: bool,
    fields: list[FlattenedField],
    seen_paths: set[str],
) -> None:
    if not path:
        raise SchemaError("Cannot register a field without a path.")
    if path in seen_paths:
        raise SchemaError(f"Duplicate flattened field detected: {path}")
    seen_paths.add(path)
    fields.append(
        FlattenedField(
            path=path,
            definition=definition,
            required=required,
            type_names=_json_schema_types(definition),
            sortable=definition.get("sortable") is True,
            filterable=definition.get("filterable") is True,
            read_only=definition.get("readOnly") is True,
        )
    )
