"""Adapters from jsonschema errors to validation-domain violations."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping, Sequence, Sized
from typing import Any

from jsonschema.exceptions import ValidationError

from restdocs_schema_validator.schema_management.schema_dialects import format_pointer

from .violation_models import ConstraintKind, Violation

_CONSTRAINT_BY_KEYWORD: Mapping[str, ConstraintKind] = {
    "type": ConstraintKind.TYPE,
    "disallow": ConstraintKind.TYPE,
    "required": ConstraintKind.REQUIRED,
    "minLength": ConstraintKind.MIN_LENGTH,
    "maxLength": ConstraintKind.MAX_LENGTH,
    "minimum": ConstraintKind.MINIMUM,
    "exclusiveMinimum": ConstraintKind.MINIMUM,
    "maximum": ConstraintKind.MAXIMUM,
    "exclusiveMaximum": ConstraintKind.MAXIMUM,
    "enum": ConstraintKind.ENUM,
    "const": ConstraintKind.ENUM,
    "format": ConstraintKind.FORMAT,
    "uniqueItems": ConstraintKind.UNIQUE_ITEMS,
    "pattern": ConstraintKind.PATTERN,
    "minItems": ConstraintKind.MIN_ITEMS,
    "maxItems": ConstraintKind.MAX_ITEMS,
    "additionalProperties": ConstraintKind.ADDITIONAL_PROPERTIES,
    "additionalItems": ConstraintKind.ADDITIONAL_ITEMS,
    "dependencies": ConstraintKind.DEPENDENCIES,
    "multipleOf": ConstraintKind.MULTIPLE_OF,
    "divisibleBy": ConstraintKind.MULTIPLE_OF,
    "allOf": ConstraintKind.COMPOSITION,
    "anyOf": ConstraintKind.COMPOSITION,
    "oneOf": ConstraintKind.COMPOSITION,
    "not": ConstraintKind.COMPOSITION,
    "extends": ConstraintKind.COMPOSITION,
}
_SIZE_KEYWORDS = frozenset({"minLength", "maxLength", "minItems", "maxItems"})


def to_violations(errors: Iterable[ValidationError]) -> tuple[Violation, ...]:
    """Convert jsonschema errors into violations, keeping their emission order.

    The validator emits one `required` error per missing key; all of them are
    expanded from the first error seen at a location so that each missing key
    yields exactly one violation.
    """
    violations: list[Violation] = []
    expanded_required: set[tuple[str, str]] = set()
    for error in errors:
        if error.validator == "required":
            location = (
                format_pointer(error.absolute_path),
                format_pointer(error.absolute_schema_path),
            )
            if location in expanded_required:
                continue
            expanded_required.add(location)
            violations.extend(_required_violations(error))
            continue
        violations.append(_constraint_violation(error))
    return tuple(violations)


def _required_violations(error: ValidationError) -> Iterator[Violation]:
    instance = error.instance if isinstance(error.instance, Mapping) else {}
    required_names = error.validator_value
    if isinstance(required_names, str):
        required_names = [required_names]
    parent_path = format_pointer(error.absolute_path)
    schema_path = format_pointer(error.absolute_schema_path)
    properties = _schema_mapping(error.schema).get("properties")
    for name in required_names or ():
        if name in instance:
            continue
        definition = properties.get(name) if isinstance(properties, Mapping) else None
        yield Violation(
            path=f"{parent_path}{format_pointer([name])}",
            constraint=ConstraintKind.REQUIRED,
            message=f"{name!r} is a required property",
            expected="present",
            actual="missing",
            description=_description(definition),
            schema_path=schema_path,
        )


def _constraint_violation(error: ValidationError) -> Violation:
    keyword = str(error.validator)
    return Violation(
        path=format_pointer(error.absolute_path),
        constraint=_CONSTRAINT_BY_KEYWORD.get(keyword, ConstraintKind.OTHER),
        message=error.message,
        expected=_expected_value(keyword, error.validator_value),
        actual=_actual_value(keyword, error.instance),
        description=_description(error.schema),
        schema_path=format_pointer(error.absolute_schema_path),
    )


def _expected_value(keyword: str, validator_value: Any) -> str:
    if keyword == "type" and isinstance(validator_value, Sequence) and not isinstance(
        validator_value, str
    ):
        return " | ".join(str(item) for item in validator_value)
    return display_value(validator_value)


def _actual_value(keyword: str, instance: Any) -> str:
    if keyword in _SIZE_KEYWORDS and isinstance(instance, Sized):
        return str(len(instance))
    if keyword == "type":
        return json_type_name(instance)
    return display_value(instance)


def json_type_name(value: Any) -> str:
    """Return the JSON type name of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, Sequence):
        return "array"
    return type(value).__name__


def display_value(value: Any) -> str:
    """Render a decoded JSON value for reports."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def _description(definition: Any) -> str | None:
    description = _schema_mapping(definition).get("description")
    if isinstance(description, str) and description.strip():
        return description.strip()
    return None


def _schema_mapping(schema: Any) -> Mapping[str, Any]:
    return schema if isinstance(schema, Mapping) else {}
