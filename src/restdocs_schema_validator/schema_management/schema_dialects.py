"""JSON Schema dialect detection and meta-schema checks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from jsonschema import Draft3Validator
from jsonschema.exceptions import SchemaError as JsonSchemaError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from .schema_errors import SchemaError


def resolve_validator_class(root: Mapping[str, Any]) -> type[Validator]:
    """Return the validator class for the schema's `$schema`, defaulting to draft-03."""
    return validator_for(root, default=Draft3Validator)


def is_draft3(root: Mapping[str, Any]) -> bool:
    """Return True when the schema is written in the draft-03 dialect."""
    return resolve_validator_class(root) is Draft3Validator


def check_schema(root: Mapping[str, Any]) -> None:
    """Validate a schema against the meta-schema of its dialect.

    Raises:
      SchemaError: If the schema does not conform to its meta-schema.
    """
    validator_class = resolve_validator_class(root)
    try:
        validator_class.check_schema(root)
    except JsonSchemaError as exc:
        location = format_pointer(exc.path)
        raise SchemaError(
            f"Malformed schema at '{location or '/'}': {exc.message}"
        ) from exc


def format_pointer(tokens: Iterable[Any]) -> str:
    """Render path tokens as a JSON pointer; the root is the empty string."""
    return "".join(f"/{_escape_token(token)}" for token in tokens)


def _escape_token(token: Any) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")
