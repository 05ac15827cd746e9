"""Instance validation service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from jsonschema import Draft3Validator, Draft7Validator, FormatChecker
from jsonschema.protocols import Validator

from restdocs_schema_validator.schema_management import (
    SchemaDocument,
    SchemaError,
    check_schema,
    convert_draft3_schema,
    is_draft3,
)
from restdocs_schema_validator.schema_management.schema_dialects import resolve_validator_class

from .violation_mappers import to_violations
from .violation_models import ValidationResult

_LOGGER = logging.getLogger(__name__)


class SchemaValidator:
    """Validator bound to one checked and, for draft-03, converted schema.

    Construction fails fast with `SchemaError` when the schema is malformed;
    `validate` never raises for non-conforming instances.
    """

    def __init__(self, schema: Mapping[str, Any], *, check_formats: bool = True) -> None:
        if not isinstance(schema, Mapping):
            raise SchemaError("Schema must be a JSON object.")
        check_schema(schema)
        validator_class: type[Validator]
        draft3 = is_draft3(schema)
        if draft3:
            effective_schema: Mapping[str, Any] = convert_draft3_schema(schema)
            check_schema(effective_schema)
            validator_class = Draft7Validator
        else:
            effective_schema = schema
            validator_class = resolve_validator_class(schema)
        format_checker: FormatChecker | None = None
        if check_formats:
            format_checker = _draft3_format_checker() if draft3 else validator_class.FORMAT_CHECKER
        self._schema = effective_schema
        self._validator = validator_class(effective_schema, format_checker=format_checker)
        _LOGGER.debug(
            "Prepared %s for schema %r",
            validator_class.__name__,
            schema.get("title", "<untitled>"),
        )

    @property
    def effective_schema(self) -> Mapping[str, Any]:
        """Schema actually enforced, after any draft conversion."""
        return self._schema

    def validate(self, instance: Any) -> ValidationResult:
        """Return every violation of the bound schema found in `instance`."""
        return ValidationResult(violations=to_violations(self._validator.iter_errors(instance)))


def validate(
    schema: Mapping[str, Any], instance: Any, *, check_formats: bool = True
) -> ValidationResult:
    """Validate one JSON value against one schema.

    Args:
      schema: Decoded schema document (draft-03 unless `$schema` says otherwise).
      instance: Arbitrary decoded JSON value.
      check_formats: Whether `format` assertions are enforced.

    Returns:
      The violations found; an empty result means the instance conforms.

    Raises:
      SchemaError: If the schema itself is malformed.
    """
    return SchemaValidator(schema, check_formats=check_formats).validate(instance)


def validate_document(
    document: SchemaDocument, instance: Any, *, check_formats: bool = True
) -> ValidationResult:
    """Validate one JSON value against a loaded schema document."""
    try:
        return validate(document.root, instance, check_formats=check_formats)
    except SchemaError as exc:
        raise SchemaError(f"{document.name}: {exc}") from exc


def _draft3_format_checker() -> FormatChecker:
    """Draft-07 format checks overlaid with the draft-03 ones.

    Draft-03 names (`ip-address`, `host-name`, `color`, `utc-millisec`) keep
    their checks and `time` keeps its draft-03 `HH:MM:SS` meaning.
    """
    checker = FormatChecker(formats=())
    checker.checkers = {
        **Draft7Validator.FORMAT_CHECKER.checkers,
        **Draft3Validator.FORMAT_CHECKER.checkers,
    }
    return checker
