"""Instance validation domain exports."""

from .schema_validator import SchemaValidator, validate, validate_document
from .violation_mappers import display_value, json_type_name, to_violations
from .violation_models import ConstraintKind, ValidationResult, Violation

__all__ = [
    "ConstraintKind",
    "SchemaValidator",
    "ValidationResult",
    "Violation",
    "display_value",
    "json_type_name",
    "to_violations",
    "validate",
    "validate_document",
]
