"""Instance validation entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConstraintKind(str, Enum):
    """Schema constraint families a violation can belong to."""

    TYPE = "type"
    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    ENUM = "enum"
    FORMAT = "format"
    UNIQUE_ITEMS = "uniqueItems"
    PATTERN = "pattern"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    ADDITIONAL_ITEMS = "additionalItems"
    DEPENDENCIES = "dependencies"
    MULTIPLE_OF = "multipleOf"
    COMPOSITION = "composition"
    OTHER = "other"


@dataclass(frozen=True)
class Violation:  # pylint: disable=too-many-instance-attributes
    """Mismatch between one instance location and one schema constraint."""

    path: str
    constraint: ConstraintKind
    message: str
    expected: str
    actual: str
    description: str | None = None
    schema_path: str = ""

    @property
    def display_path(self) -> str:
        return self.path or "/"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one instance against one schema."""

    violations: tuple[Violation, ...]

    @property
    def is_valid(self) -> bool:
        """Return True when no violations are present."""
        return not self.violations

    def by_constraint(self, constraint: ConstraintKind) -> tuple[Violation, ...]:
        return tuple(
            violation for violation in self.violations if violation.constraint == constraint
        )
