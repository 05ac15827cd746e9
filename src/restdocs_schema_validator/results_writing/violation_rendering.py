"""Console renderings of validation results."""

from __future__ import annotations

import json
from typing import Any

from restdocs_schema_validator.instance_validation.violation_models import (
    ValidationResult,
    Violation,
)


def render_violations_text(result: ValidationResult, *, label: str | None = None) -> str:
    """Render one line per violation, or an OK line for conforming instances."""
    prefix = f"{label}: " if label else ""
    if result.is_valid:
        return f"{prefix}OK"
    lines = [f"{prefix}{len(result.violations)} violation(s)"]
    for violation in result.violations:
        line = f"  {violation.display_path} [{violation.constraint.value}] {violation.message}"
        if violation.description:
            line += f" ({violation.description})"
        lines.append(line)
    return "\n".join(lines)


def render_violations_json(result: ValidationResult) -> str:
    """Render the result as a JSON document."""
    payload = {
        "valid": result.is_valid,
        "violations": [_violation_payload(violation) for violation in result.violations],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _violation_payload(violation: Violation) -> dict[str, Any]:
    return {
        "path": violation.path,
        "constraint": violation.constraint.value,
        "message": violation.message,
        "expected": violation.expected,
        "actual": violation.actual,
        "description": violation.description,
        "schema_path": violation.schema_path,
    }
