"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from restdocs_schema_validator.configuration.runtime_settings import CaseDefinition
from restdocs_schema_validator.instance_validation.violation_models import ValidationResult


class CaseStatus(str, Enum):
    """Rendered status of one validation case."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class CaseOutcome:
    """One configured case together with its validation result."""

    case: CaseDefinition
    status: CaseStatus
    result: ValidationResult | None = None

    @property
    def violation_count(self) -> int:
        return len(self.result.violations) if self.result else 0


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    config_path: Path
    output_path: Path
    schema_directory: Path
    check_formats: bool
