"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from restdocs_schema_validator.configuration.runtime_settings import Configuration
from restdocs_schema_validator.results_writing.report_models import CaseOutcome
from restdocs_schema_validator.schema_management.schema_catalog import SchemaCatalog


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one run."""

    config_path: str
    output_dir: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    output_path: Path
    total: int
    passed: int
    failed: int
    skipped: int
    case_outcomes: tuple[CaseOutcome, ...] = ()

    @property
    def all_passed(self) -> bool:
        return self.failed == 0


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    catalog: SchemaCatalog
