"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SchemaSettings:
    """Where resource schemas are read from."""

    directory: Path


@dataclass(frozen=True)
class ValidationSettings:
    """Validation behaviour shared by all cases of a run."""

    check_formats: bool
    parallelism: int


@dataclass(frozen=True)
class ReportSettings:
    """Results workbook destination."""

    output_dir: Path


@dataclass(frozen=True)
class CaseDefinition:
    """One instance document to validate against one catalog schema."""

    case_id: str
    schema_name: str
    instance_path: Path
    enabled: bool = True


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schemas: SchemaSettings
    validation: ValidationSettings
    report: ReportSettings
    cases: tuple[CaseDefinition, ...]
