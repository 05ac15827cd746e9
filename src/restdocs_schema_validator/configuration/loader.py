"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from restdocs_schema_validator.schema_management.resource_naming import SCHEMA_FILE_SUFFIX

from .runtime_settings import (
    CaseDefinition,
    Configuration,
    ReportSettings,
    SchemaSettings,
    ValidationSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to read configuration file {path}: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    schemas = _parse_schemas_section(parsed.get("schemas"), base_path)
    validation = _parse_validation_section(parsed.get("validation"))
    report = _parse_report_section(parsed.get("report"), base_path)
    cases = _parse_cases_section(parsed.get("cases"), base_path, schemas.directory)

    return Configuration(
        path=path,
        schemas=schemas,
        validation=validation,
        report=report,
        cases=cases,
    )


def _parse_schemas_section(value: Any, base_path: Path) -> SchemaSettings:
    section = _require_mapping(value, "schemas")
    raw_directory = _require_non_empty_string(section.get("directory"), "schemas.directory")
    directory = _resolve_path(base_path, raw_directory)
    if not directory.is_dir():
        raise ConfigurationError(f"Schema directory not found: {directory}")
    return SchemaSettings(directory=directory)


def _parse_validation_section(value: Any) -> ValidationSettings:
    if value is None:
        value = {}
    if not isinstance(value, Mapping):
        raise ConfigurationError("validation must be a mapping.")
    check_formats = _optional_bool(value.get("check_formats"), "validation.check_formats", True)
    parallelism = _require_positive_int(value.get("parallelism", 4), "validation.parallelism")
    return ValidationSettings(check_formats=check_formats, parallelism=parallelism)


def _parse_report_section(value: Any, base_path: Path) -> ReportSettings:
    if value is None:
        return ReportSettings(output_dir=base_path)
    if not isinstance(value, Mapping):
        raise ConfigurationError("report must be a mapping.")
    raw_output_dir = _optional_string(value.get("output_dir"), "report.output_dir")
    if raw_output_dir is None:
        return ReportSettings(output_dir=base_path)
    return ReportSettings(output_dir=_resolve_path(base_path, raw_output_dir))


def _parse_cases_section(
    value: Any, base_path: Path, schema_directory: Path
) -> tuple[CaseDefinition, ...]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigurationError("Configuration section 'cases' must be a list.")
    if not value:
        raise ConfigurationError("cases must contain at least one case.")

    cases: list[CaseDefinition] = []
    seen_ids: set[str] = set()
    for index, entry in enumerate(value):
        label = f"cases[{index}]"
        case = _parse_case(entry, label, base_path, schema_directory)
        if case.case_id in seen_ids:
            raise ConfigurationError(f"Duplicate case id: {case.case_id}")
        seen_ids.add(case.case_id)
        cases.append(case)
    return tuple(cases)


def _parse_case(
    value: Any, label: str, base_path: Path, schema_directory: Path
) -> CaseDefinition:
    entry = _require_mapping(value, label)
    case_id = _require_non_empty_string(entry.get("id"), f"{label}.id")
    schema_name = _require_non_empty_string(entry.get("schema"), f"{label}.schema")
    if not schema_name.endswith(SCHEMA_FILE_SUFFIX):
        raise ConfigurationError(f"{label}.schema must name a '*{SCHEMA_FILE_SUFFIX}' file.")
    if not (schema_directory / schema_name).is_file():
        raise ConfigurationError(
            f"{label}.schema '{schema_name}' does not exist in {schema_directory}."
        )
    instance_path = _resolve_path(
        base_path, _require_non_empty_string(entry.get("instance"), f"{label}.instance")
    )
    if not instance_path.is_file():
        raise ConfigurationError(f"{label}.instance file not found: {instance_path}")
    enabled = _optional_bool(entry.get("enabled"), f"{label}.enabled", True)
    return CaseDefinition(
        case_id=case_id,
        schema_name=schema_name,
        instance_path=instance_path,
        enabled=enabled,
    )


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
