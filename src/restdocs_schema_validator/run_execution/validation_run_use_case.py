"""Run execution use-case service."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from restdocs_schema_validator.configuration import (
    CaseDefinition,
    ConfigurationError,
    load_configuration,
)
from restdocs_schema_validator.instance_validation import SchemaValidator
from restdocs_schema_validator.results_writing import (
    CaseOutcome,
    CaseStatus,
    RunMetadata,
    calculate_run_counts,
    write_results_workbook,
)
from restdocs_schema_validator.schema_management import SchemaCatalog, SchemaError

from .run_contracts import RunArtifacts, RunOutcome, RunRequest

_LOGGER = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_validation_run(request: RunRequest) -> RunOutcome:
    """Validate every configured case and write the results workbook."""
    artifacts = _load_run_artifacts(request.config_path)
    configuration = artifacts.configuration
    run_start = datetime.now(UTC)
    instances = _load_instances(configuration.cases)

    _LOGGER.info(
        "Validating %d case(s) against %d schema(s)",
        len(configuration.cases),
        len(artifacts.catalog),
    )
    try:
        with ThreadPoolExecutor(max_workers=configuration.validation.parallelism) as executor:
            outcomes = tuple(
                executor.map(
                    lambda case: _evaluate_case(
                        case,
                        instances.get(case.case_id),
                        artifacts.catalog,
                        configuration.validation.check_formats,
                    ),
                    configuration.cases,
                )
            )
    except SchemaError as exc:
        raise RunExecutionError(str(exc)) from exc

    output_dir = (
        Path(request.output_dir) if request.output_dir else configuration.report.output_dir
    )
    output_path = _resolve_output_path(configuration.path, output_dir)
    run_metadata = RunMetadata(
        run_start=run_start,
        config_path=configuration.path.resolve(),
        output_path=output_path.resolve(),
        schema_directory=configuration.schemas.directory,
        check_formats=configuration.validation.check_formats,
    )
    try:
        write_results_workbook(output_path, outcomes, run_metadata)
    except OSError as exc:
        raise RunExecutionError(f"Failed to write results workbook: {exc}") from exc

    counts = calculate_run_counts(outcomes)
    _LOGGER.info(
        "Run finished: %d passed, %d failed, %d skipped",
        counts.passed,
        counts.failed,
        counts.skipped,
    )
    return RunOutcome(
        output_path=output_path.resolve(),
        total=counts.total,
        passed=counts.passed,
        failed=counts.failed,
        skipped=counts.skipped,
        case_outcomes=outcomes,
    )


def _resolve_output_path(config_path: Path, output_dir: Path) -> Path:
    timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return output_dir / f"{config_path.stem}-results-{timestamp}.xlsx"


def _load_run_artifacts(config_path: str) -> RunArtifacts:
    try:
        configuration = load_configuration(config_path)
        catalog = SchemaCatalog.from_directory(configuration.schemas.directory)
        for case in configuration.cases:
            catalog.get(case.schema_name)
    except (ConfigurationError, SchemaError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunArtifacts(configuration=configuration, catalog=catalog)


def _load_instances(cases: Sequence[CaseDefinition]) -> dict[str, Any]:
    instances: dict[str, Any] = {}
    for case in cases:
        if not case.enabled:
            continue
        try:
            text = case.instance_path.read_text(encoding="utf-8")
            instances[case.case_id] = json.loads(text)
        except OSError as exc:
            raise RunExecutionError(
                f"Case '{case.case_id}': failed to read instance {case.instance_path}: {exc}"
            ) from exc
        except json.JSONDecodeError as exc:
            raise RunExecutionError(
                f"Case '{case.case_id}': invalid JSON in {case.instance_path}: {exc}"
            ) from exc
    return instances


def _evaluate_case(
    case: CaseDefinition,
    instance: Any,
    catalog: SchemaCatalog,
    check_formats: bool,
) -> CaseOutcome:
    if not case.enabled:
        return CaseOutcome(case=case, status=CaseStatus.SKIPPED)

    document = catalog.get(case.schema_name)
    try:
        validator = SchemaValidator(document.root, check_formats=check_formats)
    except SchemaError as exc:
        raise SchemaError(f"{document.name}: {exc}") from exc
    result = validator.validate(instance)
    status = CaseStatus.PASSED if result.is_valid else CaseStatus.FAILED
    _LOGGER.debug(
        "Case %s against %s: %s (%d violation(s))",
        case.case_id,
        case.schema_name,
        status.value,
        len(result.violations),
    )
    return CaseOutcome(case=case, status=status, result=result)
