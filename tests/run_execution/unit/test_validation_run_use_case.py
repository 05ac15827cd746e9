"""Validation run use-case tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest
from openpyxl import load_workbook
from restdocs_schema_validator.results_writing import (
    CASES_SHEET_NAME,
    VIOLATIONS_SHEET_NAME,
    CaseStatus,
)
from restdocs_schema_validator.run_execution import (
    RunExecutionError,
    RunRequest,
    execute_validation_run,
)


def _copy_samples(tmp_path: Path) -> Path:
    samples = Path(__file__).resolve().parents[3] / "samples"
    target = tmp_path / "samples"
    shutil.copytree(samples, target)
    return target / "restdocs-validator.yaml"


def test_sample_run_reports_passed_failed_and_skipped_cases(tmp_path: Path) -> None:
    config_path = _copy_samples(tmp_path)

    outcome = execute_validation_run(RunRequest(config_path=str(config_path)))

    assert (outcome.total, outcome.passed, outcome.failed, outcome.skipped) == (5, 2, 2, 1)
    assert outcome.all_passed is False
    statuses = {item.case.case_id: item.status for item in outcome.case_outcomes}
    assert statuses == {
        "customers-page": CaseStatus.PASSED,
        "customers-missing-currency": CaseStatus.FAILED,
        "contact": CaseStatus.PASSED,
        "contact-bad-notification": CaseStatus.FAILED,
        "contact-disabled": CaseStatus.SKIPPED,
    }
    assert outcome.output_path.parent == (tmp_path / "samples" / "reports").resolve()
    assert outcome.output_path.name.startswith("restdocs-validator-results-")
    assert outcome.output_path.exists()


def test_case_outcomes_keep_configuration_order(tmp_path: Path) -> None:
    config_path = _copy_samples(tmp_path)

    outcome = execute_validation_run(RunRequest(config_path=str(config_path)))

    assert [item.case.case_id for item in outcome.case_outcomes] == [
        "customers-page",
        "customers-missing-currency",
        "contact",
        "contact-bad-notification",
        "contact-disabled",
    ]


def test_output_dir_override_and_workbook_contents(tmp_path: Path) -> None:
    config_path = _copy_samples(tmp_path)
    output_dir = tmp_path / "override"

    outcome = execute_validation_run(
        RunRequest(config_path=str(config_path), output_dir=str(output_dir))
    )

    assert outcome.output_path.parent == output_dir.resolve()
    workbook = load_workbook(outcome.output_path)
    violation_paths = [
        row[1]
        for row in workbook[VIOLATIONS_SHEET_NAME].iter_rows(min_row=2, values_only=True)
    ]
    assert violation_paths == ["/collection/0/currency", "/emailNotifications/1"]
    assert workbook[CASES_SHEET_NAME].max_row == 6


def test_disabled_case_instance_is_not_read(tmp_path: Path) -> None:
    config_path = _copy_samples(tmp_path)
    instances = config_path.parent / "instances"
    (instances / "disabled.json").write_text("{not json", encoding="utf-8")
    config_path.write_text(
        config_path.read_text(encoding="utf-8").replace(
            "    instance: instances/contact.json\n    enabled: false",
            "    instance: instances/disabled.json\n    enabled: false",
        ),
        encoding="utf-8",
    )

    outcome = execute_validation_run(RunRequest(config_path=str(config_path)))

    assert outcome.skipped == 1


def test_invalid_instance_json_is_reported_with_case_id(tmp_path: Path) -> None:
    config_path = _copy_samples(tmp_path)
    (config_path.parent / "instances" / "contact.json").write_text("{broken", encoding="utf-8")

    with pytest.raises(RunExecutionError, match="Case 'contact': invalid JSON"):
        execute_validation_run(RunRequest(config_path=str(config_path)))


def test_malformed_catalog_schema_fails_the_run(tmp_path: Path) -> None:
    config_path = _copy_samples(tmp_path)
    schema_path = config_path.parent / "economic" / "customers.get.schema.json"
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    schema["properties"]["self"]["maxLength"] = "long"
    schema_path.write_text(json.dumps(schema), encoding="utf-8")

    with pytest.raises(RunExecutionError, match="customers.get.schema.json: Malformed schema"):
        execute_validation_run(RunRequest(config_path=str(config_path)))


def test_illegal_required_annotation_fails_the_run(tmp_path: Path) -> None:
    config_path = _copy_samples(tmp_path)
    schema_path = config_path.parent / "economic" / "customers.get.schema.json"
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    schema["properties"]["collection"]["items"]["required"] = True
    schema_path.write_text(json.dumps(schema), encoding="utf-8")

    with pytest.raises(RunExecutionError, match='illegal "required" annotation'):
        execute_validation_run(RunRequest(config_path=str(config_path)))


def test_configuration_errors_are_wrapped(tmp_path: Path) -> None:
    with pytest.raises(RunExecutionError, match="Configuration file not found"):
        execute_validation_run(RunRequest(config_path=str(tmp_path / "absent.yaml")))
