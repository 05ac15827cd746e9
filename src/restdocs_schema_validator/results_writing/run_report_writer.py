"""Results workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .report_models import CaseOutcome, CaseStatus, RunMetadata

CASES_SHEET_NAME = "Cases"
VIOLATIONS_SHEET_NAME = "Violations"
RUN_INFO_SHEET_NAME = "RunInfo"

CASE_COLUMNS: tuple[str, ...] = ("ID", "Schema", "Instance", "Status", "Violations")
VIOLATION_COLUMNS: tuple[str, ...] = (
    "Case ID",
    "Path",
    "Constraint",
    "Message",
    "Expected",
    "Actual",
    "Description",
    "Schema Path",
)


@dataclass(frozen=True)
class RunCounts:
    """Computed run-level counters for the RunInfo sheet."""

    total: int
    passed: int
    failed: int
    skipped: int
    violations: int


def write_results_workbook(
    output_path: Path | str,
    outcomes: Sequence[CaseOutcome],
    run_metadata: RunMetadata,
) -> None:
    """Write the run output workbook with Cases, Violations and RunInfo sheets."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = CASES_SHEET_NAME

    _write_header(sheet, CASE_COLUMNS)
    for row, outcome in enumerate(outcomes, start=2):
        values = (
            outcome.case.case_id,
            outcome.case.schema_name,
            str(outcome.case.instance_path),
            outcome.status.value,
            outcome.violation_count,
        )
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row, column=column, value=value)

    _write_violations_sheet(workbook, outcomes)
    _write_run_info_sheet(workbook, run_metadata, outcomes)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)


def _write_header(sheet: Worksheet, columns: Sequence[str]) -> None:
    for column_index, name in enumerate(columns, start=1):
        sheet.cell(row=1, column=column_index, value=name)
        sheet.cell(row=1, column=column_index).style = "Headline 3"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )


def _write_violations_sheet(workbook: Workbook, outcomes: Sequence[CaseOutcome]) -> None:
    sheet = workbook.create_sheet(VIOLATIONS_SHEET_NAME)
    _write_header(sheet, VIOLATION_COLUMNS)
    row = 2
    for outcome in outcomes:
        if outcome.result is None:
            continue
        for violation in outcome.result.violations:
            values = (
                outcome.case.case_id,
                violation.display_path,
                violation.constraint.value,
                violation.message,
                violation.expected,
                violation.actual,
                violation.description,
                violation.schema_path,
            )
            for column, value in enumerate(values, start=1):
                sheet.cell(row=row, column=column, value=value)
            row += 1
    sheet.column_dimensions[get_column_letter(4)].width = 60


def _write_run_info_sheet(
    workbook: Workbook,
    run_metadata: RunMetadata,
    outcomes: Sequence[CaseOutcome],
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    counts = calculate_run_counts(outcomes)

    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("config_path", str(run_metadata.config_path)),
        ("output_path", str(run_metadata.output_path)),
        ("schema_directory", str(run_metadata.schema_directory)),
        ("check_formats", run_metadata.check_formats),
        ("total", counts.total),
        ("passed", counts.passed),
        ("failed", counts.failed),
        ("skipped", counts.skipped),
        ("violations", counts.violations),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)


def calculate_run_counts(outcomes: Sequence[CaseOutcome]) -> RunCounts:
    return RunCounts(
        total=len(outcomes),
        passed=sum(1 for outcome in outcomes if outcome.status == CaseStatus.PASSED),
        failed=sum(1 for outcome in outcomes if outcome.status == CaseStatus.FAILED),
        skipped=sum(1 for outcome in outcomes if outcome.status == CaseStatus.SKIPPED),
        violations=sum(outcome.violation_count for outcome in outcomes),
    )
