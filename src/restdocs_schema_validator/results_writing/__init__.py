"""Results writing domain exports."""

from .report_models import CaseOutcome, CaseStatus, RunMetadata
from .run_report_writer import (
    CASES_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    VIOLATIONS_SHEET_NAME,
    RunCounts,
    calculate_run_counts,
    write_results_workbook,
)
from .violation_rendering import render_violations_json, render_violations_text

__all__ = [
    "CASES_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "VIOLATIONS_SHEET_NAME",
    "CaseOutcome",
    "CaseStatus",
    "RunCounts",
    "RunMetadata",
    "calculate_run_counts",
    "render_violations_json",
    "render_violations_text",
    "write_results_workbook",
]
