"""Scenario-style integration tests for core validation behaviors."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from click.testing import CliRunner
from restdocs_schema_validator.cli import cli
from restdocs_schema_validator.instance_validation import ConstraintKind, validate_document
from restdocs_schema_validator.schema_management import SchemaCatalog


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_catalog_lookup_then_validation_of_api_response() -> None:
    catalog = SchemaCatalog.from_directory(_project_root() / "samples" / "economic")
    document = catalog.find("GET", "/customers/{customerNumber}/contacts/{contactNumber}")
    assert document is not None

    response = {
        "customerContactNumber": 7,
        "emailNotifications": ["orders", "orders", "webinars"],
        "phone": "+45 " + "1" * 60,
        "self": "https://restapi.e-conomic.com/customers/1/contacts/7",
    }
    result = validate_document(document, response)

    constraints = sorted(violation.constraint.value for violation in result.violations)
    assert constraints == sorted(
        [
            ConstraintKind.UNIQUE_ITEMS.value,
            ConstraintKind.ENUM.value,
            ConstraintKind.MAX_LENGTH.value,
            ConstraintKind.REQUIRED.value,
        ]
    )
    assert {violation.path for violation in result.violations} == {
        "/emailNotifications",
        "/emailNotifications/2",
        "/phone",
        "/name",
    }


def test_converted_schema_validates_like_the_draft3_source(tmp_path: Path) -> None:
    runner = CliRunner()
    schema_path = _project_root() / "samples" / "economic" / "customers.get.schema.json"
    instance_path = _project_root() / "samples" / "instances" / "customers-missing-currency.json"
    converted_path = tmp_path / "customers.draft7.json"

    convert_result = runner.invoke(
        cli, ["convert", "--schema", str(schema_path), "--output", str(converted_path)]
    )
    assert convert_result.exit_code == 0

    draft3 = runner.invoke(
        cli,
        [
            "validate",
            "--schema",
            str(schema_path),
            "--instance",
            str(instance_path),
            "--format",
            "json",
        ],
    )
    converted = runner.invoke(
        cli,
        [
            "validate",
            "--schema",
            str(converted_path),
            "--instance",
            str(instance_path),
            "--format",
            "json",
        ],
    )

    assert draft3.exit_code == converted.exit_code == 1
    assert json.loads(draft3.output) == json.loads(converted.output)


def test_module_entry_point_runs_help() -> None:
    env = dict(os.environ)
    src_dir = str(_project_root() / "src")
    env["PYTHONPATH"] = os.pathsep.join(filter(None, (src_dir, env.get("PYTHONPATH"))))

    completed = subprocess.run(
        [sys.executable, "-m", "restdocs_schema_validator", "--help"],
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )

    assert completed.returncode == 0
    assert "validate" in completed.stdout
