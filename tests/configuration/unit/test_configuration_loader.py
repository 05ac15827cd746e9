"""Configuration loader tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from restdocs_schema_validator.configuration.loader import ConfigurationError, load_configuration


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def _prepare_workspace(tmp_path: Path) -> None:
    schemas = tmp_path / "schemas"
    schemas.mkdir()
    _write_file(
        schemas / "customers.get.schema.json",
        '{"type": "object", "properties": {"self": {"type": "string", "required": true}}}',
    )
    instances = tmp_path / "instances"
    instances.mkdir()
    _write_file(instances / "page.json", '{"self": "https://example.com/customers"}')


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    _prepare_workspace(tmp_path)
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
schemas:
  directory: schemas
cases:
  - id: page
    schema: customers.get.schema.json
    instance: instances/page.json
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.schemas.directory == (tmp_path / "schemas").resolve()
    assert configuration.validation.check_formats is True
    assert configuration.validation.parallelism == 4
    assert configuration.report.output_dir == tmp_path.resolve()
    (case,) = configuration.cases
    assert case.case_id == "page"
    assert case.schema_name == "customers.get.schema.json"
    assert case.instance_path == (tmp_path / "instances" / "page.json").resolve()
    assert case.enabled is True


def test_loads_explicit_validation_and_report_settings(tmp_path: Path) -> None:
    _prepare_workspace(tmp_path)
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
schemas:
  directory: schemas
validation:
  check_formats: false
  parallelism: 2
report:
  output_dir: out/reports
cases:
  - id: page
    schema: customers.get.schema.json
    instance: instances/page.json
  - id: page-disabled
    schema: customers.get.schema.json
    instance: instances/page.json
    enabled: false
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.validation.check_formats is False
    assert configuration.validation.parallelism == 2
    assert configuration.report.output_dir == (tmp_path / "out" / "reports").resolve()
    assert [case.enabled for case in configuration.cases] == [True, False]


def test_sample_configuration_loads() -> None:
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "restdocs-validator.yaml"

    configuration = load_configuration(sample_path)

    assert configuration.schemas.directory.name == "economic"
    assert len(configuration.cases) == 5
    assert configuration.cases[-1].enabled is False


def test_missing_configuration_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_configuration(tmp_path / "absent.yaml")


def test_invalid_yaml_is_reported(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "schemas: [unclosed")

    with pytest.raises(ConfigurationError, match="Failed to parse configuration file"):
        load_configuration(config_path)


def test_missing_schemas_section_is_reported(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "cases: []\n")

    with pytest.raises(ConfigurationError, match="Configuration section 'schemas' is required."):
        load_configuration(config_path)


def test_missing_schema_directory_is_reported(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "schemas:\n  directory: nowhere\n")

    with pytest.raises(ConfigurationError, match="Schema directory not found"):
        load_configuration(config_path)


@pytest.mark.parametrize(
    ("cases_yaml", "message"),
    [
        ("cases: page\n", "Configuration section 'cases' must be a list."),
        ("cases: []\n", "cases must contain at least one case."),
        (
            "cases:\n  - id: page\n    schema: orders.get.schema.json\n"
            "    instance: instances/page.json\n",
            "cases[0].schema 'orders.get.schema.json' does not exist",
        ),
        (
            "cases:\n  - id: page\n    schema: customers.json\n    instance: instances/page.json\n",
            "cases[0].schema must name a '*.schema.json' file.",
        ),
        (
            "cases:\n  - id: page\n    schema: customers.get.schema.json\n"
            "    instance: instances/missing.json\n",
            "cases[0].instance file not found",
        ),
        (
            "cases:\n  - id: page\n    schema: customers.get.schema.json\n"
            "    instance: instances/page.json\n    enabled: 'no'\n",
            "cases[0].enabled must be true or false.",
        ),
        (
            "cases:\n  - schema: customers.get.schema.json\n    instance: instances/page.json\n",
            "cases[0].id must be a string.",
        ),
    ],
)
def test_invalid_cases_are_reported(tmp_path: Path, cases_yaml: str, message: str) -> None:
    _prepare_workspace(tmp_path)
    config_path = _write_file(
        tmp_path / "config.yaml", "schemas:\n  directory: schemas\n" + cases_yaml
    )

    with pytest.raises(ConfigurationError) as excinfo:
        load_configuration(config_path)

    assert message in str(excinfo.value)


def test_duplicate_case_ids_are_rejected(tmp_path: Path) -> None:
    _prepare_workspace(tmp_path)
    case = (
        "  - id: page\n    schema: customers.get.schema.json\n    instance: instances/page.json\n"
    )
    config_path = _write_file(
        tmp_path / "config.yaml", "schemas:\n  directory: schemas\ncases:\n" + case + case
    )

    with pytest.raises(ConfigurationError, match="Duplicate case id: page"):
        load_configuration(config_path)


@pytest.mark.parametrize("parallelism", ["0", "-1", "two", "true"])
def test_parallelism_must_be_a_positive_integer(tmp_path: Path, parallelism: str) -> None:
    _prepare_workspace(tmp_path)
    config_path = _write_file(
        tmp_path / "config.yaml",
        f"""
schemas:
  directory: schemas
validation:
  parallelism: {parallelism}
cases:
  - id: page
    schema: customers.get.schema.json
    instance: instances/page.json
""",
    )

    with pytest.raises(ConfigurationError, match="validation.parallelism must be"):
        load_configuration(config_path)


def test_unreadable_configuration_is_reported(tmp_path: Path) -> None:
    config_dir = tmp_path / "config.yaml"
    config_dir.mkdir()

    with pytest.raises(ConfigurationError, match="Failed to read configuration file"):
        load_configuration(config_dir)
