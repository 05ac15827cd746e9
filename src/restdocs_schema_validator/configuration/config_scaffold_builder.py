"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "restdocs-validator.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Validation run configuration for restdocs-schema-validator.
# Replace every <REQUIRED> placeholder before running `run`.
# Relative paths are resolved against the directory of this file.

schemas:
  # Directory holding the `<resource>.<verb>.schema.json` files.
  directory: "<REQUIRED>"

validation:
  # Enforce `format` assertions (uri, email, date, ...). Defaults to true.
  check_formats: true
  # Number of cases validated concurrently. Defaults to 4.
  parallelism: 4

report:
  # Directory for result workbooks. Defaults to the directory of this file.
  # output_dir: "<OPTIONAL>"

cases:
  # One entry per instance document; `schema` is a file name inside schemas.directory.
  - id: "<REQUIRED>"
    schema: "<REQUIRED>"
    instance: "<REQUIRED>"
    # enabled: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML run configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder run configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
