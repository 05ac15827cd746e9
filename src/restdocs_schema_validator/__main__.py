"""Module entry point for `python -m restdocs_schema_validator`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
