"""Schema management errors."""

from __future__ import annotations


class SchemaError(Exception):
    """Raised for schema parsing, meta-schema or conversion failures."""


class DraftConversionError(SchemaError):
    """Raised when a draft-03 construct cannot be expressed in draft-07."""
