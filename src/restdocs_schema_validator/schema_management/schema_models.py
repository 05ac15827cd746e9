"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ResourceDescriptor:
    """HTTP resource/verb combination documented by one schema file."""

    name: str
    method: str
    route: str
    restdocs_url: str | None = None

    @property
    def label(self) -> str:
        """Return the `METHOD /route` form used in listings."""
        return f"{self.method} {self.route}"


@dataclass(frozen=True)
class SchemaDocument:
    """Structured representation of a schema definition."""

    root: Mapping[str, Any]
    source_path: Path | None = None
    resource: ResourceDescriptor | None = None

    @property
    def name(self) -> str:
        if self.source_path is not None:
            return self.source_path.name
        if self.resource is not None:
            return self.resource.name
        return "<inline>"


@dataclass(frozen=True)
class FlattenedField:  # pylint: disable=too-many-instance-attributes
    """Flattened schema field definition."""

    path: str
    definition: Any
    required: bool = False
    type_names: tuple[str, ...] = ()
    sortable: bool = False
    filterable: bool = False
    read_only: bool = False
