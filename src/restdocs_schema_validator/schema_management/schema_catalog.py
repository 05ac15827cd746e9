"""Directory-backed catalog of resource schemas."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .resource_naming import SCHEMA_FILE_SUFFIX
from .schema_dialects import check_schema
from .schema_errors import SchemaError
from .schema_models import SchemaDocument
from .schema_projection import read_schema_document

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaCatalog:
    """Checked schema documents keyed by file name."""

    directory: Path
    documents: Mapping[str, SchemaDocument] = field(default_factory=dict)

    @classmethod
    def from_directory(cls, directory: Path | str) -> SchemaCatalog:
        """Load and check every `*.schema.json` file directly inside `directory`.

        Raises:
          SchemaError: If the directory is missing or any schema is malformed.
        """
        root = Path(directory)
        if not root.is_dir():
            raise SchemaError(f"Schema directory not found: {root}")

        documents: dict[str, SchemaDocument] = {}
        for schema_path in sorted(root.glob(f"*{SCHEMA_FILE_SUFFIX}")):
            document = read_schema_document(schema_path)
            try:
                check_schema(document.root)
            except SchemaError as exc:
                raise SchemaError(f"{schema_path.name}: {exc}") from exc
            documents[schema_path.name] = document
            _LOGGER.debug("Loaded schema %s", schema_path.name)

        _LOGGER.info("Loaded %d schema(s) from %s", len(documents), root)
        return cls(directory=root, documents=documents)

    def __iter__(self) -> Iterator[SchemaDocument]:
        return iter(self.documents.values())

    def __len__(self) -> int:
        return len(self.documents)

    def names(self) -> tuple[str, ...]:
        return tuple(self.documents)

    def get(self, name: str) -> SchemaDocument:
        """Return the schema stored under the given file name."""
        try:
            return self.documents[name]
        except KeyError as exc:
            raise SchemaError(f"Schema '{name}' not found in {self.directory}") from exc

    def find(self, method: str, route: str) -> SchemaDocument | None:
        """Return the schema documenting `METHOD route`, if any."""
        wanted_method = method.strip().upper()
        wanted_route = "/" + route.strip().strip("/")
        for document in self.documents.values():
            resource = document.resource
            if resource and resource.method == wanted_method and resource.route == wanted_route:
                return document
        return None
