"""Schema management exports."""

from .draft_conversion import DRAFT7_SCHEMA_URI, convert_draft3_schema
from .resource_naming import describe_resource
from .schema_catalog import SchemaCatalog
from .schema_dialects import check_schema, is_draft3
from .schema_errors import DraftConversionError, SchemaError
from .schema_models import FlattenedField, ResourceDescriptor, SchemaDocument
from .schema_projection import flatten_schema, load_schema_document, read_schema_document

__all__ = [
    "DRAFT7_SCHEMA_URI",
    "DraftConversionError",
    "FlattenedField",
    "ResourceDescriptor",
    "SchemaCatalog",
    "SchemaDocument",
    "SchemaError",
    "check_schema",
    "convert_draft3_schema",
    "describe_resource",
    "flatten_schema",
    "is_draft3",
    "load_schema_document",
    "read_schema_document",
]
