"""Rug master spreadsheet -> catalog JSON converter."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from ingest.config import (
    CSV_VARIANT,
    DEFAULT_OUTPUT_PATH,
    EXCEL_VARIANT,
    SCHEMA_VARIANTS,
    SchemaVariant,
    get_schema_variant,
    variant_for_keys,
    variant_for_path,
)
from ingest.errors import (
    EmptySourceError,
    IngestionError,
    MissingRequiredColumnsError,
    SourceNotFoundError,
    UnreadableSourceError,
    UnsupportedSourceError,
)
from ingest.json_utils import records_from_json, records_to_json, write_json_atomic
from ingest.models import CanonicalRecord
from ingest.normalize import normalize
from ingest.pipeline import ConversionResult, convert
from ingest.prices import coerce_price, format_price
from ingest.readers import SourceTable, read_source_table

__all__ = [
    # Version
    "__version__",
    # Config
    "CSV_VARIANT",
    "EXCEL_VARIANT",
    "SCHEMA_VARIANTS",
    "DEFAULT_OUTPUT_PATH",
    "SchemaVariant",
    "get_schema_variant",
    "variant_for_path",
    "variant_for_keys",
    # Errors
    "IngestionError",
    "SourceNotFoundError",
    "UnsupportedSourceError",
    "EmptySourceError",
    "MissingRequiredColumnsError",
    "UnreadableSourceError",
    # Models
    "CanonicalRecord",
    "SourceTable",
    # Core functions
    "coerce_price",
    "format_price",
    "normalize",
    "read_source_table",
    "records_to_json",
    "records_from_json",
    "write_json_atomic",
    "convert",
    "ConversionResult",
]
