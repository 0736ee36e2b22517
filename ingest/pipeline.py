"""End-to-end conversion: source spreadsheet -> JSON document."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ingest.config import DEFAULT_OUTPUT_PATH, JSON_INDENT, SchemaVariant, variant_for_path
from ingest.logging_config import get_logger, log_ingest_event
from ingest.json_utils import records_to_json, write_json_atomic
from ingest.normalize import normalize
from ingest.readers import read_source_table

__all__ = ["ConversionResult", "convert"]

logger = get_logger("pipeline")


@dataclass(frozen=True)
class ConversionResult:
    """Summary of a successful conversion run."""

    rows: int
    output_path: str
    size_bytes: int
    variant: str

    @property
    def size_mb(self) -> float:
        return self.size_bytes / 1024 / 1024


def convert(
    source_path: Union[str, Path],
    output_path: Union[str, Path] = DEFAULT_OUTPUT_PATH,
    variant: Optional[SchemaVariant] = None,
    sheet: Union[int, str] = 0,
    indent: int = JSON_INDENT,
) -> ConversionResult:
    """Convert one source file into the catalog JSON document.

    The run is all-or-nothing: any IngestionError is raised before the
    output file is touched.

    Args:
        source_path: CSV or Excel file to read
        output_path: Where to write the JSON array
        variant: Schema variant; inferred from the file suffix when omitted
        sheet: Worksheet to read for Excel sources
        indent: JSON indentation
    """
    variant = variant or variant_for_path(str(source_path))
    logger.info("Reading %s source: %s", variant.name, Path(source_path).name)

    table = read_source_table(source_path, variant, sheet=sheet)
    records = normalize(table, variant)

    size = write_json_atomic(records_to_json(records, variant), output_path, indent=indent)
    result = ConversionResult(
        rows=len(records),
        output_path=str(output_path),
        size_bytes=size,
        variant=variant.name,
    )

    log_ingest_event(
        "conversion_complete",
        {
            "message": f"Successfully converted {result.rows} rows to {result.output_path}",
            "rows": result.rows,
            "output_path": result.output_path,
            "size_bytes": result.size_bytes,
            "variant": result.variant,
        },
    )
    logger.info("File size: %.2f MB", result.size_mb)
    return result
