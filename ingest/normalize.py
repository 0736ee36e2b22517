"""Turn a source table into canonical catalog records.

The pipeline is driven entirely by the ``SchemaVariant`` it is given:
required/optional columns, the column -> attribute mapping and the price
column all come from configuration.
"""

from collections import OrderedDict
from typing import Any, Dict, List, Sequence, Tuple

from ingest.config import SchemaVariant
from ingest.errors import EmptySourceError, MissingRequiredColumnsError
from ingest.logging_config import get_logger, log_ingest_event
from ingest.models import CanonicalRecord, is_blank
from ingest.prices import coerce_price
from ingest.readers import SourceTable

__all__ = [
    "normalize",
    "normalize_row",
    "check_columns",
    "compute_fill_rate",
    "find_vendor_conflicts",
]

logger = get_logger("normalize")


def check_columns(header: Sequence[str], variant: SchemaVariant) -> List[str]:
    """Validate the header against the variant.

    Returns the optional columns that are missing. Raises
    MissingRequiredColumnsError naming every absent required column.
    """
    present = set(header)
    missing_required = [col for col in variant.required_columns if col not in present]
    if missing_required:
        logger.error("Required columns are missing: %s", missing_required)
        logger.error("Actual columns found: %s", list(header))
        raise MissingRequiredColumnsError(missing_required, actual=header)

    return [col for col in variant.optional_columns if col not in present]


def normalize_row(row: Dict[str, Any], variant: SchemaVariant) -> CanonicalRecord:
    """Map one source row onto a CanonicalRecord."""
    values: Dict[str, Any] = {}
    for source_col, attribute in variant.column_map.items():
        value = row.get(source_col)
        if source_col == variant.price_column:
            value = coerce_price(value)
        values[attribute] = value
    return CanonicalRecord.from_values(values)


def compute_fill_rate(
    records: Sequence[CanonicalRecord], attribute: str
) -> Tuple[int, int, float]:
    """Count records with a non-empty ``attribute``.

    Returns (filled, total, percent).
    """
    total = len(records)
    filled = sum(1 for r in records if not is_blank(r.get(attribute)))
    percent = round(filled / total * 100, 1) if total else 0.0
    return filled, total, percent


def find_vendor_conflicts(records: Sequence[CanonicalRecord]) -> Dict[str, List[str]]:
    """Collections whose members report more than one vendor.

    Vendors are listed in first-seen order; the first one is what the views
    display.
    """
    vendors: "OrderedDict[str, List[str]]" = OrderedDict()
    for record in records:
        seen = vendors.setdefault(record.collection_name, [])
        if record.vendor not in seen:
            seen.append(record.vendor)
    return {name: names for name, names in vendors.items() if len(names) > 1}


def _report_diagnostics(records: List[CanonicalRecord], variant: SchemaVariant) -> None:
    for attribute in variant.identity_fields:
        filled, total, percent = compute_fill_rate(records, attribute)
        log_ingest_event(
            "fill_rate",
            {
                "message": f"{attribute}: {filled} of {total} rows have values ({percent:.1f}%)",
                "field": attribute,
                "filled": filled,
                "total": total,
                "percent": percent,
            },
        )

    for collection, names in find_vendor_conflicts(records).items():
        logger.warning(
            "Collection '%s' lists %d vendors %s; using '%s'",
            collection,
            len(names),
            names,
            names[0],
        )


def normalize(table: SourceTable, variant: SchemaVariant) -> List[CanonicalRecord]:
    """Validate ``table`` and map every row to a CanonicalRecord.

    Row order is preserved. Nothing is returned unless every check passes.

    Raises:
        EmptySourceError: the table has no data rows
        MissingRequiredColumnsError: required columns are absent
    """
    if len(table.rows) == 0:
        raise EmptySourceError(table.path)

    logger.info("Found %d rows in source", len(table.rows))

    missing_optional = check_columns(table.header, variant)
    if missing_optional:
        logger.info("Optional column(s) not found: %s", ", ".join(missing_optional))
    logger.info("All required columns found")

    records = [normalize_row(row, variant) for row in table.rows]

    _report_diagnostics(records, variant)
    return records
