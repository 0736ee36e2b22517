"""Configuration and constants for the converter."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from dotenv import load_dotenv

from ingest.errors import UnsupportedSourceError

__all__ = [
    "PROJECT_ROOT",
    "DEFAULT_CSV_SOURCE",
    "DEFAULT_EXCEL_SOURCE",
    "DEFAULT_OUTPUT_PATH",
    "JSON_INDENT",
    "SchemaVariant",
    "CSV_VARIANT",
    "EXCEL_VARIANT",
    "SCHEMA_VARIANTS",
    "get_schema_variant",
    "variant_for_path",
    "variant_for_keys",
]

PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(dotenv_path=PROJECT_ROOT / ".env")

# Source and output paths (allow env overrides)
DEFAULT_CSV_SOURCE = os.getenv("RUGDB_CSV_SOURCE", str(PROJECT_ROOT / "HM_Rug_Master.csv"))
DEFAULT_EXCEL_SOURCE = os.getenv(
    "RUGDB_EXCEL_SOURCE", str(PROJECT_ROOT / "HM_Rug_Master_Complete.xlsx")
)
DEFAULT_OUTPUT_PATH = os.getenv("RUGDB_OUTPUT_PATH", str(PROJECT_ROOT / "public" / "data.json"))

# Pretty-printing for the generated document
JSON_INDENT = int(os.getenv("RUGDB_JSON_INDENT", "2"))


# =============================================================================
# Schema Variants
# =============================================================================
# Each variant describes one accepted spreadsheet layout:
#   - required/optional source columns
#   - column_map: source column -> CanonicalRecord attribute
#   - output_keys: CanonicalRecord attribute -> JSON key (ordered)
#   - order_id_fields: attribute preference for the Order ID


@dataclass(frozen=True)
class SchemaVariant:
    """Data-driven description of one source spreadsheet layout."""

    name: str
    required_columns: Tuple[str, ...]
    optional_columns: Tuple[str, ...]
    column_map: Dict[str, str]
    output_keys: Dict[str, str]
    price_column: str
    identity_fields: Tuple[str, ...] = ()
    order_id_fields: Tuple[str, ...] = ()
    suffixes: Tuple[str, ...] = field(default=())
    source_format: str = "delimited"
    default_source: Optional[str] = None


CSV_VARIANT = SchemaVariant(
    name="csv",
    required_columns=(
        "Vendor",
        "Collection",
        "Size",
        "Design ID",
        "Long SKU - VPN",
        "Primary Color",
        "UPC",
        "Retail",
    ),
    optional_columns=("Product_Id",),
    column_map={
        "Vendor": "vendor",
        "Collection": "collection_name",
        "Size": "size",
        "Design ID": "design_id",
        "Long SKU - VPN": "vpn",
        "Primary Color": "primary_color",
        "UPC": "upc",
        "Retail": "retail_price",
        "Product_Id": "product_id",
    },
    output_keys={
        "vendor": "Vendor",
        "collection_name": "Collection Name",
        "size": "Size",
        "design_id": "Design ID",
        "vpn": "VPN",
        "primary_color": "Primary Color",
        "upc": "UPC",
        "retail_price": "Retail",
        "product_id": "product_id",
    },
    price_column="Retail",
    identity_fields=("product_id",),
    order_id_fields=("product_id", "vpn"),
    suffixes=(".csv", ".tsv", ".txt"),
    default_source=DEFAULT_CSV_SOURCE,
)

EXCEL_VARIANT = SchemaVariant(
    name="excel",
    required_columns=(
        "Vendor",
        "Collection Name",
        "Design ID",
        "Size",
        "Primary Color",
        "UPC",
        "Retail Price",
    ),
    optional_columns=("HM SKU",),
    column_map={
        "Vendor": "vendor",
        "Collection Name": "collection_name",
        "Design ID": "design_id",
        "Size": "size",
        "Primary Color": "primary_color",
        "UPC": "upc",
        "Retail Price": "retail_price",
        "HM SKU": "sku_override",
    },
    output_keys={
        "vendor": "Vendor",
        "collection_name": "Collection Name",
        "design_id": "Design ID",
        "size": "Size",
        "primary_color": "Primary Color",
        "upc": "UPC",
        "retail_price": "Retail Price",
        "sku_override": "HM SKU",
    },
    price_column="Retail Price",
    identity_fields=("sku_override",),
    order_id_fields=("sku_override", "design_id"),
    suffixes=(".xlsx", ".xlsm", ".xls"),
    source_format="spreadsheet",
    default_source=DEFAULT_EXCEL_SOURCE,
)

SCHEMA_VARIANTS: Dict[str, SchemaVariant] = {
    CSV_VARIANT.name: CSV_VARIANT,
    EXCEL_VARIANT.name: EXCEL_VARIANT,
}


def get_schema_variant(name: str) -> SchemaVariant:
    """Get a registered schema variant by name."""
    try:
        return SCHEMA_VARIANTS[name]
    except KeyError:
        raise UnsupportedSourceError(
            f"Unknown schema variant '{name}'. Available: {list(SCHEMA_VARIANTS)}"
        ) from None


def variant_for_path(path: str) -> SchemaVariant:
    """Pick the schema variant for a source file from its suffix."""
    suffix = Path(path).suffix.lower()
    for variant in SCHEMA_VARIANTS.values():
        if suffix in variant.suffixes:
            return variant
    raise UnsupportedSourceError(f"Unsupported source file type '{suffix or path}'")


def variant_for_keys(keys: Iterable[str]) -> Optional[SchemaVariant]:
    """Guess which variant wrote a JSON document from the keys it uses.

    The variant publishing the most of ``keys`` wins; ties go to the first
    registered variant. Returns None when no key is recognised.
    """
    present = set(keys)
    best, best_score = None, 0
    for variant in SCHEMA_VARIANTS.values():
        score = len(present.intersection(variant.output_keys.values()))
        if score > best_score:
            best, best_score = variant, score
    return best
