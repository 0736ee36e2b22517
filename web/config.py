"""Centralized configuration for the catalog browser."""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from ingest.config import CSV_VARIANT, DEFAULT_OUTPUT_PATH, SCHEMA_VARIANTS

logger = logging.getLogger(__name__)

# Determine project root (parent of 'web' directory)
_THIS_DIR = Path(__file__).parent
_PROJECT_ROOT = _THIS_DIR.parent

# Generated catalog document: a file path or an http(s) URL
DATA_SOURCE = os.getenv("DATA_SOURCE", DEFAULT_OUTPUT_PATH)

# Seconds to wait when DATA_SOURCE is a URL
DATA_FETCH_TIMEOUT = float(os.getenv("DATA_FETCH_TIMEOUT", "15"))


def _order_id_variant(value: str) -> Optional[str]:
    name = value.strip().lower()
    if not name:
        return None
    if name not in SCHEMA_VARIANTS:
        logger.warning(
            "Ignoring ORDER_ID_VARIANT=%r: expected one of %s; "
            "the variant will be detected from the catalog data",
            value,
            list(SCHEMA_VARIANTS),
        )
        return None
    return name


def _order_id_fields(value: str) -> Tuple[str, ...]:
    return tuple(f.strip() for f in value.split(",") if f.strip())


# Order ID preference. ORDER_ID_FIELDS (comma separated attributes) wins,
# then the variant named by ORDER_ID_VARIANT, then the variant the catalog
# document was generated with.
ORDER_ID_VARIANT = _order_id_variant(os.getenv("ORDER_ID_VARIANT", ""))
ORDER_ID_FIELDS = _order_id_fields(os.getenv("ORDER_ID_FIELDS", ""))


def order_id_fields_for(
    detected_variant: Optional[str],
    fields: Optional[Tuple[str, ...]] = None,
    variant: Optional[str] = None,
) -> Tuple[str, ...]:
    """Attributes to try, in order, when resolving a row's Order ID.

    ``fields`` and ``variant`` default to the configured ORDER_ID_FIELDS and
    ORDER_ID_VARIANT.
    """
    fields = ORDER_ID_FIELDS if fields is None else fields
    variant = ORDER_ID_VARIANT if variant is None else variant
    if fields:
        return fields
    name = variant or detected_variant
    if name in SCHEMA_VARIANTS:
        return SCHEMA_VARIANTS[name].order_id_fields
    return CSV_VARIANT.order_id_fields


# Flask app settings (allow env overrides; default debug off for safety)
FLASK_HOST = os.getenv("FLASK_HOST", "127.0.0.1")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "5000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"
