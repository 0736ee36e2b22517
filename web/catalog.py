"""Load the generated catalog document for the browser.

The document is either a local file or an http(s) URL. A missing or broken
document is not fatal: callers get an empty record list plus an error
message and render a "no data" state.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Set

import requests

from ingest.config import variant_for_keys
from ingest.json_utils import records_from_json
from ingest.models import CanonicalRecord

from .config import DATA_FETCH_TIMEOUT, DATA_SOURCE

__all__ = ["CatalogLoad", "load_records", "get_catalog", "clear_catalog_cache"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogLoad:
    """Result of loading the catalog: records, or an error and no records.

    ``variant`` names the schema variant whose keys the document uses, when
    it could be told.
    """

    records: List[CanonicalRecord] = field(default_factory=list)
    error: Optional[str] = None
    source: Optional[str] = None
    variant: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_json(source: str, timeout: float):
    if _is_url(source):
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
        return response.json()

    with open(Path(source), "r", encoding="utf-8") as f:
        return json.load(f)


def _detect_variant(data: List[Any]) -> Optional[str]:
    keys: Set[str] = set()
    for obj in data:
        if isinstance(obj, dict):
            keys.update(obj)
    variant = variant_for_keys(keys)
    return variant.name if variant else None


def load_records(source: str = DATA_SOURCE, timeout: float = DATA_FETCH_TIMEOUT) -> CatalogLoad:
    """Load and parse the catalog document at ``source``.

    Never raises for fetch or parse problems; those are reported through
    ``CatalogLoad.error``.
    """
    try:
        data = _fetch_json(source, timeout)
        records = records_from_json(data)
    except (OSError, requests.RequestException, ValueError) as e:
        # json.JSONDecodeError and requests' JSON errors are ValueErrors
        logger.error("Error loading data from %s: %s", source, e)
        return CatalogLoad(records=[], error=str(e), source=source)

    variant = _detect_variant(data)
    logger.info(
        "Loaded %d records from %s (variant: %s)", len(records), source, variant or "unknown"
    )
    return CatalogLoad(records=records, source=source, variant=variant)


_cache: Optional[CatalogLoad] = None


def get_catalog(source: Optional[str] = None) -> CatalogLoad:
    """Cached load of the configured catalog.

    A failed load is not cached so the next request retries.
    """
    global _cache
    wanted = source or DATA_SOURCE
    if _cache is not None and _cache.source == wanted:
        return _cache

    result = load_records(wanted)
    if result.ok:
        _cache = result
    return result


def clear_catalog_cache() -> None:
    """Forget the cached catalog (e.g. after regenerating data.json)."""
    global _cache
    _cache = None
