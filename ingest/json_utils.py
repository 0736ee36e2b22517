"""JSON export utilities."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from ingest.config import JSON_INDENT, SchemaVariant
from ingest.models import CanonicalRecord

__all__ = ["records_to_json", "records_from_json", "write_json_atomic", "load_json_records"]


def records_to_json(
    records: Iterable[CanonicalRecord], variant: SchemaVariant
) -> List[Dict[str, Any]]:
    """Convert records into JSON objects keyed the way ``variant`` publishes them."""
    return [record.to_dict(variant.output_keys) for record in records]


def write_json_atomic(
    data: Any,
    path: Union[str, Path],
    indent: int = JSON_INDENT,
) -> int:
    """Write ``data`` as JSON to ``path`` without exposing a partial file.

    The document goes to a temporary file in the same directory and is then
    moved over ``path``. On any failure the temporary file is removed and the
    previous ``path`` is left as it was.

    Returns:
        Size of the written file in bytes
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    return target.stat().st_size


def records_from_json(data: Any) -> List[CanonicalRecord]:
    """Parse a decoded JSON document into records.

    Non-object entries are skipped. Raises ValueError if ``data`` is not an array.
    """
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    return [CanonicalRecord.from_dict(obj) for obj in data if isinstance(obj, dict)]


def load_json_records(path: Union[str, Path]) -> List[CanonicalRecord]:
    """Read a generated document back into records."""
    with open(path, "r", encoding="utf-8") as f:
        return records_from_json(json.load(f))
