"""Derived views over the catalog record sequence.

Everything here is a pure function of (records, parameters): search term,
sort config and selected colour are passed in by the caller, inputs are
never mutated, and the same arguments always give the same result. The
three views are:

1. collection summaries (``group_by_collection``)
2. per-collection design or colour breakdown (``group_by_design_or_color``)
3. variant rows for one group (``list_variants``) with ``resolve_order_id``
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ingest.config import CSV_VARIANT
from ingest.models import CanonicalRecord, is_blank
from ingest.prices import format_price

__all__ = [
    "NO_VALUE",
    "UNKNOWN",
    "DEFAULT_ORDER_ID_FIELDS",
    "GroupMode",
    "CollectionSummary",
    "GroupSummary",
    "OrderId",
    "SortConfig",
    "group_by_collection",
    "group_by_design_or_color",
    "default_color",
    "filter_by_search_term",
    "filter_by_exact_field",
    "group_key",
    "sort_by",
    "resolve_order_id",
    "collection_info",
    "list_variants",
    "format_cell",
    "record_to_row",
]

NO_VALUE = "N/A"
UNKNOWN = "Unknown"

DEFAULT_ORDER_ID_FIELDS: Tuple[str, ...] = CSV_VARIANT.order_id_fields

PRICE_FIELDS = frozenset({"retail_price", "Retail", "Retail Price"})

ASC = "asc"
DESC = "desc"

KeySelector = Union[str, Callable[[Any], Any]]


class GroupMode(str, Enum):
    BY_DESIGN = "design"
    BY_COLOR = "color"


@dataclass(frozen=True)
class CollectionSummary:
    collection_name: str
    vendor: str
    count: int
    members: Tuple[CanonicalRecord, ...] = field(default=(), repr=False)

    def to_dict(self, include_members: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "collectionName": self.collection_name,
            "vendor": self.vendor,
            "count": self.count,
        }
        if include_members:
            data["members"] = [record_to_row(r) for r in self.members]
        return data


@dataclass(frozen=True)
class GroupSummary:
    """A design or colour inside one collection."""

    key: str
    count: int
    sizes: Tuple[str, ...] = ()

    @property
    def size_count(self) -> int:
        return len(self.sizes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "count": self.count,
            "sizes": list(self.sizes),
            "sizeCount": self.size_count,
        }


@dataclass(frozen=True)
class OrderId:
    value: str
    is_present: bool

    @property
    def display(self) -> str:
        return self.value if self.is_present else NO_VALUE


def _field(item: Any, key: KeySelector) -> Any:
    if callable(key):
        return key(item)
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def _label(value: Any) -> str:
    return UNKNOWN if is_blank(value) else str(value)


def group_key(attribute: str) -> Callable[[Any], str]:
    """Selector giving the label a record is grouped under for ``attribute``.

    Blank values read as "Unknown", matching the keys the grouping functions
    emit, so a group can be looked up again by its key.
    """
    return lambda item: _label(_field(item, attribute))


# ---------- GROUPING ----------


def group_by_collection(records: Iterable[CanonicalRecord]) -> List[CollectionSummary]:
    """Group records by exact collection name, in first-seen order.

    The vendor shown for a collection is the first member's vendor.
    """
    grouped: Dict[str, Tuple[str, List[CanonicalRecord]]] = {}
    for record in records:
        name = _label(_field(record, "collection_name"))
        if name not in grouped:
            grouped[name] = (_label(_field(record, "vendor")), [])
        grouped[name][1].append(record)

    return [
        CollectionSummary(collection_name=name, vendor=vendor, count=len(members), members=tuple(members))
        for name, (vendor, members) in grouped.items()
    ]


def group_by_design_or_color(
    records: Iterable[CanonicalRecord],
    mode: Union[GroupMode, str] = GroupMode.BY_COLOR,
) -> List[GroupSummary]:
    """Group one collection's records by design ID or by primary colour.

    Each summary carries the member count and the distinct sizes seen, in
    first-seen order. Groups are returned in first-seen order.
    """
    mode = GroupMode(mode)
    attribute = "design_id" if mode is GroupMode.BY_DESIGN else "primary_color"

    counts: Dict[str, int] = {}
    sizes: Dict[str, Dict[str, None]] = {}
    for record in records:
        key = _label(_field(record, attribute))
        counts[key] = counts.get(key, 0) + 1
        bucket = sizes.setdefault(key, {})
        size = _field(record, "size")
        if not is_blank(size):
            bucket[str(size)] = None

    return [GroupSummary(key=key, count=count, sizes=tuple(sizes[key])) for key, count in counts.items()]


def default_color(summaries: Sequence[GroupSummary]) -> Optional[str]:
    """The colour offering the most distinct sizes; ties go to the first seen."""
    if not summaries:
        return None
    return max(summaries, key=lambda s: s.size_count).key


# ---------- FILTERING ----------


def filter_by_search_term(items: Iterable[Any], term: Optional[str], key: KeySelector) -> List[Any]:
    """Case-insensitive substring match on ``key``. An empty term keeps everything."""
    if not term:
        return list(items)
    needle = term.lower()
    return [item for item in items if needle in str(_field(item, key) or "").lower()]


def filter_by_exact_field(records: Iterable[Any], field_name: KeySelector, value: Any) -> List[Any]:
    """Keep records whose ``field_name`` equals ``value`` exactly."""
    return [r for r in records if _field(r, field_name) == value]


# ---------- SORTING ----------


def _sort_key(value: Any) -> Tuple[int, Any]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


def sort_by(items: Iterable[Any], key: KeySelector, direction: str = ASC) -> List[Any]:
    """Stable sort on ``key``, returning a new list.

    Numbers compare numerically and strings by code point. Items with no
    value for ``key`` keep their relative order after everything else, in
    either direction.
    """
    if direction not in (ASC, DESC):
        raise ValueError(f"direction must be '{ASC}' or '{DESC}', got {direction!r}")

    present, absent = [], []
    for item in items:
        (absent if is_blank(_field(item, key)) else present).append(item)

    ordered = sorted(present, key=lambda item: _sort_key(_field(item, key)), reverse=direction == DESC)
    return ordered + absent


@dataclass(frozen=True)
class SortConfig:
    """Current sort column and direction of a listing."""

    key: Optional[str] = None
    direction: str = ASC

    def toggle(self, key: str) -> "SortConfig":
        """Clicking the active column flips direction; a new column starts ascending."""
        if self.key == key and self.direction == ASC:
            return SortConfig(key, DESC)
        return SortConfig(key, ASC)

    def apply(self, items: Iterable[Any]) -> List[Any]:
        if self.key is None:
            return list(items)
        return sort_by(items, self.key, self.direction)


# ---------- ORDER ID & DISPLAY ----------


def resolve_order_id(record: Any, fields: Sequence[str] = DEFAULT_ORDER_ID_FIELDS) -> OrderId:
    """Pick the value staff copy when ordering a variant.

    The first non-empty attribute in ``fields`` wins; if all are empty the
    result has ``is_present=False``.
    """
    for name in fields:
        value = _field(record, name)
        if not is_blank(value):
            return OrderId(value=str(value).strip(), is_present=True)
    return OrderId(value="", is_present=False)


def collection_info(records: Sequence[CanonicalRecord]) -> Dict[str, str]:
    """Header info for a collection page, taken from its first record."""
    if not records:
        return {"collection_name": "", "vendor": ""}
    first = records[0]
    return {
        "collection_name": _label(_field(first, "collection_name")),
        "vendor": _label(_field(first, "vendor")),
    }


def list_variants(
    records: Iterable[CanonicalRecord],
    collection: str,
    design_id: Optional[str] = None,
    color: Optional[str] = None,
    sort: Optional[SortConfig] = None,
) -> List[CanonicalRecord]:
    """Rows of one collection, narrowed to a design and/or colour, then sorted.

    ``collection``, ``design_id`` and ``color`` are group keys, so "Unknown"
    selects the rows with no value.
    """
    rows = filter_by_exact_field(records, group_key("collection_name"), collection)
    if design_id is not None:
        rows = filter_by_exact_field(rows, group_key("design_id"), design_id)
    if color is not None:
        rows = filter_by_exact_field(rows, group_key("primary_color"), color)
    return (sort or SortConfig()).apply(rows)


def format_cell(value: Any, column: str) -> str:
    """Display text for a table cell; empty values show as N/A."""
    if is_blank(value):
        return NO_VALUE
    if column in PRICE_FIELDS and isinstance(value, (int, float)):
        return format_price(value)
    return str(value)


def record_to_row(
    record: CanonicalRecord, order_id_fields: Sequence[str] = DEFAULT_ORDER_ID_FIELDS
) -> Dict[str, Any]:
    """JSON row for the browser, including the resolved Order ID."""
    order_id = resolve_order_id(record, order_id_fields)
    return {
        "vendor": record.vendor,
        "collectionName": record.collection_name,
        "designId": record.design_id,
        "size": record.size,
        "primaryColor": record.primary_color,
        "upc": record.upc,
        "vpn": record.vpn,
        "retailPrice": record.retail_price,
        "retailDisplay": format_cell(record.retail_price, "retail_price"),
        "orderId": order_id.display,
        "orderIdPresent": order_id.is_present,
    }
