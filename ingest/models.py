"""Data models for catalog records."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Tuple

from ingest.prices import coerce_price

__all__ = ["CanonicalRecord", "JSON_KEY_ALIASES", "TEXT_FIELDS", "is_blank"]

# Display-facing JSON keys each attribute may appear under. The first alias of
# each entry is what the CSV variant writes; later ones cover the Excel variant.
JSON_KEY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "vendor": ("Vendor",),
    "collection_name": ("Collection Name",),
    "size": ("Size",),
    "design_id": ("Design ID",),
    "vpn": ("VPN",),
    "primary_color": ("Primary Color",),
    "upc": ("UPC",),
    "retail_price": ("Retail", "Retail Price"),
    "product_id": ("product_id",),
    "sku_override": ("HM SKU",),
}

TEXT_FIELDS: Tuple[str, ...] = (
    "vendor",
    "collection_name",
    "size",
    "design_id",
    "vpn",
    "primary_color",
    "upc",
    "product_id",
    "sku_override",
)


def is_blank(value: Any) -> bool:
    """True for None, empty or whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def _text(value: Any) -> str:
    if value is None:
        return ""
    # Spreadsheets hand integer-looking cells back as floats (12345.0)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


@dataclass(frozen=True)
class CanonicalRecord:
    """One catalog row after normalization.

    Optional identity fields are stored as empty strings, never None, so
    every record serializes with the same set of keys.
    """

    vendor: str
    collection_name: str
    size: str
    design_id: str
    primary_color: str
    upc: str
    retail_price: float = 0.0
    vpn: str = ""
    product_id: str = ""
    sku_override: str = ""

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> "CanonicalRecord":
        """Build a record from attribute -> raw value, filling gaps."""
        kwargs: Dict[str, Any] = {name: _text(values.get(name)) for name in TEXT_FIELDS}
        kwargs["retail_price"] = coerce_price(values.get("retail_price"))
        return cls(**kwargs)

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "CanonicalRecord":
        """Read a record from a JSON object written by either schema variant.

        Absent keys and nulls are treated as empty values.
        """
        values: Dict[str, Any] = {}
        for attribute, aliases in JSON_KEY_ALIASES.items():
            for key in aliases:
                if key in obj and obj[key] is not None:
                    values[attribute] = obj[key]
                    break
        return cls.from_values(values)

    def to_dict(self, output_keys: Mapping[str, str]) -> Dict[str, Any]:
        """Serialize using the given attribute -> JSON key mapping, in order."""
        return {key: getattr(self, attribute) for attribute, key in output_keys.items()}

    def get(self, attribute: str, default: Any = "") -> Any:
        """Attribute lookup by name, for field-driven filters and sorts."""
        if attribute in _FIELD_NAMES:
            return getattr(self, attribute)
        return default


_FIELD_NAMES = frozenset(f.name for f in fields(CanonicalRecord))
