"""Shared fixtures for the catalog browser tests."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from ingest.models import CanonicalRecord
from web.catalog import clear_catalog_cache


def make_record(**overrides: Any) -> CanonicalRecord:
    values = {
        "vendor": "Loloi",
        "collection_name": "Alie",
        "size": "5x8",
        "design_id": "ALI-01",
        "primary_color": "Ivory",
        "upc": "885105000001",
        "retail_price": 199.0,
        "vpn": "",
        "product_id": "",
        "sku_override": "",
    }
    values.update(overrides)
    return CanonicalRecord(**values)


# Catalog document as the CSV variant writes it
CATALOG_ROWS: List[Dict[str, Any]] = [
    {"Vendor": "Loloi", "Collection Name": "Alie", "Size": "5x8", "Design ID": "ALI-01",
     "VPN": "ALIEAI-01IV5080", "Primary Color": "Ivory", "UPC": "885105000001",
     "Retail": 199.0, "product_id": "HM-1001"},
    {"Vendor": "Loloi", "Collection Name": "Alie", "Size": "8x10", "Design ID": "ALI-01",
     "VPN": "ALIEAI-01IV80A0", "Primary Color": "Ivory", "UPC": "885105000002",
     "Retail": 349.5, "product_id": ""},
    {"Vendor": "Loloi", "Collection Name": "Alie", "Size": "5x8", "Design ID": "ALI-02",
     "VPN": "", "Primary Color": "Blue", "UPC": "885105000003",
     "Retail": 0, "product_id": ""},
    {"Vendor": "Loloi", "Collection Name": "Alie", "Size": "8x10", "Design ID": "ALI-02",
     "VPN": "ALIEAI-02BL80A0", "Primary Color": "Blue", "UPC": "885105000004",
     "Retail": 329.0, "product_id": ""},
    {"Vendor": "Loloi", "Collection Name": "Alie", "Size": "9x12", "Design ID": "ALI-03",
     "VPN": "ALIEAI-03BL9120", "Primary Color": "Blue", "UPC": "885105000005",
     "Retail": 899.0, "product_id": ""},
    {"Vendor": "Surya", "Collection Name": "Bodrum", "Size": "9x12", "Design ID": "BDM-2300",
     "VPN": "BDM2300-912", "Primary Color": "Navy", "UPC": "794040000001",
     "Retail": 1234.5, "product_id": "HM-2001"},
]


@pytest.fixture
def records() -> List[CanonicalRecord]:
    return [CanonicalRecord.from_dict(row) for row in CATALOG_ROWS]


@pytest.fixture
def data_file(tmp_path) -> Path:
    """The sample catalog written where the app expects data.json."""
    path = tmp_path / "public" / "data.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(CATALOG_ROWS, indent=2), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def fresh_catalog_cache():
    clear_catalog_cache()
    yield
    clear_catalog_cache()


@pytest.fixture
def app(data_file, monkeypatch):
    """Flask app reading the sample catalog."""
    monkeypatch.setattr("web.catalog.DATA_SOURCE", str(data_file))
    from web.app import app

    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    with app.test_client() as test_client:
        yield test_client
