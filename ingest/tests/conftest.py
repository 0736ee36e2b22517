"""Shared fixtures for the converter tests."""

import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import pytest

from ingest.config import CSV_VARIANT, EXCEL_VARIANT
from ingest.readers import SourceTable

CSV_CONTENT = """Vendor,Collection,Size,Design ID,Long SKU - VPN,Primary Color,UPC,Retail,Product_Id
Loloi,Alie,5x8,ALI-01,ALIEAI-01IVBL5080,Ivory,885105000001,"$1,234.50",HM-1001
Loloi,Alie,8x10,ALI-01,ALIEAI-01IVBL80A0,Ivory,885105000002,$899.00,
Loloi,Alie,5x8,ALI-02,ALIEAI-02RUBL5080,Rust,885105000003,abc,
Surya,Bodrum,9x12,BDM-2300,BDM2300-912,Navy,794040000001,,HM-2001
"""


def make_row(variant=CSV_VARIANT, **overrides: Any) -> Dict[str, Any]:
    """One source row with every required column filled in."""
    if variant is CSV_VARIANT:
        row = {
            "Vendor": "Loloi",
            "Collection": "Alie",
            "Size": "5x8",
            "Design ID": "ALI-01",
            "Long SKU - VPN": "ALIEAI-01IVBL5080",
            "Primary Color": "Ivory",
            "UPC": "885105000001",
            "Retail": "$199.00",
            "Product_Id": "",
        }
    else:
        row = {
            "Vendor": "Loloi",
            "Collection Name": "Alie",
            "Design ID": "ALI-01",
            "Size": "5x8",
            "Primary Color": "Ivory",
            "UPC": "885105000001",
            "Retail Price": 199.0,
            "HM SKU": "",
        }
    row.update(overrides)
    return row


def make_table(rows: List[Dict[str, Any]], header: List[str] = None) -> SourceTable:
    if header is None:
        header = list(rows[0].keys()) if rows else []
    return SourceTable(header=header, rows=rows)


@pytest.fixture(autouse=True)
def reset_ingest_logger():
    """Drop handlers the CLI installs so they don't outlive a test's capture."""
    yield
    logger = logging.getLogger("ingest")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def csv_source(tmp_path) -> Path:
    """A small CSV master file."""
    path = tmp_path / "HM_Rug_Master.csv"
    path.write_text(CSV_CONTENT, encoding="utf-8")
    return path


@pytest.fixture
def excel_source(tmp_path) -> Path:
    """A small Excel master file with a mostly-empty HM SKU column."""
    path = tmp_path / "HM_Rug_Master_Complete.xlsx"
    df = pd.DataFrame(
        [
            make_row(EXCEL_VARIANT, **{"HM SKU": "HM-77"}),
            make_row(EXCEL_VARIANT, Size="8x10", UPC=885105000002, **{"Retail Price": 349.5}),
            make_row(
                EXCEL_VARIANT,
                **{"Collection Name": "Bodrum", "Vendor": "Surya", "Primary Color": None},
            ),
        ]
    )
    df.to_excel(path, index=False)
    return path


@pytest.fixture
def output_path(tmp_path) -> Path:
    return tmp_path / "public" / "data.json"
