"""Pytest configuration and shared fixtures."""

import pytest
import structlog
from typing import Dict, Any, List


@pytest.fixture
def usd_records() -> List[Dict[str, Any]]:
    """Three clean daily USD records in canonical form."""
    return [
        {"date": "2024-03-01", "usdRate": 1300},
        {"date": "2024-03-02", "usdRate": 1310},
        {"date": "2024-03-03", "usdRate": 1290},
    ]


@pytest.fixture
def mixed_schema_records() -> List[Dict[str, Any]]:
    """Records whose field names, dates and number formats drift per row."""
    return [
        {"baseDate": "2024/03/03", "usd": "1,352.50원", "eur_rate": 1470.1},
        {"date": "2024-03-01", "usdRate": 1350.25, "JPY(100)": "903.12", "cnh": 187.4},
        {"tradeDate": [2024, 3, 2], "USD_RATE": {"value": "1,351.00"}},
        {"date": None, "usdRate": 1349.0},
        {"date": "2024-03-04"},
        "not a record",
    ]


@pytest.fixture
def long_format_records() -> List[Dict[str, Any]]:
    """Korea Eximbank style rows carrying one currency per record."""
    return [
        {"searchDate": "20240301", "cur_unit": "USD", "deal_bas_r": "1,331.5"},
        {"searchDate": "20240301", "cur_unit": "JPY(100)", "deal_bas_r": "889.51"},
        {"searchDate": "20240301", "cur_unit": "CNH", "deal_bas_r": "184.9"},
        {"searchDate": "20240302", "cur_unit": "USD", "deal_bas_r": "1,335.0"},
    ]


@pytest.fixture
def envelope_payload(usd_records: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Backend response wrapping the records in a success envelope."""
    return {"success": True, "data": {"history": usd_records}}


@pytest.fixture
def write_channels_yaml(tmp_path):
    """Write a channels.yaml into a temporary config directory."""
    def _write(content: str):
        (tmp_path / "channels.yaml").write_text(content)
        return tmp_path
    return _write


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults so captured logs are not affected by other tests."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
