"""Shared fixtures for the test suite."""

import json
import pytest
from unittest.mock import MagicMock

from models import IPOCollection, IPODetail, IPORecord


@pytest.fixture
def mock_response():
    """Factory for mock HTTP responses."""
    def _make(status_code=200, json_data=None, text=""):
        resp = MagicMock()
        resp.status_code = status_code
        resp.json.return_value = json_data or {}
        resp.text = text
        # truthy when status_code == 200
        resp.__bool__ = lambda self: self.status_code == 200
        return resp
    return _make


@pytest.fixture
def raw_ipo_row():
    """Factory fixture; call with overrides to get a raw scraped row."""
    def _make(**overrides):
        row = {
            "name": "Acme Industries Ltd",
            "open_date": "01-01-2025",
            "close_date": "10-01-2025",
            "listing_date": "20-01-2025",
            "issue_size": "Rs 500 Cr",
            "issue_price": "Rs 218 - 230",
            "issue_type": "Book Built",
            "logo": "",
        }
        row.update(overrides)
        return row
    return _make


@pytest.fixture
def make_ipo():
    """Factory for IPORecord objects with a price detail."""
    def _make(name="Acme Industries Ltd", price="Rs 218 - 230", label="PRICE BAND", source="static"):
        return IPORecord(
            name=name,
            details=[
                IPODetail(label=label, value=price),
                IPODetail(label="OPEN", value="01-01-2025"),
            ],
            source=source,
        )
    return _make


@pytest.fixture
def sample_collection(make_ipo):
    """Collection with two ongoing, one upcoming and one listed IPO."""
    return IPOCollection(
        ongoing=[make_ipo("Alpha Tech"), make_ipo("Beta Foods", price="Rs 95 - 100")],
        upcoming=[make_ipo("Gamma Power", price="TBA")],
        listed=[make_ipo("Delta Pharma", price="Rs 331", label="IPO PRICE")],
    )


@pytest.fixture
def chittorgarh_html():
    """Build a Chittorgarh-style report page from a list of row tuples."""
    def _make(rows):
        body = "".join(
            "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>"
            for row in rows
        )
        return (
            "<html><body><table class='table'>"
            "<thead><tr><th>Company</th></tr></thead>"
            f"<tbody>{body}</tbody>"
            "</table></body></html>"
        )
    return _make


@pytest.fixture
def data_dir(tmp_path):
    """Temporary data directory populated with small datasets."""
    files = {
        "brokers.json": [
            {"name": "Upstox", "rating": "4.5", "accounts": "1.3 Cr+"},
            {"name": "Zerodha", "rating": "5.0", "accounts": "1.6 Cr+"},
            {"name": "Angel One", "rating": 4.2, "accounts": "75 L+"},
        ],
        "funds.json": [
            {"name": "Bluechip Fund", "category": "Equity - Large Cap"},
            {"name": "Liquid Fund", "category": "Debt - Liquid"},
        ],
        "sectors.json": [{"name": "Agriculture"}, {"name": "Banking"}],
        "stock-school.json": {"level1": [{"title": "Basics"}]},
        "module-1.json": {"title": "Introduction to the Stock Market"},
    }
    for name, content in files.items():
        (tmp_path / name).write_text(json.dumps(content), encoding="utf-8")
    return tmp_path
