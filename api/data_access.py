"""
Data access layer for the static datasets and IPO queries.

Static datasets (brokers, funds, sectors, stock school) are JSON files
under the data directory, loaded once at startup. A file that cannot be
read or parsed is replaced by an empty dataset so the server still starts
with partial data.
"""

import json
import logging
import math
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from models import IPORecord
from sources.ipo.normalizer import slugify
from utils import log
from .config import settings

logger = logging.getLogger(__name__)

# dataset key -> (file name, empty fallback)
DATASETS = {
    "brokers": ("brokers.json", list),
    "funds": ("funds.json", list),
    "sectors": ("sectors.json", list),
    "stock_school": ("stock-school.json", dict),
}

PRICE_LABELS = ("PRICE BAND", "IPO PRICE")

_INTEGER = re.compile(r"\d+")
_NON_NUMERIC = re.compile(r"[^0-9.]")


class MarketDataProvider:
    """
    Read-only access to the static market datasets.
    """

    def __init__(self, data_dir: Optional[str] = None):
        """
        Load all datasets from the data directory.

        Args:
            data_dir: Directory holding the JSON files (defaults to config setting)
        """
        self.data_dir = Path(data_dir or settings.DATA_DIR)
        self.datasets: Dict[str, object] = {}
        self.failed: List[str] = []
        self.load()

    def load(self) -> None:
        """(Re)load every dataset, degrading failed files to empty values."""
        self.failed = []
        log.step(f"Loading datasets from {self.data_dir}")
        for key, (filename, empty) in DATASETS.items():
            path = self.data_dir / filename
            try:
                with open(path, "r", encoding="utf-8") as f:
                    self.datasets[key] = json.load(f)
                log.ok(f"Loaded {filename}")
            except (OSError, json.JSONDecodeError) as e:
                log.err(f"Failed to load {filename}: {e}")
                self.failed.append(filename)
                self.datasets[key] = empty()

        if self.failed:
            log.warn(f"Failed to load: {', '.join(self.failed)}")
            log.warn("Server will continue with partial data")
        logger.info(f"Datasets initialized ({len(DATASETS) - len(self.failed)}/{len(DATASETS)} files loaded)")

    def load_module(self, name: str) -> Dict:
        """
        Read a learning module document (e.g. 'module-1') from disk.

        Raises:
            OSError, json.JSONDecodeError: If the file is missing or invalid
        """
        with open(self.data_dir / f"{name}.json", "r", encoding="utf-8") as f:
            return json.load(f)

    # ----------------------------------------------------------------
    # Brokers
    # ----------------------------------------------------------------

    def get_brokers(self, min_rating: Optional[float] = None, sort_by: str = "name") -> List[Dict]:
        """
        Brokers, optionally filtered by minimum rating.

        Args:
            min_rating: Keep brokers rated at least this high
            sort_by: 'name' (file order), 'rating' (desc) or 'accounts' (desc)
        """
        brokers = list(self.datasets["brokers"])

        if min_rating is not None:
            brokers = [b for b in brokers if _to_float(b.get("rating")) >= min_rating]

        if sort_by == "rating":
            brokers.sort(key=lambda b: _to_float(b.get("rating")), reverse=True)
        elif sort_by == "accounts":
            brokers.sort(
                key=lambda b: _to_float(_NON_NUMERIC.sub("", str(b.get("accounts", "")))),
                reverse=True,
            )

        return brokers

    # ----------------------------------------------------------------
    # Funds / Sectors / Stock School
    # ----------------------------------------------------------------

    def get_funds(self, category: Optional[str] = None) -> List[Dict]:
        funds = list(self.datasets["funds"])
        if category:
            needle = category.lower()
            funds = [f for f in funds if needle in str(f.get("category", "")).lower()]
        return funds

    def get_sectors(self) -> List[Dict]:
        return list(self.datasets["sectors"])

    def get_stock_school(self) -> Dict:
        return self.datasets["stock_school"]


# ----------------------------------------------------------------
# IPO queries
# ----------------------------------------------------------------

def _to_float(value) -> float:
    try:
        return float(value)
    except (ValueError, TypeError):
        return 0.0


def average_price(ipo: IPORecord) -> Optional[float]:
    """
    Representative price for an IPO.

    Handles both 'Rs 218 - 230' (mean of the first two numbers) and
    'Rs 331'. None when there is no price detail or no number in it.
    """
    value = None
    for label in PRICE_LABELS:
        value = ipo.detail(label)
        if value is not None:
            break
    if value is None:
        return None

    prices = _INTEGER.findall(value)
    if not prices:
        return None
    if len(prices) > 1:
        return (int(prices[0]) + int(prices[1])) / 2
    return float(prices[0])


def search_ipos(
    ipos: List[IPORecord],
    q: Optional[str] = None,
    min_price: Optional[int] = None,
    max_price: Optional[int] = None,
) -> List[IPORecord]:
    """Filter by case-insensitive name substring and average price bounds."""
    if q:
        needle = q.lower()
        ipos = [ipo for ipo in ipos if needle in ipo.name.lower()]

    if min_price is not None or max_price is not None:
        matched = []
        for ipo in ipos:
            price = average_price(ipo)
            if price is None:
                continue
            if min_price is not None and price < min_price:
                continue
            if max_price is not None and price > max_price:
                continue
            matched.append(ipo)
        ipos = matched

    return ipos


def find_ipo(ipos: List[IPORecord], slug: str) -> Optional[IPORecord]:
    """First IPO whose slugified name equals the slug (case-insensitive)."""
    target = slug.lower()
    for ipo in ipos:
        if slugify(ipo.name) == target:
            return ipo
    return None


def paginate(items: List, page: int, limit: int) -> Tuple[List, Dict]:
    """Slice one page and describe it: total, page, limit, totalPages."""
    start = (page - 1) * limit
    return items[start:start + limit], {
        "total": len(items),
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(len(items) / limit),
    }
