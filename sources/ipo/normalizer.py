"""
Normalize raw IPO rows into IPORecord objects and bucket them by status.
"""

import datetime
import logging
import re
from typing import Dict, Iterable, Optional, Tuple

from models import (
    DETAIL_LABELS,
    PLACEHOLDER,
    IPOCollection,
    IPODetail,
    IPORecord,
    IPOSource,
    IPOStatus,
)
from .classifier import classify, parse_date

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Lookup key for an IPO name: lowercase, whitespace runs become '-'."""
    return _WHITESPACE.sub("-", name.strip().lower())


def _display(value: Optional[str]) -> str:
    """Trimmed display value, or the TBA placeholder when blank."""
    if value is None:
        return PLACEHOLDER
    text = str(value).strip()
    return text if text else PLACEHOLDER


def normalize_record(
    raw: Dict,
    today: Optional[datetime.date] = None,
    source: str = IPOSource.CHITTORGARH.value,
) -> Optional[Tuple[IPOStatus, IPORecord]]:
    """
    Convert one raw row into (status, IPORecord).

    Args:
        raw: Mapping with keys name, open_date, close_date, listing_date,
             issue_size, issue_price, issue_type, logo
        today: Reference date for classification (defaults to today)
        source: Provenance tag stored on the record

    Returns:
        (status, record), or None when name, open date or close date is
        missing. Rows are skipped, never raised on.
    """
    name = (raw.get("name") or "").strip()
    open_date = raw.get("open_date")
    close_date = raw.get("close_date")
    listing_date = raw.get("listing_date")

    if not name:
        return None
    if parse_date(open_date) is None or parse_date(close_date) is None:
        logger.debug(f"Skipping IPO row without usable open/close dates: {name}")
        return None

    values = (
        raw.get("issue_price"),
        open_date,
        close_date,
        raw.get("issue_size"),
        raw.get("issue_type"),
        listing_date,
    )
    details = [
        IPODetail(label=label, value=_display(value))
        for label, value in zip(DETAIL_LABELS, values)
    ]

    status = classify(open_date, close_date, listing_date, today)
    record = IPORecord(
        name=name,
        logo=(raw.get("logo") or "").strip(),
        details=details,
        source=source,
    )
    return status, record


def bucket_records(
    rows: Iterable[Dict],
    today: Optional[datetime.date] = None,
    source: str = IPOSource.CHITTORGARH.value,
) -> IPOCollection:
    """Normalize a batch of raw rows into an IPOCollection, keeping row order."""
    collection = IPOCollection()
    skipped = 0
    for row in rows:
        result = normalize_record(row, today=today, source=source)
        if result is None:
            skipped += 1
            continue
        status, record = result
        collection.bucket(status).append(record)

    if skipped:
        logger.debug(f"Skipped {skipped} incomplete IPO rows")
    return collection
