"""
IPO status classification from open/close/listing date strings.

Scraped dates are display strings in DD-MM-YYYY order with either '-' or '/'
as separator. parse_date() is the only place those strings are interpreted;
if the listing site changes its format, this is the function to touch.
"""

import datetime
import re
from typing import Optional

from models import IPOStatus


ABSENT_VALUES = {"", "-", "not issued"}

_SEPARATORS = re.compile(r"[-/]")


def parse_date(value: Optional[str]) -> Optional[datetime.date]:
    """
    Parse a DD-MM-YYYY (or DD/MM/YYYY) string.

    Returns None for placeholders ('-', 'Not Issued', empty), anything that
    is not three numeric parts with a four-digit year, and impossible
    calendar dates. Never raises.
    """
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in ABSENT_VALUES:
        return None

    parts = [p.strip() for p in _SEPARATORS.split(text)]
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return None

    day, month, year = parts
    if len(year) != 4:
        return None

    try:
        return datetime.date(int(year), int(month), int(day))
    except ValueError:
        return None


def classify(
    open_date: Optional[str],
    close_date: Optional[str],
    listing_date: Optional[str],
    today: Optional[datetime.date] = None,
) -> IPOStatus:
    """
    Derive the status bucket for an IPO.

    A listing date only wins once it has actually happened, so a future
    listing never turns an open subscription window into 'listed'.
    Closed-but-not-yet-listed issues stay 'upcoming', as does anything
    without enough dates to decide.
    """
    if today is None:
        today = datetime.date.today()

    opens = parse_date(open_date)
    closes = parse_date(close_date)
    lists = parse_date(listing_date)

    if lists is not None and lists <= today:
        return IPOStatus.LISTED

    if opens is not None and closes is not None and opens <= today <= closes:
        return IPOStatus.ONGOING

    return IPOStatus.UPCOMING
