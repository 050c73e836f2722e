"""
Chittorgarh IPO listing scraper.

Scrapes the main board + SME IPO report table from chittorgarh.com.
No API key required. The page layout is not a published contract; when it
changes the scraper yields an empty collection and the static fallback
takes over.
"""

import datetime
import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from models import IPOCollection, IPOSource
from utils.session import RequestSession
from ..normalizer import bucket_records
from .base import IPODataProvider

logger = logging.getLogger(__name__)

CHITTORGARH_IPO_URL = "https://www.chittorgarh.com/report/ipo-in-india-list-main-board-sme/82/"

ROW_SELECTOR = "table.table tbody tr"

# Column order of the report table
COLUMNS = ("name", "open_date", "close_date", "listing_date", "issue_size", "issue_price")

HEADER_NAME = "Company Name"

ISSUE_TYPE = "Book Built"


class ChittorgarhProvider(IPODataProvider):
    """
    Chittorgarh IPO scraper.

    One GET per fetch, 10s timeout. Network and parse failures of any
    kind produce an empty IPOCollection.
    """

    def __init__(self, url: str = CHITTORGARH_IPO_URL, timeout: float = 10):
        super().__init__()
        self.url = url
        self.session = RequestSession(timeout=timeout)
        self.name = "chittorgarh"

    def fetch(self, today: Optional[datetime.date] = None) -> IPOCollection:
        """Scrape, normalize and bucket the current IPO table."""
        try:
            resp = self.session.get(self.url)
            if not resp:
                logger.error("Error fetching from Chittorgarh: no response")
                return IPOCollection()

            rows = self.parse_rows(resp.text)
            ipos = bucket_records(rows, today=today, source=IPOSource.CHITTORGARH.value)
        except Exception as e:
            logger.error(f"Error fetching from Chittorgarh: {e}")
            return IPOCollection()

        if ipos.is_empty():
            logger.warning("Chittorgarh scraper found no IPOs. The site structure may have changed.")
        else:
            logger.info(
                f"Scraped {len(ipos.ongoing)} ongoing, {len(ipos.upcoming)} upcoming, "
                f"{len(ipos.listed)} listed IPOs"
            )
        return ipos

    @staticmethod
    def parse_rows(html: str) -> List[Dict]:
        """
        Extract raw row dicts from the report page HTML.

        Missing trailing cells come back as empty strings; the header row
        is dropped.
        """
        soup = BeautifulSoup(html, "html.parser")
        rows = []
        for tr in soup.select(ROW_SELECTOR):
            cells = [td.get_text(strip=True) for td in tr.find_all("td")]
            if not cells:
                continue
            cells += [""] * (len(COLUMNS) - len(cells))
            row = dict(zip(COLUMNS, cells))
            if row["name"] == HEADER_NAME:
                continue
            row["issue_type"] = ISSUE_TYPE
            row["logo"] = ""
            rows.append(row)
        return rows
