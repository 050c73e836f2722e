"""
Pydantic data models for the MarketSphere data API.

These models enforce type safety and validation and give a clear schema
for the entities flowing from the IPO sources, the quote provider and the
static datasets out through the REST layer.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class IPOStatus(str, Enum):
    ONGOING = "ongoing"
    UPCOMING = "upcoming"
    LISTED = "listed"


class IPOSource(str, Enum):
    CHITTORGARH = "Chittorgarh"
    STATIC = "static"


# Fixed label vocabulary for scraped IPO details, in display order.
DETAIL_LABELS = (
    "PRICE BAND",
    "OPEN",
    "CLOSE",
    "ISSUE SIZE",
    "ISSUE TYPE",
    "LISTING DATE",
)

PLACEHOLDER = "TBA"


# ---------------------------------------------------------------------------
# IPO Entities
# ---------------------------------------------------------------------------

class IPODetail(BaseModel):
    """A single label/value display pair on an IPO card."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    label: str
    value: str = ""


class IPORecord(BaseModel):
    """
    One initial public offering.

    Status is not stored on the record; it is derived from the dates when
    the record is bucketed into an IPOCollection.
    """
    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    logo: str = ""
    details: List[IPODetail] = []
    source: str = IPOSource.STATIC.value

    def detail(self, label: str) -> Optional[str]:
        """Return the value for a detail label, or None."""
        for d in self.details:
            if d.label == label:
                return d.value
        return None


class IPOCollection(BaseModel):
    """IPO records split into the three status buckets."""
    ongoing: List[IPORecord] = []
    upcoming: List[IPORecord] = []
    listed: List[IPORecord] = []

    def bucket(self, status: IPOStatus) -> List[IPORecord]:
        return getattr(self, IPOStatus(status).value)

    def total(self) -> int:
        return len(self.ongoing) + len(self.upcoming) + len(self.listed)

    def is_empty(self) -> bool:
        return self.total() == 0

    def all_records(self) -> List[IPORecord]:
        """Ongoing, then upcoming, then listed."""
        return [*self.ongoing, *self.upcoming, *self.listed]


# ---------------------------------------------------------------------------
# Market Data
# ---------------------------------------------------------------------------

class StockQuote(BaseModel):
    """Latest quote for an equity symbol (Alpha Vantage GLOBAL_QUOTE)."""
    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    price: float = 0.0
    change: float = 0.0
    change_percent: float = Field(0.0, alias="changePercent")
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    volume: int = 0
    previous_close: float = Field(0.0, alias="previousClose")


# ---------------------------------------------------------------------------
# Static Datasets
# ---------------------------------------------------------------------------

class Broker(BaseModel):
    """Stock broker profile. Extra display fields pass through untouched."""
    model_config = ConfigDict(extra="allow")

    name: str
    rating: Union[float, str] = 0
    accounts: str = ""


class MutualFund(BaseModel):
    """Mutual fund summary."""
    model_config = ConfigDict(extra="allow")

    name: str
    category: str = ""


class Sector(BaseModel):
    """Market sector card."""
    model_config = ConfigDict(extra="allow")

    name: str
