"""
Pydantic models for API request/response validation.
Auto-generates OpenAPI documentation.
"""

from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from models import Broker, IPORecord, MutualFund, Sector, StockQuote


class Pagination(BaseModel):
    """Page metadata for list endpoints."""
    total: int
    page: int
    limit: int
    totalPages: int


class IPOListResponse(BaseModel):
    """Paginated IPO list response."""
    success: bool = True
    data: List[IPORecord]
    pagination: Pagination


class IPOSearchResponse(BaseModel):
    """IPO search response."""
    success: bool = True
    data: List[IPORecord]
    count: int


class IPOResponse(BaseModel):
    """Single IPO response."""
    success: bool = True
    data: IPORecord


class BrokersResponse(BaseModel):
    success: bool = True
    data: List[Broker]
    count: int


class FundsResponse(BaseModel):
    success: bool = True
    data: List[MutualFund]
    count: int


class SectorsResponse(BaseModel):
    success: bool = True
    data: List[Sector]
    count: int


class StockSchoolResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]


class StockQuoteResponse(BaseModel):
    """Latest stock quote response."""
    success: bool = True
    data: StockQuote


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error response."""
    success: bool = False
    error: str
    details: Optional[List[Dict[str, Any]]] = None


class IPOCacheStats(BaseModel):
    """IPO counts per bucket for the cached collection."""
    cached: bool
    ongoing: int = 0
    upcoming: int = 0
    listed: int = 0


class HealthResponse(BaseModel):
    """API health check response."""
    service: str
    version: str
    status: str
    datasets_failed: List[str]
    ipo_cache: IPOCacheStats
