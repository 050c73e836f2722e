"""
FastAPI application for the MarketSphere data API.

Serves IPOs (live Chittorgarh scrape with static fallback), brokers,
mutual funds, sectors, stock-school content and Alpha Vantage stock quotes,
with auto-generated OpenAPI documentation at /docs.
"""

import json
import logging
import re
from pathlib import Path
from typing import Literal, Optional
from urllib.parse import quote as url_quote

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sources.equity.providers.alpha_vantage import AlphaVantageProvider
from sources.equity.providers.base import (
    DataNotFoundError,
    EquityDataProvider,
    ProviderError,
    ProviderTimeoutError,
    RateLimitError,
)
from sources.ipo.cache import IPOCache
from sources.ipo.providers.chittorgarh_provider import ChittorgarhProvider
from sources.ipo.providers.static_provider import StaticIPOProvider
from sources.ipo.service import IPOService
from utils import log
from .config import settings
from .data_access import MarketDataProvider, find_ipo, paginate, search_ipos
from .models import (
    BrokersResponse,
    ErrorResponse,
    FundsResponse,
    HealthResponse,
    IPOCacheStats,
    IPOListResponse,
    IPOResponse,
    IPOSearchResponse,
    MessageResponse,
    SectorsResponse,
    StockQuoteResponse,
    StockSchoolResponse,
)
from .rate_limit import RateLimiter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

API_V1 = settings.API_PREFIX

SYMBOL_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

# Initialize FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=settings.CORS_ORIGINS != ["*"],
    allow_methods=["GET", "POST", "DELETE", "PUT", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "X-API-Key"],
    max_age=86400,
)

# Initialize data providers
data = MarketDataProvider()
ipo_service = IPOService(
    scraper=ChittorgarhProvider(url=settings.IPO_SOURCE_URL, timeout=settings.REQUEST_TIMEOUT),
    fallback=StaticIPOProvider(str(Path(settings.DATA_DIR) / "ipos.json")),
    cache=IPOCache(ttl_seconds=settings.IPO_CACHE_TTL_SECONDS),
)
rate_limiter = RateLimiter(
    limit=settings.RATE_LIMIT_PER_MINUTE,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)


def build_quote_provider() -> Optional[EquityDataProvider]:
    """Alpha Vantage provider from settings, or None without an API key."""
    try:
        return AlphaVantageProvider(
            api_key=settings.ALPHA_VANTAGE_API_KEY,
            timeout=settings.REQUEST_TIMEOUT,
        )
    except ValueError as e:
        logger.error(f"ALPHA_VANTAGE_API_KEY not configured: {e}")
        return None


quote_provider = build_quote_provider()


# ----------------------------------------------------------------
# Dependencies
# ----------------------------------------------------------------

def get_data() -> MarketDataProvider:
    return data


def get_ipo_service() -> IPOService:
    return ipo_service


def get_quote_provider() -> Optional[EquityDataProvider]:
    """Shared Alpha Vantage provider, or None when no API key is configured."""
    return quote_provider


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    body = ErrorResponse(error=error).model_dump(exclude_none=True)
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def _validation_failed(details: list) -> JSONResponse:
    return _error(400, "Validation failed", details=details)


# ----------------------------------------------------------------
# Middleware
# ----------------------------------------------------------------

@app.middleware("http")
async def cache_headers(request: Request, call_next):
    """API responses may be cached by clients for five minutes."""
    response = await call_next(request)
    if request.url.path.startswith(f"{API_V1}/"):
        response.headers["Cache-Control"] = "public, max-age=300"
    return response


@app.middleware("http")
async def rate_limit(request: Request, call_next):
    """Per-IP request cap on /api routes."""
    if settings.RATE_LIMIT_ENABLED and request.url.path.startswith("/api"):
        client = request.client.host if request.client else "unknown"
        allowed, retry_after = rate_limiter.hit(client)
        if not allowed:
            logger.warning(f"Rate limit exceeded for {client}")
            return _error(
                429,
                "Too many requests. Please try again in 1 minute.",
                retryAfter=retry_after,
            )
    return await call_next(request)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


# ----------------------------------------------------------------
# Error Handlers
# ----------------------------------------------------------------

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [
        {"msg": e.get("msg", ""), "loc": [str(p) for p in e.get("loc", ())], "type": e.get("type", "")}
        for e in exc.errors()
    ]
    return _validation_failed(details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error(500, "Internal server error")


# ----------------------------------------------------------------
# Health & Info
# ----------------------------------------------------------------

@app.get("/", response_model=HealthResponse, tags=["Health"])
def root(
    data: MarketDataProvider = Depends(get_data),
    service: IPOService = Depends(get_ipo_service),
):
    """
    API health check and information.

    Reports dataset load failures and the state of the IPO cache without
    triggering a fetch.
    """
    cached = service.cache.get()
    stats = IPOCacheStats(cached=False)
    if cached is not None:
        stats = IPOCacheStats(
            cached=True,
            ongoing=len(cached.ongoing),
            upcoming=len(cached.upcoming),
            listed=len(cached.listed),
        )
    return {
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "status": "healthy" if not data.failed else "degraded",
        "datasets_failed": data.failed,
        "ipo_cache": stats,
    }


# ----------------------------------------------------------------
# IPO Endpoints
# ----------------------------------------------------------------

@app.get(f"{API_V1}/ipos", response_model=IPOListResponse, tags=["IPOs"])
def get_ipos(
    status: Literal["ongoing", "upcoming", "listed", "all"] = Query("all", description="Status bucket"),
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(10, ge=1, le=100, description="Page size"),
    service: IPOService = Depends(get_ipo_service),
):
    """
    Get IPOs by status, paginated.

    - **status**: ongoing, upcoming, listed or all (ongoing, upcoming, listed order)
    - **page** / **limit**: page slice over the result
    """
    try:
        ipos = service.get_ipos_by_status(status)
    except Exception as e:
        logger.error(f"Error fetching IPOs: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch IPO data")

    page_data, pagination = paginate(ipos, page, limit)
    return {"success": True, "data": page_data, "pagination": pagination}


# Registered before /ipos/{name} so 'search' is not taken as a name
@app.get(f"{API_V1}/ipos/search", response_model=IPOSearchResponse, tags=["IPOs"])
def search_ipo(
    q: Optional[str] = Query(None, description="Name substring (2-100 chars)"),
    min_price: Optional[int] = Query(None, ge=0, alias="minPrice"),
    max_price: Optional[int] = Query(None, ge=0, alias="maxPrice"),
    service: IPOService = Depends(get_ipo_service),
):
    """
    Search IPOs by name and price.

    Price bounds compare against the average of a 'Rs 218 - 230' band, or
    the single price when only one is listed.
    """
    if q is not None:
        q = q.strip()
        if not 2 <= len(q) <= 100:
            return _validation_failed([
                {"msg": "Search query must be 2-100 characters", "loc": ["query", "q"], "type": "string_length"}
            ])

    try:
        ipos = search_ipos(service.get_ipos_by_status("all"), q=q, min_price=min_price, max_price=max_price)
    except Exception as e:
        logger.error(f"Error searching IPOs: {e}")
        raise HTTPException(status_code=500, detail="Failed to search IPOs")

    return {"success": True, "data": ipos, "count": len(ipos)}


@app.delete(f"{API_V1}/ipos/cache", response_model=MessageResponse, tags=["IPOs"])
def clear_ipo_cache(
    x_api_key: Optional[str] = Header(None),
    service: IPOService = Depends(get_ipo_service),
):
    """
    Clear the IPO cache (admin).

    Requires the X-API-Key header when ADMIN_API_KEY is configured.
    """
    if settings.ADMIN_API_KEY and x_api_key != settings.ADMIN_API_KEY:
        raise HTTPException(status_code=403, detail="Invalid API key")

    service.clear_cache()
    return {"success": True, "message": "Cache cleared"}


@app.get(f"{API_V1}/ipos/{{name}}", response_model=IPOResponse, tags=["IPOs"])
def get_ipo(name: str, service: IPOService = Depends(get_ipo_service)):
    """
    Get a single IPO by slug.

    Args:
        name: Lowercase name with spaces as dashes (e.g. 'acme-industries-ltd')
    """
    name = name.strip()
    if not name:
        return _validation_failed([{"msg": "Invalid value", "loc": ["path", "name"], "type": "missing"}])

    try:
        ipo = find_ipo(service.get_ipos_by_status("all"), name)
    except Exception as e:
        logger.error(f"Error fetching IPO {name}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch IPO data")

    if ipo is None:
        raise HTTPException(status_code=404, detail="IPO not found")
    return {"success": True, "data": ipo}


# ----------------------------------------------------------------
# Static Dataset Endpoints
# ----------------------------------------------------------------

@app.get(f"{API_V1}/brokers", response_model=BrokersResponse, tags=["Brokers"])
def get_brokers(
    rating: Optional[float] = Query(None, ge=0, le=5, description="Minimum rating"),
    sort_by: Literal["name", "rating", "accounts"] = Query("name", alias="sortBy"),
    data: MarketDataProvider = Depends(get_data),
):
    """Get brokers, optionally filtered by minimum rating and sorted."""
    brokers = data.get_brokers(min_rating=rating, sort_by=sort_by)
    return {"success": True, "data": brokers, "count": len(brokers)}


@app.get(f"{API_V1}/funds", response_model=FundsResponse, tags=["Funds"])
def get_funds(
    category: Optional[str] = Query(None, description="Category substring"),
    data: MarketDataProvider = Depends(get_data),
):
    """Get mutual funds, optionally filtered by category."""
    funds = data.get_funds(category.strip() if category else None)
    return {"success": True, "data": funds, "count": len(funds)}


@app.get(f"{API_V1}/sectors", response_model=SectorsResponse, tags=["Sectors"])
def get_sectors(data: MarketDataProvider = Depends(get_data)):
    """Get all sectors."""
    sectors = data.get_sectors()
    return {"success": True, "data": sectors, "count": len(sectors)}


@app.get(f"{API_V1}/stock-school", response_model=StockSchoolResponse, tags=["Stock School"])
def get_stock_school(data: MarketDataProvider = Depends(get_data)):
    """Get stock-school learning modules grouped by level."""
    return {"success": True, "data": data.get_stock_school()}


@app.get("/api/module-1", tags=["Stock School"])
def get_module_one(data: MarketDataProvider = Depends(get_data)):
    """Get the first learning module document."""
    try:
        return data.load_module("module-1")
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading module-1: {e}")
        raise HTTPException(status_code=500, detail="Failed to load module")


# ----------------------------------------------------------------
# Stock Quote Endpoint
# ----------------------------------------------------------------

@app.get(f"{API_V1}/stock/search", response_model=StockQuoteResponse, tags=["Stocks"])
def search_stock(
    symbol: Optional[str] = Query(None, description="Ticker symbol, letters and digits only"),
    provider: Optional[EquityDataProvider] = Depends(get_quote_provider),
):
    """
    Get the latest quote for a stock symbol from Alpha Vantage.

    - **symbol**: e.g. AAPL (1-10 alphanumeric characters)
    """
    symbol = (symbol or "").strip()
    if not symbol:
        msg = "Stock symbol is required"
    elif len(symbol) > 10:
        msg = "Invalid stock symbol"
    elif not SYMBOL_PATTERN.match(symbol):
        msg = "Symbol must contain only letters and numbers"
    else:
        msg = None
    if msg:
        return _validation_failed([{"msg": msg, "loc": ["query", "symbol"], "type": "value_error"}])

    symbol = symbol.upper()

    if provider is None:
        raise HTTPException(status_code=500, detail="API configuration error")

    try:
        quote = provider.get_quote(symbol)
    except DataNotFoundError:
        raise HTTPException(status_code=404, detail=f'Stock "{symbol}" not found')
    except ProviderTimeoutError:
        raise HTTPException(status_code=504, detail="Request timeout. Please try again.")
    except (RateLimitError, ProviderError) as e:
        logger.error(f"Stock search error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch stock data")

    return {"success": True, "data": quote}


# ----------------------------------------------------------------
# Backward Compatibility
# ----------------------------------------------------------------

LEGACY_ROUTES = {
    "/api/ipos": f"{API_V1}/ipos",
    "/api/brokers": f"{API_V1}/brokers",
    "/api/funds": f"{API_V1}/funds",
    "/api/sectors": f"{API_V1}/sectors",
    "/api/stock-school": f"{API_V1}/stock-school",
}


def _legacy_redirect(target: str):
    def redirect():
        return RedirectResponse(url=target, status_code=301)
    return redirect


for _path, _target in LEGACY_ROUTES.items():
    app.add_api_route(_path, _legacy_redirect(_target), methods=["GET"], include_in_schema=False)


@app.get("/api/stock-search", include_in_schema=False)
def legacy_stock_search(symbol: str = ""):
    return RedirectResponse(url=f"{API_V1}/stock/search?symbol={url_quote(symbol)}", status_code=301)


# ----------------------------------------------------------------
# Lifecycle
# ----------------------------------------------------------------

@app.on_event("startup")
def startup_event():
    """Print the startup banner."""
    log.header(f"{settings.API_TITLE} - SERVER RUNNING")
    log.summary_table("Configuration", [
        ("Docs", f"http://localhost:{settings.PORT}/docs"),
        ("Sample API", f"http://localhost:{settings.PORT}{API_V1}/ipos?status=ongoing"),
        ("Stock search", f"http://localhost:{settings.PORT}{API_V1}/stock/search?symbol=AAPL"),
        ("Rate limit", f"{settings.RATE_LIMIT_PER_MINUTE} requests/minute per IP"
                       if settings.RATE_LIMIT_ENABLED else "disabled"),
        ("IPO cache TTL", f"{settings.IPO_CACHE_TTL_SECONDS}s"),
        ("Datasets", f"{len(data.datasets) - len(data.failed)}/{len(data.datasets)} loaded"),
    ])
    for r in app.routes:
        if getattr(r, "include_in_schema", False) and r.path.startswith("/api"):
            log.route(",".join(sorted(r.methods)), r.path, r.summary or r.name)


@app.on_event("shutdown")
def shutdown_event():
    """Close the scraper and quote provider HTTP sessions on shutdown."""
    scraper = ipo_service.scraper
    if isinstance(scraper, ChittorgarhProvider):
        scraper.session.close()
    if isinstance(quote_provider, AlphaVantageProvider):
        quote_provider.session.close()
    logger.info("HTTP sessions closed")


if __name__ == "__main__":
    import uvicorn

    log.setup_verbose_logging("api")
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info"
    )
