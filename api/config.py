"""
Configuration management for the MarketSphere data API.

Values come from the environment, with a .env file at the repository root
loaded first when present.
"""

import os
import re
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

BASE_DIR: Path = Path(__file__).parent.parent

load_dotenv(BASE_DIR / ".env")

PRODUCTION_ORIGINS = [
    "https://your-domain.com",
    "https://www.your-domain.com",
    "capacitor://localhost",
    "ionic://localhost",
    "http://localhost",
]


def origin_prefix_regex(prefixes: List[str]) -> str:
    """Regex accepting any origin that starts with one of the prefixes."""
    return "(?:" + "|".join(re.escape(p) for p in prefixes) + ").*"


class Settings:
    """API server configuration."""

    # Paths
    BASE_DIR: Path = BASE_DIR
    DATA_DIR: str = os.getenv("DATA_DIR", str(BASE_DIR / "data"))

    # Server
    API_TITLE: str = "MarketSphere Data API"
    API_DESCRIPTION: str = "REST API for IPOs, brokers, mutual funds, sectors and stock quotes"
    API_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    ENVIRONMENT: str = os.getenv("APP_ENV", "development")

    # CORS: any origin in development, allowlisted prefixes in production
    CORS_ORIGINS: List[str] = [] if ENVIRONMENT == "production" else ["*"]
    CORS_ORIGIN_REGEX: Optional[str] = (
        origin_prefix_regex(PRODUCTION_ORIGINS) if ENVIRONMENT == "production" else None
    )

    # External sources
    ALPHA_VANTAGE_API_KEY: str = os.getenv("ALPHA_VANTAGE_API_KEY", "")
    IPO_SOURCE_URL: str = os.getenv(
        "IPO_SOURCE_URL",
        "https://www.chittorgarh.com/report/ipo-in-india-list-main-board-sme/82/",
    )
    IPO_CACHE_TTL_SECONDS: int = int(os.getenv("IPO_CACHE_TTL_SECONDS", "3600"))
    REQUEST_TIMEOUT: int = 10  # seconds, scrape and quote requests

    # Rate limiting (per client IP, /api paths only)
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() != "false"
    RATE_LIMIT_PER_MINUTE: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "100"))
    RATE_LIMIT_WINDOW_SECONDS: int = 60

    # Admin endpoints; open when unset
    ADMIN_API_KEY: str = os.getenv("ADMIN_API_KEY", "")


settings = Settings()
