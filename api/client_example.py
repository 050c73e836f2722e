"""
Example client for the MarketSphere data API.

Demonstrates how to consume the API from a dashboard, notebook or
other application.
"""

import requests
from typing import Dict, List, Optional


class MarketSphereClient:
    """
    Client for the MarketSphere data API.

    Usage:
        client = MarketSphereClient("http://localhost:3000")
        ongoing = client.get_ipos(status="ongoing")
        quote = client.get_stock_quote("AAPL")
    """

    def __init__(self, api_url: str = "http://localhost:3000", api_key: Optional[str] = None):
        """
        Initialize API client.

        Args:
            api_url: Base URL of the API server
            api_key: Admin key sent as X-API-Key on cache operations
        """
        self.api_url = api_url.rstrip('/')
        self.session = requests.Session()
        if api_key:
            self.session.headers["X-API-Key"] = api_key

    def _get(self, endpoint: str, params: Dict = None) -> Dict:
        """Make GET request to API."""
        url = f"{self.api_url}/api/v1{endpoint}"
        response = self.session.get(url, params=params)
        response.raise_for_status()
        return response.json()

    # ----------------------------------------------------------------
    # Health
    # ----------------------------------------------------------------

    def health_check(self) -> Dict:
        """Check API health and IPO cache state."""
        response = self.session.get(f"{self.api_url}/")
        response.raise_for_status()
        return response.json()

    # ----------------------------------------------------------------
    # IPOs
    # ----------------------------------------------------------------

    def get_ipos(self, status: str = "all", page: int = 1, limit: int = 10) -> List[Dict]:
        """
        Get one page of IPOs.

        Args:
            status: 'ongoing', 'upcoming', 'listed' or 'all'
            page: 1-based page number
            limit: Page size (max 100)
        """
        return self._get("/ipos", {"status": status, "page": page, "limit": limit})["data"]

    def iter_ipos(self, status: str = "all", limit: int = 100):
        """Yield every IPO for a status, following pagination."""
        page = 1
        while True:
            body = self._get("/ipos", {"status": status, "page": page, "limit": limit})
            yield from body["data"]
            if page >= body["pagination"]["totalPages"]:
                return
            page += 1

    def search_ipos(
        self,
        q: Optional[str] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
    ) -> List[Dict]:
        """Search IPOs by name substring and price range."""
        params = {"q": q, "minPrice": min_price, "maxPrice": max_price}
        return self._get("/ipos/search", {k: v for k, v in params.items() if v is not None})["data"]

    def get_ipo(self, slug: str) -> Optional[Dict]:
        """Get an IPO by slug, or None when it does not exist."""
        try:
            return self._get(f"/ipos/{slug}")["data"]
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                return None
            raise

    def clear_ipo_cache(self) -> Dict:
        """Force the next IPO request to refetch."""
        response = self.session.delete(f"{self.api_url}/api/v1/ipos/cache")
        response.raise_for_status()
        return response.json()

    # ----------------------------------------------------------------
    # Datasets & Quotes
    # ----------------------------------------------------------------

    def get_brokers(self, rating: Optional[float] = None, sort_by: str = "name") -> List[Dict]:
        params = {"sortBy": sort_by}
        if rating is not None:
            params["rating"] = rating
        return self._get("/brokers", params)["data"]

    def get_funds(self, category: Optional[str] = None) -> List[Dict]:
        return self._get("/funds", {"category": category} if category else None)["data"]

    def get_sectors(self) -> List[Dict]:
        return self._get("/sectors")["data"]

    def get_stock_quote(self, symbol: str) -> Dict:
        """Get the latest quote for a ticker symbol."""
        return self._get("/stock/search", {"symbol": symbol})["data"]


def main():
    """Print a short market overview from a running server."""
    client = MarketSphereClient()

    print("=" * 60)
    print("MarketSphere API Client Example")
    print("=" * 60)

    health = client.health_check()
    print(f"\nStatus: {health['status']} (v{health['version']})")

    for status in ("ongoing", "upcoming", "listed"):
        ipos = client.get_ipos(status=status, limit=5)
        print(f"\n{status.title()} IPOs ({len(ipos)} shown)")
        for ipo in ipos:
            price = next((d["value"] for d in ipo["details"] if d["label"] in ("PRICE BAND", "IPO PRICE")), "TBA")
            print(f"   {ipo['name']:<40} {price}")

    print("\nTop rated brokers")
    for broker in client.get_brokers(sort_by="rating")[:3]:
        print(f"   {broker['name']:<20} {broker['rating']}")


if __name__ == "__main__":
    main()
