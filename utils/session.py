"""
Shared HTTP session for outbound scraping and API calls.

Wraps requests.Session with browser-like default headers and a default
timeout. get() returns the Response on success and None on any failure,
so callers can test the result for truthiness instead of catching.
"""

import logging
from typing import Dict, Optional

import requests
from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


class RequestSession:
    """requests.Session with default headers, timeout and failure absorption."""

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
    ):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.session.headers["User-Agent"] = user_agent or UserAgent().chrome
        if headers:
            self.session.headers.update(headers)

    def get(self, url: str, params: Optional[Dict] = None, **kwargs) -> Optional[requests.Response]:
        """
        Issue a GET request.

        Returns:
            The Response for a 2xx status, otherwise None (timeouts,
            connection errors and HTTP errors are logged, not raised).
        """
        kwargs.setdefault("timeout", self.timeout)
        try:
            resp = self.session.get(url, params=params, **kwargs)
            resp.raise_for_status()
            return resp
        except requests.exceptions.Timeout:
            logger.error(f"Timed out after {kwargs['timeout']}s: {url}")
        except requests.exceptions.HTTPError as e:
            logger.error(f"HTTP {e.response.status_code if e.response is not None else '?'} from {url}")
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
        return None

    def close(self) -> None:
        self.session.close()
