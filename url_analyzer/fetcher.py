"""
Fetcher: one HTTP GET per analysis, returning raw bytes.

The body is kept as bytes (response.content, never response.text) because the
charset is unknown at this point; decoding happens in the CharsetResolver.
Every failure mode becomes a FetchError. There is no retry: the caller falls
back to a synthesized note instead.
"""

from typing import Optional

import requests

from .config import DEFAULT_USER_AGENT
from .schemas import ExtractionRequest, FetchResult
from .exceptions import FetchError
from .logger import get_module_logger

logger = get_module_logger("fetcher")


DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


class Fetcher:
    """Browser-like HTTP GET with an explicit timeout."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = "ja,en;q=0.9",
        session: Optional[requests.Session] = None
    ):
        self.timeout = timeout
        self.session = session
        self.headers = {
            "User-Agent": user_agent,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": accept_language,
            "Accept-Encoding": "gzip, deflate",
        }

    def fetch(self, request: ExtractionRequest) -> FetchResult:
        """
        Retrieve the URL.

        Args:
            request: Validated request

        Returns:
            FetchResult with status, Content-Type and raw bytes

        Raises:
            FetchError: transport error, timeout, or non-2xx status
        """
        url = request.url
        logger.debug(f"GET {url} (timeout={self.timeout}s)")

        getter = self.session.get if self.session is not None else requests.get
        try:
            response = getter(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Fetch failed for {url}: {e}")
            raise FetchError(
                f"Request failed: {e}",
                url=url,
                details={"error": str(e), "type": type(e).__name__}
            )

        try:
            if not 200 <= response.status_code < 300:
                logger.warning(f"Fetch failed for {url}: HTTP {response.status_code}")
                raise FetchError(
                    f"HTTP error! status: {response.status_code}",
                    url=url,
                    status_code=response.status_code
                )

            # Reading .content can still fail mid-stream (e.g. broken gzip)
            try:
                content = response.content
            except requests.RequestException as e:
                logger.warning(f"Reading body failed for {url}: {e}")
                raise FetchError(f"Reading response body failed: {e}", url=url,
                                 status_code=response.status_code)

            logger.info(f"Fetched {url}: HTTP {response.status_code}, {len(content)} bytes")
            return FetchResult(
                status_code=response.status_code,
                content_type=response.headers.get("Content-Type", ""),
                content=content,
                hostname=request.hostname,
                path=request.path
            )
        finally:
            response.close()
