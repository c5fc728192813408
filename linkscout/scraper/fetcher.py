"""HTTP fetcher for the source listing page."""

from __future__ import annotations

import httpx
import structlog

from linkscout.config import settings
from linkscout.errors import PageFetchError
from linkscout.scraper.models import RawPage

logger = structlog.get_logger()

# Browser-like identity; listing sites answer naive bot user agents with 403s.
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
}


def build_client(timeout: float) -> httpx.Client:
    """Return an ``httpx.Client`` with the browser headers and redirect bound."""
    return httpx.Client(
        headers=BROWSER_HEADERS,
        timeout=timeout,
        follow_redirects=True,
        max_redirects=settings.max_redirects,
    )


def fetch_page(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Raises:
        PageFetchError: On any transport error or a 4xx/5xx response.  The
            upstream status code is attached when the server answered.
    """
    log = logger.bind(component="PageFetcher", url=url)

    try:
        with build_client(settings.page_timeout) as client:
            response = client.get(url)
            response.raise_for_status()
            html = response.text
            status_code = response.status_code
    except httpx.HTTPStatusError as exc:
        log.warning("Page fetch rejected", status=exc.response.status_code)
        raise PageFetchError(url, str(exc), status_code=exc.response.status_code) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        log.warning("Page fetch failed", error=str(exc))
        raise PageFetchError(url, str(exc) or exc.__class__.__name__) from exc

    log.info("Page fetched", status=status_code, chars=len(html))
    return RawPage(url=url, html=html, status_code=status_code)
