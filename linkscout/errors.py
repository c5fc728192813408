"""Exception types raised by the scraper layer."""

from __future__ import annotations


class ScoutError(Exception):
    """Base class for all linkscout errors."""


class PageFetchError(ScoutError):
    """The source page could not be fetched.

    ``status_code`` carries the upstream HTTP status when the server answered,
    and is ``None`` for transport failures (DNS, timeout, connection reset).
    """

    def __init__(self, url: str, details: str, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {details}")
        self.url = url
        self.details = details
        self.status_code = status_code


class DocumentFetchError(ScoutError):
    """The whitepaper/document download failed."""


class DocumentTooLargeError(DocumentFetchError):
    """The response body exceeded the configured byte ceiling."""


class DocumentTimeoutError(DocumentFetchError):
    """The transfer ran past its overall deadline."""


class DocumentStatusError(DocumentFetchError):
    """The server answered with a 4xx/5xx status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"HTTP {status_code} for {url}")
        self.status_code = status_code
