"""Listing scrape pipeline.

``scrape_listing`` orchestrates one request end to end:

    fetch page → extract links → (optional) fetch + normalise whitepaper
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

import structlog

from linkscout.config import settings
from linkscout.scraper.document import fetch_document_text
from linkscout.scraper.extractor import extract_links
from linkscout.scraper.fetcher import fetch_page
from linkscout.scraper.models import ExtractionResult
from linkscout.scraper.rules import rules_from_settings

logger = structlog.get_logger()


@dataclass
class ScrapeReport:
    input_url: str
    scraped_at: datetime
    links: ExtractionResult
    whitepaper_text: Optional[str] = None
    missing: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.missing

    def links_dict(self) -> dict[str, Any]:
        data = self.links.to_dict()
        data["whitepaperText"] = self.whitepaper_text
        return data

    def to_dict(self) -> dict[str, Any]:
        return {
            "inputUrl": self.input_url,
            "scrapedAt": self.scraped_at.isoformat(),
            "links": self.links_dict(),
        }


def scrape_listing(url: str, *, include_text: Optional[bool] = None) -> ScrapeReport:
    """Scrape the listing page at *url* and classify its links.

    Pipeline:
        1. :func:`~linkscout.scraper.fetcher.fetch_page` — fatal on failure.
        2. :func:`~linkscout.scraper.extractor.extract_links` — classify.
        3. Compute the missing required fields.
        4. When nothing is missing and *include_text* is on,
           :func:`~linkscout.scraper.document.fetch_document_text` retrieves
           the whitepaper text (``None`` on any failure).

    Args:
        url: Listing page URL.
        include_text: Fetch the whitepaper text; defaults to
            ``settings.fetch_whitepaper_text``.

    Raises:
        PageFetchError: If the listing page itself cannot be fetched.
    """
    if include_text is None:
        include_text = settings.fetch_whitepaper_text

    log = logger.bind(component="Pipeline", url=url)

    raw = fetch_page(url)
    links = extract_links(raw.html, url, rules_from_settings(settings.excluded_domains))
    report = ScrapeReport(
        input_url=url,
        scraped_at=datetime.now(timezone.utc),
        links=links,
        missing=links.missing_fields(),
    )

    if report.missing:
        log.info("Required links missing", missing=report.missing)
        return report

    if include_text and links.whitepaper:
        report.whitepaper_text = fetch_document_text(links.whitepaper)

    log.info(
        "Listing scraped",
        website=links.website,
        whitepaper=links.whitepaper,
        has_text=report.whitepaper_text is not None,
    )
    return report
