"""Scraper package — page fetch, link classification & document text."""

from linkscout.scraper.document import fetch_document_text
from linkscout.scraper.extractor import classify_link, extract_links
from linkscout.scraper.fetcher import fetch_page
from linkscout.scraper.models import Anchor, ExtractionResult, RawPage, SocialLink

__all__ = [
    "fetch_page",
    "extract_links",
    "classify_link",
    "fetch_document_text",
    "Anchor",
    "ExtractionResult",
    "RawPage",
    "SocialLink",
]
