"""Link extraction: turns listing-page HTML into an :class:`ExtractionResult`."""

from __future__ import annotations

from typing import List
from urllib.parse import urlsplit

import structlog
from bs4 import BeautifulSoup

from linkscout.scraper.models import Anchor, ExtractionResult, SocialLink
from linkscout.scraper.rules import DEFAULT_RULES, LinkRules
from linkscout.scraper.urls import bare_host, host_in_domains, is_web_url, resolve_url

logger = structlog.get_logger()

WHITEPAPER = "whitepaper"
EXPLORER = "explorer"
SOCIAL_PREFIX = "social:"
REPOSITORY = "repository"
AGGREGATOR = "aggregator"
DOCS = "docs"
OTHER = "other"

_CAPTURABLE = frozenset({AGGREGATOR, DOCS, OTHER})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _collect_anchors(html: str, page_url: str, rules: LinkRules) -> List[Anchor]:
    """Return the unique, in-scope anchors of *html* in document order."""
    soup = BeautifulSoup(html or "", "html.parser")
    seen: set[str] = set()
    anchors: List[Anchor] = []

    for tag in soup.find_all("a", href=True):
        url = resolve_url(tag["href"], page_url)
        if url is None or not is_web_url(url):
            continue
        host = (urlsplit(url).hostname or "").lower()
        if host_in_domains(host, rules.excluded_domains):
            continue
        if url in seen:
            continue
        seen.add(url)
        anchors.append(Anchor(url=url, text=tag.get_text().strip()))

    return anchors


def _is_docs(host: str, path: str, text: str) -> bool:
    return host.startswith("docs.") or "/docs" in path or "docs" in text


def classify_link(anchor: Anchor, rules: LinkRules = DEFAULT_RULES) -> str:
    """Return the classification of *anchor*; the first matching rule wins.

    One of ``whitepaper``, ``explorer``, ``social:<platform>``, ``repository``,
    ``aggregator``, ``docs`` or ``other``.
    """
    parts = urlsplit(anchor.url)
    host = (parts.hostname or "").lower()
    exact_host = bare_host(host)
    path = parts.path.lower()
    href = anchor.url.lower()
    text = anchor.text.lower()

    if any(kw in href or kw in text for kw in rules.whitepaper_keywords) or path.endswith(".pdf"):
        return WHITEPAPER

    if host in rules.explorer_domains or exact_host in rules.explorer_domains:
        return EXPLORER
    if any(host.endswith("." + d) for d in rules.explorer_wildcard_domains):
        return EXPLORER

    platform = rules.social_domains.get(exact_host)
    if platform:
        return SOCIAL_PREFIX + platform

    if exact_host in rules.repository_domains:
        return REPOSITORY

    if exact_host in rules.link_aggregator_domains:
        return AGGREGATOR

    if _is_docs(host, path, text):
        return DOCS

    return OTHER


def _market_data_slot(anchor: Anchor, result: ExtractionResult, rules: LinkRules) -> str | None:
    """Return the empty market-data slot *anchor* belongs to, if any."""
    host = (urlsplit(anchor.url).hostname or "").lower()
    for slot, needle in rules.market_data_sites.items():
        if needle in host and getattr(result, slot, None) is None:
            return slot
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_links(
    html: str,
    page_url: str,
    rules: LinkRules = DEFAULT_RULES,
) -> ExtractionResult:
    """Classify the outbound links of a listing page.

    Slots are filled in document order: the first whitepaper match and the
    first unclassified link win the single-value ``whitepaper`` and
    ``website`` slots.  When no whitepaper link exists, the first docs
    candidate is promoted to ``whitepaper``.  Link-in-bio hubs are dropped.

    CoinGecko and DEXTools links fill their single-value slots unless they
    classify as whitepaper, explorer, social or repository, in which case
    that classification wins.

    Never raises on malformed markup; a page without usable anchors yields an
    empty result.
    """
    result = ExtractionResult()
    anchors = _collect_anchors(html, page_url, rules)

    for anchor in anchors:
        kind = classify_link(anchor, rules)

        # Market-data sites only take links no specific class has claimed.
        if kind in _CAPTURABLE:
            slot = _market_data_slot(anchor, result, rules)
            if slot is not None:
                setattr(result, slot, anchor.url)
                continue

        if kind == WHITEPAPER:
            if result.whitepaper is None:
                result.whitepaper = anchor.url
                result.whitepaper_source = "direct"
            else:
                result.others.append(anchor)
        elif kind == EXPLORER:
            result.explorers.append(anchor.url)
        elif kind.startswith(SOCIAL_PREFIX):
            result.socials.append(SocialLink(platform=kind[len(SOCIAL_PREFIX):], url=anchor.url))
        elif kind == REPOSITORY:
            result.repositories.append(anchor.url)
        elif kind == AGGREGATOR:
            continue
        elif kind == DOCS:
            result.docs.append(anchor.url)
        elif result.website is None:
            result.website = anchor.url
        else:
            result.others.append(anchor)

    if result.whitepaper is None and result.docs:
        result.whitepaper = result.docs.pop(0)
        result.whitepaper_source = "docs"

    logger.debug(
        "Links extracted",
        component="LinkExtractor",
        url=page_url,
        anchors=len(anchors),
        website=result.website,
        whitepaper=result.whitepaper,
    )
    return result
