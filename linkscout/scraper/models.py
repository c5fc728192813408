"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional

REQUIRED_FIELDS = ("website", "whitepaper")


@dataclass
class RawPage:
    """The raw HTTP response for the source page."""

    url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class Anchor:
    """A resolved hyperlink: absolute URL (no fragment) and trimmed text."""

    url: str
    text: str


@dataclass(frozen=True)
class SocialLink:
    platform: str
    url: str


@dataclass
class ExtractionResult:
    """Classified links of one listing page.

    Every URL lands in at most one slot.  List slots keep document order.
    """

    website: Optional[str] = None
    whitepaper: Optional[str] = None
    whitepaper_source: Optional[Literal["direct", "docs"]] = None
    explorers: List[str] = field(default_factory=list)
    socials: List[SocialLink] = field(default_factory=list)
    repositories: List[str] = field(default_factory=list)
    docs: List[str] = field(default_factory=list)
    coingecko: Optional[str] = None
    dextools: Optional[str] = None
    others: List[Anchor] = field(default_factory=list)

    def missing_fields(self) -> list[str]:
        """Return the required slots that are still empty, in fixed order."""
        return [name for name in REQUIRED_FIELDS if getattr(self, name) is None]

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON shape used by the API and the CLI."""
        return {
            "website": self.website,
            "whitepaper": self.whitepaper,
            "whitepaperSource": self.whitepaper_source,
            "explorers": list(self.explorers),
            "socials": [{"platform": s.platform, "url": s.url} for s in self.socials],
            "repositories": list(self.repositories),
            "docs": list(self.docs),
            "coingecko": self.coingecko,
            "dextools": self.dextools,
            "others": [{"url": a.url, "text": a.text} for a in self.others],
        }


@dataclass
class FetchedDocument:
    """A fully buffered document download."""

    url: str
    final_url: str
    content_type: str
    body: bytes
