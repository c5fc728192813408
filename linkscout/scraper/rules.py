"""Lookup tables used to classify outbound links.

The tables live in a frozen :class:`LinkRules` value that is passed into
:func:`~linkscout.scraper.extractor.extract_links`, so callers (and tests) can
swap in their own domain sets with :func:`dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _frozen_map(data: dict[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(data))


# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------

EXPLORER_DOMAINS = frozenset({
    "etherscan.io",             # Ethereum
    "bscscan.com",              # BSC
    "arbiscan.io",              # Arbitrum
    "polygonscan.com",          # Polygon
    "snowtrace.io",             # Avalanche
    "solscan.io",               # Solana
    "explorer.solana.com",
    "tronscan.org",             # Tron
    "explorer.near.org",        # NEAR
    "optimistic.etherscan.io",  # Optimism
    "ftmscan.com",              # Fantom
    "cardanoscan.io",           # Cardano
    "celoscan.io",              # Celo
    "moonriver.moonscan.io",    # Moonriver
    "moonbeam.moonscan.io",     # Moonbeam
    "basescan.org",             # Base
    "scan.mantle.xyz",          # Mantle
    "scan.coredao.org",         # Core
    "gnosisscan.io",            # Gnosis
    "blockscout.com",           # multi-chain
})

# Any subdomain of these counts as an explorer (e.g. goerli.etherscan.io).
EXPLORER_WILDCARD_DOMAINS = ("etherscan.io", "blockscout.com")

SOCIAL_DOMAINS = _frozen_map({
    "twitter.com": "twitter",
    "x.com": "twitter",
    "t.me": "telegram",
    "telegram.me": "telegram",
    "discord.gg": "discord",
    "discord.com": "discord",
    "youtube.com": "youtube",
    "youtu.be": "youtube",
    "reddit.com": "reddit",
    "medium.com": "medium",
    "mirror.xyz": "mirror",
    "facebook.com": "facebook",
    "instagram.com": "instagram",
})

REPOSITORY_DOMAINS = frozenset({"github.com", "gitlab.com", "bitbucket.org"})

LINK_AGGREGATOR_DOMAINS = frozenset({"linktr.ee", "linktree.com", "linktree.ee"})

# Result slot name -> hostname substring.
MARKET_DATA_SITES = _frozen_map({
    "coingecko": "coingecko",
    "dextools": "dextools",
})

WHITEPAPER_KEYWORDS = (
    "whitepaper",
    "white-paper",
    "white paper",
    "litepaper",
    "lite-paper",
    "lite paper",
)


@dataclass(frozen=True)
class LinkRules:
    explorer_domains: frozenset[str] = EXPLORER_DOMAINS
    explorer_wildcard_domains: tuple[str, ...] = EXPLORER_WILDCARD_DOMAINS
    social_domains: Mapping[str, str] = field(default_factory=lambda: SOCIAL_DOMAINS)
    repository_domains: frozenset[str] = REPOSITORY_DOMAINS
    link_aggregator_domains: frozenset[str] = LINK_AGGREGATOR_DOMAINS
    market_data_sites: Mapping[str, str] = field(default_factory=lambda: MARKET_DATA_SITES)
    whitepaper_keywords: tuple[str, ...] = WHITEPAPER_KEYWORDS
    excluded_domains: tuple[str, ...] = ("coinmarketcap.com",)


DEFAULT_RULES = LinkRules()


def rules_from_settings(excluded_domains: tuple[str, ...]) -> LinkRules:
    """Return the default tables with the configured self-domains excluded."""
    return LinkRules(excluded_domains=tuple(excluded_domains))
