"""URL resolution and host matching helpers."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


def resolve_url(href: str, base_url: str) -> str | None:
    """Resolve *href* against *base_url* and return a normalised absolute URL.

    - Lowercases scheme + hostname, drops default ports.
    - Strips the fragment.
    - An empty path on http(s) URLs becomes ``/``.

    Returns ``None`` when the result cannot be parsed (bad port, bracketed
    host that is not a valid IPv6 literal, no host for a web scheme).
    """
    try:
        joined = urljoin(base_url, href.strip())
        parts = urlsplit(joined)
        scheme = parts.scheme.lower()
        if scheme not in _DEFAULT_PORTS:
            # Non-web schemes are kept verbatim so the caller can filter them.
            return urlunsplit(parts._replace(scheme=scheme, fragment=""))
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None

    if not host:
        return None

    netloc = host if ":" not in host else f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    userinfo = _userinfo(parts)
    if userinfo:
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, ""))


def _userinfo(parts: SplitResult) -> str:
    if "@" not in parts.netloc:
        return ""
    return parts.netloc.rsplit("@", 1)[0]


def is_web_url(url: str) -> bool:
    """Return ``True`` for http/https URLs."""
    return urlsplit(url).scheme in _DEFAULT_PORTS


def bare_host(host: str) -> str:
    """Strip a leading ``www.`` so exact-match tables need only one entry."""
    return host[4:] if host.startswith("www.") else host


def host_in_domains(host: str, domains: Iterable[str]) -> bool:
    """Return ``True`` if *host* ends in any of *domains*.

    Plain suffix match: ``notcoinmarketcap.com`` ends in ``coinmarketcap.com``
    and is excluded along with its subdomains.
    """
    return any(host.endswith(domain.lower()) for domain in domains if domain)
