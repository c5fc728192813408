"""Tests for the source page fetcher and the result models.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``fetch_page`` tests.
"""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
import respx

from linkscout.config import Settings, settings
from linkscout.errors import PageFetchError
from linkscout.scraper.fetcher import BROWSER_HEADERS, build_client, fetch_page
from linkscout.scraper.models import Anchor, ExtractionResult, RawPage, SocialLink


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_PAGE_URL = "https://coinmarketcap.com/currencies/demo-coin/"

_SIMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Demo Coin</title></head>
<body><a href="https://democoin.io">Website</a></body>
</html>
"""


def _mock_redirect_chain(hops: int, router=respx) -> str:
    """Register *hops* redirects ending in a listing page; return the start URL."""
    urls = [f"https://cmc.example/hop/{i}" for i in range(hops)] + [_PAGE_URL]
    for current, following in zip(urls, urls[1:]):
        router.get(current).mock(
            return_value=httpx.Response(301, headers={"Location": following})
        )
    router.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=_SIMPLE_HTML))
    return urls[0]


# ---------------------------------------------------------------------------
# fetch_page tests
# ---------------------------------------------------------------------------

class TestFetchPage:
    def test_successful_fetch_returns_raw_page(self) -> None:
        """A 200 response is returned as a RawPage."""
        with respx.mock:
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=_SIMPLE_HTML))
            raw = fetch_page(_PAGE_URL)

        assert isinstance(raw, RawPage)
        assert raw.url == _PAGE_URL
        assert raw.status_code == 200
        assert "democoin.io" in raw.html

    def test_sends_browser_headers(self) -> None:
        with respx.mock:
            route = respx.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=""))
            fetch_page(_PAGE_URL)

        sent = route.calls.last.request
        assert sent.headers["User-Agent"] == BROWSER_HEADERS["User-Agent"]
        assert sent.headers["Accept-Language"] == "en-US,en;q=0.9"

    def test_follows_redirects(self) -> None:
        with respx.mock:
            respx.get("https://cmc.example/old").mock(
                return_value=httpx.Response(301, headers={"Location": _PAGE_URL})
            )
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=_SIMPLE_HTML))
            raw = fetch_page("https://cmc.example/old")

        assert raw.status_code == 200

    def test_http_error_carries_status(self) -> None:
        """A 404 response raises ``PageFetchError`` with the upstream status."""
        with respx.mock:
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(404, text="Not Found"))
            with pytest.raises(PageFetchError) as info:
                fetch_page(_PAGE_URL)

        assert info.value.status_code == 404
        assert info.value.url == _PAGE_URL

    def test_transport_error_has_no_status(self) -> None:
        with respx.mock:
            respx.get(_PAGE_URL).mock(side_effect=httpx.ConnectError("connection refused"))
            with pytest.raises(PageFetchError) as info:
                fetch_page(_PAGE_URL)

        assert info.value.status_code is None
        assert "connection refused" in info.value.details

    def test_unsupported_scheme_raises(self) -> None:
        with pytest.raises(PageFetchError):
            fetch_page("ftp://coinmarketcap.com/file")

    def test_redirect_chain_of_five_is_followed(self) -> None:
        with respx.mock:
            start = _mock_redirect_chain(5)
            raw = fetch_page(start)

        assert raw.status_code == 200

    def test_sixth_redirect_fails_without_status(self) -> None:
        with respx.mock(assert_all_called=False) as router:
            start = _mock_redirect_chain(6, router)
            with pytest.raises(PageFetchError) as info:
                fetch_page(start)

        assert info.value.status_code is None
        assert info.value.url == start

    def test_uses_page_timeout(self) -> None:
        with respx.mock:
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=""))
            with patch("linkscout.scraper.fetcher.build_client", wraps=build_client) as mock_build:
                fetch_page(_PAGE_URL)

        mock_build.assert_called_once_with(settings.page_timeout)


class TestBuildClient:
    def test_timeout_and_redirect_bound(self) -> None:
        with build_client(20.0) as client:
            assert client.timeout == httpx.Timeout(20.0)
            assert client.max_redirects == settings.max_redirects
            assert client.follow_redirects is True
            assert client.headers["User-Agent"] == BROWSER_HEADERS["User-Agent"]

    def test_document_timeout(self) -> None:
        with build_client(60.0) as client:
            assert client.timeout.read == 60.0
            assert client.timeout.connect == 60.0


class TestFetchDefaults:
    def test_settings_defaults(self, monkeypatch) -> None:
        for name in ("PAGE_TIMEOUT", "DOCUMENT_TIMEOUT", "MAX_REDIRECTS", "MAX_DOCUMENT_BYTES"):
            monkeypatch.delenv(name, raising=False)
        defaults = Settings()

        assert defaults.page_timeout == 20.0
        assert defaults.document_timeout == 60.0
        assert defaults.max_redirects == 5
        assert defaults.max_document_bytes == 20 * 1024 * 1024


# ---------------------------------------------------------------------------
# Model tests
# ---------------------------------------------------------------------------

class TestExtractionResult:
    def test_missing_fields_order(self) -> None:
        assert ExtractionResult().missing_fields() == ["website", "whitepaper"]
        assert ExtractionResult(website="https://a.io/").missing_fields() == ["whitepaper"]
        assert ExtractionResult(whitepaper="https://a.io/wp.pdf").missing_fields() == ["website"]

    def test_to_dict_is_json_ready(self) -> None:
        result = ExtractionResult(
            website="https://a.io/",
            socials=[SocialLink(platform="telegram", url="https://t.me/a")],
            others=[Anchor(url="https://b.io/", text="B")],
        )
        data = result.to_dict()
        assert data["socials"] == [{"platform": "telegram", "url": "https://t.me/a"}]
        assert data["others"] == [{"url": "https://b.io/", "text": "B"}]
        assert data["whitepaper"] is None
        assert data["explorers"] == []
