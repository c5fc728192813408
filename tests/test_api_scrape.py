"""Tests for the /scrape API endpoint.

The FastAPI ``TestClient`` drives the app in-process; ``respx`` serves the
upstream listing page and whitepaper (the TestClient's own transport is not
affected by it).
"""

from __future__ import annotations

from typing import Generator

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from linkscout.api.app import create_app


_PAGE_URL = "https://coinmarketcap.com/currencies/demo-coin/"

_MINIMAL_HTML = (
    '<a href="https://example.com">Site</a>'
    '<a href="https://example.com/whitepaper.pdf">WP</a>'
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestScrapeValidation:
    def test_missing_url_is_400(self, client: TestClient) -> None:
        resp = client.get("/scrape")
        assert resp.status_code == 400
        body = resp.json()
        assert body["missing"] == ["url"]
        assert "url" in body["error"]

    def test_blank_url_is_400(self, client: TestClient) -> None:
        resp = client.get("/scrape", params={"url": "   "})
        assert resp.status_code == 400


class TestScrapeUpstreamFailure:
    def test_upstream_status_is_mirrored(self, client: TestClient) -> None:
        with respx.mock:
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(404, text="gone"))
            resp = client.get("/scrape", params={"url": _PAGE_URL})

        assert resp.status_code == 404
        body = resp.json()
        assert body["status"] == 404
        assert body["url"] == _PAGE_URL
        assert body["details"]

    def test_transport_failure_is_500(self, client: TestClient) -> None:
        with respx.mock:
            respx.get(_PAGE_URL).mock(side_effect=httpx.ConnectError("dns failure"))
            resp = client.get("/scrape", params={"url": _PAGE_URL})

        assert resp.status_code == 500
        body = resp.json()
        assert body["status"] is None
        assert "dns failure" in body["details"]


class TestScrapeMissingFields:
    def test_page_without_links_is_422(self, client: TestClient) -> None:
        with respx.mock:
            respx.get(_PAGE_URL).mock(
                return_value=httpx.Response(200, text="<html><body><p>No links</p></body></html>")
            )
            resp = client.get("/scrape", params={"url": _PAGE_URL})

        assert resp.status_code == 422
        body = resp.json()
        assert body["missing"] == ["website", "whitepaper"]
        assert body["data"]["explorers"] == []

    def test_partial_result_is_returned(self, client: TestClient) -> None:
        html = '<a href="https://demo.io">Site</a><a href="https://t.me/demo">TG</a>'
        with respx.mock:
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=html))
            resp = client.get("/scrape", params={"url": _PAGE_URL})

        assert resp.status_code == 422
        body = resp.json()
        assert body["missing"] == ["whitepaper"]
        assert body["data"]["website"] == "https://demo.io/"
        assert body["data"]["socials"] == [{"platform": "telegram", "url": "https://t.me/demo"}]


class TestScrapeSuccess:
    def test_minimal_page(self, client: TestClient) -> None:
        with respx.mock:
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=_MINIMAL_HTML))
            resp = client.get("/scrape", params={"url": _PAGE_URL, "include_text": "false"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["inputUrl"] == _PAGE_URL
        assert "T" in body["scrapedAt"]
        assert body["links"]["website"] == "https://example.com/"
        assert body["links"]["whitepaper"] == "https://example.com/whitepaper.pdf"
        assert body["links"]["whitepaperText"] is None

    def test_whitepaper_text_included(self, client: TestClient) -> None:
        with respx.mock:
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=_MINIMAL_HTML))
            respx.get("https://example.com/whitepaper.pdf").mock(
                return_value=httpx.Response(200, content=b"%PDF-1.4")
            )
            with pytest.MonkeyPatch.context() as mp:
                mp.setattr("linkscout.scraper.document.pdf_to_text", lambda body: "Demo  paper")
                resp = client.get("/scrape", params={"url": _PAGE_URL, "include_text": "true"})

        assert resp.status_code == 200
        assert resp.json()["links"]["whitepaperText"] == "Demo paper"

    def test_oversize_whitepaper_still_succeeds(self, client: TestClient, monkeypatch) -> None:
        monkeypatch.setattr("linkscout.config.settings.max_document_bytes", 16)
        with respx.mock:
            respx.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=_MINIMAL_HTML))
            respx.get("https://example.com/whitepaper.pdf").mock(
                return_value=httpx.Response(200, content=b"%PDF-1.4" + b"0" * 64)
            )
            resp = client.get("/scrape", params={"url": _PAGE_URL, "include_text": "true"})

        assert resp.status_code == 200
        assert resp.json()["links"]["whitepaperText"] is None
