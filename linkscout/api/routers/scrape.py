"""Scrape endpoint — classify the links of one listing page.

Routes
------
GET /scrape?url=<listing page>&include_text=true|false
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from linkscout.errors import PageFetchError
from linkscout.pipeline import scrape_listing

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fetch_error_status(exc: PageFetchError) -> int:
    if exc.status_code is not None and exc.status_code >= 400:
        return exc.status_code
    return 500


def _fetch_error_body(exc: PageFetchError) -> dict[str, Any]:
    return {
        "error": "Failed to fetch the source page.",
        "details": exc.details,
        "url": exc.url,
        "status": exc.status_code,
    }


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.get("")
def scrape(
    url: Optional[str] = None,
    include_text: Optional[bool] = None,
) -> JSONResponse:
    """Fetch a listing page and return its classified links.

    Returns 400 without ``url``, the upstream status (or 500) when the page
    cannot be fetched, and 422 with the partial result when the official
    website or the whitepaper link is missing.
    """
    if not url or not url.strip():
        return JSONResponse(
            status_code=400,
            content={"error": 'Query parameter "url" is required.', "missing": ["url"]},
        )
    url = url.strip()

    try:
        report = scrape_listing(url, include_text=include_text)
    except PageFetchError as exc:
        return JSONResponse(status_code=_fetch_error_status(exc), content=_fetch_error_body(exc))

    if not report.complete:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Required links are missing.",
                "missing": report.missing,
                "data": report.links_dict(),
            },
        )

    return JSONResponse(status_code=200, content=report.to_dict())
