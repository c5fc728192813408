"""FastAPI application factory.

Lifespan
--------
On startup the app configures structlog from the settings.  No state is
shared between requests.

Routers
-------
    /scrape    — listing page link classification
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkscout.config import settings
from linkscout.log import configure_logging

from linkscout.api.routers import scrape as scrape_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup."""
    configure_logging(settings.log_level, settings.log_json)
    logger.info("linkscout API starting")
    yield


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="linkscout API",
        description=(
            "Fetches a cryptocurrency listing page, classifies its outbound "
            "links (website, whitepaper, explorers, socials, repositories) "
            "and optionally returns the normalised whitepaper text."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(scrape_router.router, prefix="/scrape", tags=["scrape"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn linkscout.api.app:app --reload
app = create_app()
