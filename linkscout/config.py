"""Centralised settings for the linkscout service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.environ.get(name, default)
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Page fetch
    # ------------------------------------------------------------------
    page_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_TIMEOUT", "20.0"))
    )
    excluded_domains: tuple[str, ...] = field(
        default_factory=lambda: _env_list("EXCLUDED_DOMAINS", "coinmarketcap.com")
    )

    # ------------------------------------------------------------------
    # Document fetch
    # ------------------------------------------------------------------
    document_timeout: float = field(
        default_factory=lambda: float(os.environ.get("DOCUMENT_TIMEOUT", "60.0"))
    )
    max_document_bytes: int = field(
        default_factory=lambda: int(os.environ.get("MAX_DOCUMENT_BYTES", str(20 * 1024 * 1024)))
    )
    fetch_whitepaper_text: bool = field(
        default_factory=lambda: _env_bool("FETCH_WHITEPAPER_TEXT", "true")
    )

    # Shared by both fetches
    max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("MAX_REDIRECTS", "5"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    log_json: bool = field(
        default_factory=lambda: _env_bool("LOG_JSON", "false")
    )


# Module-level singleton, import this everywhere:
#   from linkscout.config import settings
settings = Settings()
