"""Bounded download and plain-text extraction for whitepaper documents.

``fetch_document_text`` is the entry point used by the pipeline.  It never
raises: whitepapers live on third-party hosts of unpredictable quality, so
every failure (timeout, oversize body, bad status, decode or parse error)
turns into ``None``.

The lower-level helpers below raise normally and are public so they can be
reused and tested on their own.
"""

from __future__ import annotations

import codecs
import io
import re
import time
from typing import Optional
from urllib.parse import urlsplit

import httpx
import pypdf
import structlog
from bs4 import BeautifulSoup

from linkscout.config import settings
from linkscout.errors import (
    DocumentStatusError,
    DocumentTimeoutError,
    DocumentTooLargeError,
)
from linkscout.scraper.fetcher import build_client
from linkscout.scraper.models import FetchedDocument
from linkscout.scraper.normalize import normalize_text

logger = structlog.get_logger()

_CHARSET_RE = re.compile(r"charset\s*=\s*[\"']?([^\"';\s]+)", re.IGNORECASE)
_STRIP_TAGS = ["script", "style", "noscript"]
_BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "td", "th", "tr", "ul",
]


# ---------------------------------------------------------------------------
# Download
# ---------------------------------------------------------------------------

def download_document(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    max_bytes: Optional[int] = None,
    timeout: Optional[float] = None,
) -> FetchedDocument:
    """Stream *url* into memory, aborting once *max_bytes* is exceeded.

    The body is read chunk by chunk inside the ``client.stream`` context, so
    raising on the ceiling or the deadline closes the connection right away.

    Raises:
        DocumentStatusError: On a 4xx/5xx response.
        DocumentTooLargeError: When the declared or received size exceeds
            the ceiling.
        DocumentTimeoutError: When the overall deadline passes mid-transfer.
        httpx.HTTPError: On transport failures.
    """
    max_bytes = settings.max_document_bytes if max_bytes is None else max_bytes
    timeout = settings.document_timeout if timeout is None else timeout
    deadline = time.monotonic() + timeout

    owns_client = client is None
    if client is None:
        client = build_client(timeout)

    try:
        with client.stream("GET", url) as response:
            if response.status_code >= 400:
                raise DocumentStatusError(url, response.status_code)

            declared = response.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > max_bytes:
                raise DocumentTooLargeError(
                    f"Declared size {declared} exceeds {max_bytes} bytes"
                )

            chunks: list[bytes] = []
            total = 0
            for chunk in response.iter_bytes():
                total += len(chunk)
                if total > max_bytes:
                    raise DocumentTooLargeError(f"Body exceeds {max_bytes} bytes")
                if time.monotonic() > deadline:
                    raise DocumentTimeoutError(f"Transfer exceeded {timeout}s")
                chunks.append(chunk)

            return FetchedDocument(
                url=url,
                final_url=str(response.url),
                content_type=response.headers.get("content-type", ""),
                body=b"".join(chunks),
            )
    finally:
        if owns_client:
            client.close()


# ---------------------------------------------------------------------------
# Type detection & decoding
# ---------------------------------------------------------------------------

def is_pdf(url: str, content_type: str | None) -> bool:
    """PDF if the URL path ends in ``.pdf`` or the server says so."""
    if urlsplit(url).path.lower().endswith(".pdf"):
        return True
    return "application/pdf" in (content_type or "").lower()


def charset_from_content_type(content_type: str | None) -> str:
    """Return the declared charset, or ``utf-8`` when absent or unknown."""
    match = _CHARSET_RE.search(content_type or "")
    if not match:
        return "utf-8"
    try:
        return codecs.lookup(match.group(1)).name
    except LookupError:
        return "utf-8"


def decode_html(body: bytes, content_type: str | None) -> str:
    """Decode *body* with the declared charset, falling back to UTF-8."""
    charset = charset_from_content_type(content_type)
    try:
        return body.decode(charset, errors="replace")
    except (LookupError, UnicodeError):
        return body.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Text extraction
# ---------------------------------------------------------------------------

def html_to_text(html: str) -> str:
    """Return the text content of ``<body>`` with scripts and styles removed.

    Block-level elements are wrapped in line breaks so that, after
    :func:`normalize_text`, each heading or paragraph sits on its own line
    separated by one blank line, even in minified markup.  Inline elements
    stay on the line of their parent.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_STRIP_TAGS):
        tag.decompose()
    for br in soup("br"):
        br.replace_with("\n")
    for tag in soup(_BLOCK_TAGS):
        tag.insert_before("\n")
        tag.insert_after("\n")
    container = soup.body or soup
    return container.get_text()


def pdf_to_text(body: bytes) -> str:
    """Return the text of every page of the PDF in *body*."""
    reader = pypdf.PdfReader(io.BytesIO(body))
    pages: list[str] = []
    for page in reader.pages:
        text = page.extract_text() or ""
        if text.strip():
            pages.append(text)
    return "\n\n".join(pages)


def document_to_text(document: FetchedDocument) -> str | None:
    """Extract and normalise the text of a downloaded document."""
    if is_pdf(document.final_url, document.content_type) or is_pdf(document.url, None):
        raw = pdf_to_text(document.body)
    else:
        raw = html_to_text(decode_html(document.body, document.content_type))
    return normalize_text(raw)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch_document_text(url: str, *, client: Optional[httpx.Client] = None) -> str | None:
    """Download *url* and return its normalised plain text, or ``None``."""
    log = logger.bind(component="DocumentFetcher", url=url)
    try:
        document = download_document(url, client=client)
        text = document_to_text(document)
    except Exception as exc:
        log.warning("Document text unavailable", error=str(exc), error_type=type(exc).__name__)
        return None

    if text is None:
        log.info("Document contained no text", content_type=document.content_type)
        return None

    log.info("Document text extracted", bytes=len(document.body), chars=len(text))
    return text
