"""Whitespace normalisation for extracted document text."""

from __future__ import annotations

import re
from typing import List

_WS_RUN = re.compile(r"\s+")


def normalize_text(text: str | None) -> str | None:
    """Return *text* in canonical multi-line form, or ``None`` if nothing is left.

    - ``\\r\\n`` and ``\\r`` become ``\\n``.
    - Each line is trimmed and inner whitespace runs collapse to one space.
    - Runs of blank lines collapse to a single blank line.
    - Leading and trailing blank lines are dropped.
    """
    if not text:
        return None

    unified = text.replace("\r\n", "\n").replace("\r", "\n")
    lines: List[str] = []
    for line in unified.split("\n"):
        line = _WS_RUN.sub(" ", line).strip()
        if not line and (not lines or not lines[-1]):
            continue
        lines.append(line)

    while lines and not lines[-1]:
        lines.pop()

    return "\n".join(lines) or None
