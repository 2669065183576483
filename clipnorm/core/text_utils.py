"""Pure text utilities with no domain knowledge."""

from __future__ import annotations

import re
from collections.abc import Iterable

_BLANK_RUN_RE = re.compile(r"\n{3,}")


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of >2 newlines to exactly 2."""
    return _BLANK_RUN_RE.sub("\n\n", text)


def prefix_key(text: str, length: int, *, lowercase: bool = False) -> str:
    """Approximate identity key: the first *length* characters of *text*."""
    key = text[:length]
    return key.lower() if lowercase else key


def dedupe_preserving_order(items: Iterable[str]) -> list[str]:
    """Drop exact duplicates and non-string items, keeping first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if not isinstance(item, str) or item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out
