from __future__ import annotations

import re

LANG_KO = "ko"
LANG_EN = "en"

_HANGUL_RE = re.compile(r"[가-힣]")
_LATIN_RE = re.compile(r"[a-zA-Z]")
_WHITESPACE_RE = re.compile(r"\s")


def has_korean(text: str) -> bool:
    return bool(text) and _HANGUL_RE.search(text) is not None


def korean_ratio(text: str) -> float:
    """Share of Hangul syllables among all non-whitespace characters.

    Returns 0.0 for empty or whitespace-only text.
    """
    if not text:
        return 0.0
    total = len(_WHITESPACE_RE.sub("", text))
    if total == 0:
        return 0.0
    return len(_HANGUL_RE.findall(text)) / total


def english_ratio(text: str) -> float:
    """Share of Latin letters among Latin letters plus Hangul syllables."""
    if not text:
        return 0.0
    english = len(_LATIN_RE.findall(text))
    total = english + len(_HANGUL_RE.findall(text))
    if total == 0:
        return 0.0
    return english / total


def is_korean_content(text: str, threshold: float = 0.3) -> bool:
    return korean_ratio(text) > threshold


def is_mostly_english(text: str, threshold: float = 0.7) -> bool:
    return english_ratio(text) > threshold


def detect_language(text: str) -> str:
    """Very lightweight language detection between Korean and English."""
    return LANG_KO if is_korean_content(text) else LANG_EN
