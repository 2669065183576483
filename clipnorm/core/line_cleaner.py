"""Line-level cleaning shared by the thread normalizer and the block parser.

Strips author markers, URLs, Markdown link remnants, engagement counters,
separators, UI labels and media placeholders from a single line of scraped
text. Continuation markers such as "(이어서 계속👇)" are content and survive.
"""

from __future__ import annotations

import re

from clipnorm.config.rules import DEFAULT_LINE_CLEANER_RULES, LineCleanerRules

_AUTHOR_LINE_RE = re.compile(r"^[-·]?Author$", re.IGNORECASE)
_URL_ONLY_RE = re.compile(r"^https?://")
_NUMBER_ONLY_RE = re.compile(r"^\d+$")
_BRACKET_PAREN_ONLY_RE = re.compile(r"^[\[\]()]+$")
_KOREAN_RELATIVE_TIME_RE = re.compile(r"^\d+\s*(?:분|시간|일|주|개월|년)\s*전$")
_SHORT_RELATIVE_TIME_RE = re.compile(r"^\d+[smhdw]$")
_KOREAN_NAME_RE = re.compile(r"^[가-힣]{2,10}$")
_CONTENT_CHAR_RE = re.compile(r"[a-zA-Z0-9가-힣]")
_WHITESPACE_RUN_RE = re.compile(r"\s+")

# Applied in order; later rules assume earlier noise is gone.
_LINE_RULES: tuple[re.Pattern[str], ...] = (
    _AUTHOR_LINE_RE,
    re.compile(r"[-·]Author\s*", re.IGNORECASE),
    # bare URLs, with a stray bracket on either side
    re.compile(r"[\[\]]?https?://[^\s\])]+\]?"),
    # [label]() left behind once the URL is gone
    re.compile(r"\[[^\]]*\]\(\s*\)"),
    re.compile(r"\]\s*\(\s*\)"),
    re.compile(r"\[\s*\]"),
    re.compile(r"\(\s*\)"),
    re.compile(r"\[[^\]]*\]\([^)]*\)"),
    re.compile(r"^[\[\]]+$"),
    _NUMBER_ONLY_RE,
    re.compile(r"={3,}"),
    re.compile(r"^[-_*·=~]{3,}$"),
    # like/share counter pairs: "642 36", "1.2K 85"
    re.compile(r"^\d+\.?\d*K?\s+\d+\.?\d*K?\s*$"),
    re.compile(r"\b\d+\.?\d*K?\s+\d+\.?\d*K?\b"),
)

_PLACEHOLDER_RULES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\[?Image\s*\d+[:\]]?.*$", re.IGNORECASE),
    re.compile(r"^\(media\)$", re.IGNORECASE),
)


def _alternation(words: tuple[str, ...]) -> str:
    ordered = sorted(words, key=len, reverse=True)
    return "|".join(re.escape(word).replace(" ", r"[ \t]+") for word in ordered)


class LineCleaner:
    """Deterministic single-line cleaner configured by ``LineCleanerRules``."""

    def __init__(self, rules: LineCleanerRules | None = None) -> None:
        self._rules = rules or DEFAULT_LINE_CLEANER_RULES

        labels = _alternation(self._rules.ui_labels)
        words = _alternation(self._rules.engagement_words)
        self._label_line_re = (
            re.compile(rf"^[ \t]*(?:{labels})[ \t]*$", re.IGNORECASE | re.MULTILINE)
            if labels
            else None
        )
        self._count_line_re = (
            re.compile(
                rf"^[ \t]*\d[\d.,]*[ \t]*[KkMm]?[ \t]*(?:{words})[ \t]*$",
                re.IGNORECASE | re.MULTILINE,
            )
            if words
            else None
        )
        self._fragment_rules = tuple(
            re.compile(pattern, re.IGNORECASE | re.MULTILINE)
            for pattern in self._rules.fragment_noise_patterns
        )

    @property
    def rules(self) -> LineCleanerRules:
        return self._rules

    def is_ui_label(self, line: str) -> bool:
        """True for a bare UI/action label, optionally with a leading count."""
        if self._label_line_re is not None and self._label_line_re.match(line):
            return True
        return self._count_line_re is not None and self._count_line_re.match(line) is not None

    def strip_ui_noise(self, text: str) -> str:
        """Blank every line of *text* that holds nothing but a UI label."""
        if self._label_line_re is not None:
            text = self._label_line_re.sub("", text)
        if self._count_line_re is not None:
            text = self._count_line_re.sub("", text)
        return text

    def clean(self, line: str | None) -> str:
        if not line:
            return ""
        # Removing one token can expose another ("ht[]tps://...", nested "[[]]").
        # Every rule only deletes or collapses, so this reaches a fixed point.
        cleaned = line.strip()
        while True:
            updated = self._clean_once(cleaned)
            if updated == cleaned:
                return cleaned
            cleaned = updated

    def _clean_once(self, line: str) -> str:
        cleaned = line.strip()
        for rule in _LINE_RULES:
            cleaned = rule.sub("", cleaned)
        if self.is_ui_label(cleaned):
            cleaned = ""
        for rule in _PLACEHOLDER_RULES:
            cleaned = rule.sub("", cleaned)
        return _WHITESPACE_RUN_RE.sub(" ", cleaned).strip()

    def should_skip(self, line: str) -> bool:
        """True when a cleaned line carries no content worth keeping."""
        trimmed = line.strip()
        if len(trimmed) < 2:
            return True
        if self.is_ui_label(trimmed):
            return True
        return any(
            pattern.match(trimmed)
            for pattern in (
                _NUMBER_ONLY_RE,
                _AUTHOR_LINE_RE,
                _URL_ONLY_RE,
                _BRACKET_PAREN_ONLY_RE,
                _KOREAN_RELATIVE_TIME_RE,
                _SHORT_RELATIVE_TIME_RE,
                _KOREAN_NAME_RE,
            )
        )

    def clean_fragment(self, text: str | None) -> str:
        """Clean a Markdown text fragment for block extraction.

        Strips Markdown-only page chrome (usernames, relative timestamps,
        footer links, source preamble) around the shared line rules; the
        second round catches chrome uncovered by the first. Fragments without
        any letter or digit are dropped.
        """
        cleaned = text.strip() if text else ""
        for _ in range(2):
            for rule in self._fragment_rules:
                cleaned = rule.sub("", cleaned)
            cleaned = self.clean(cleaned)
        if len(cleaned) < 2 or not _CONTENT_CHAR_RE.search(cleaned):
            return ""
        return cleaned
