"""Threads text normalizer.

Turns raw Threads text (Markdown or DOM text) into a flat, prompt-ready
string. Main content and comments are separated by reserved tokens::

    <main paragraphs>

    **COMMENTS_SECTION**
    <comment 1>
    **COMMENT_DIVIDER**
    <comment 2>

Renderers split on the two tokens to show the post body and a separate
comments region. Normalizing already-normalized text is a no-op apart from
collapsing blank-line runs.
"""

from __future__ import annotations

import logging
import re

from clipnorm.config.rules import DEFAULT_NORMALIZER_RULES, NormalizerRules
from clipnorm.core.lang import detect_language, is_korean_content, is_mostly_english
from clipnorm.core.line_cleaner import LineCleaner
from clipnorm.core.text_utils import collapse_blank_lines, prefix_key
from clipnorm.domain.models.thread_content import ParsedThread, ThreadComment

logger = logging.getLogger(__name__)

COMMENTS_SECTION_TOKEN = "**COMMENTS_SECTION**"
COMMENT_DIVIDER_TOKEN = "**COMMENT_DIVIDER**"

# Comments(1), Comments (8), Comment(3), ...
_COMMENTS_HEADER_RE = re.compile(r"Comments?\s*\((\d+)\)", re.IGNORECASE)
_TRAILING_WS_RE = re.compile(r"[ \t]+\n")
_PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}")


class ThreadsTextNormalizer:
    """Separates main content from comments and cleans both."""

    def __init__(
        self,
        rules: NormalizerRules | None = None,
        cleaner: LineCleaner | None = None,
    ) -> None:
        self._rules = rules or DEFAULT_NORMALIZER_RULES
        self._cleaner = cleaner or LineCleaner()
        self._tail_patterns = tuple(
            re.compile(pattern, re.IGNORECASE) for pattern in self._rules.tail_noise_patterns
        )

    def normalize(self, raw: str | None) -> str:
        if not raw or not raw.strip():
            return ""

        if COMMENTS_SECTION_TOKEN in raw:
            return collapse_blank_lines(raw).strip()

        # Cleaning can assemble a header or tail marker that noise had split
        # apart ("Comment[] (5)"), so passes repeat until the text is stable.
        result = self._normalize_pass(raw)
        while result and COMMENTS_SECTION_TOKEN not in result:
            again = self._normalize_pass(result)
            if again == result:
                break
            result = again
        return result

    def _normalize_pass(self, raw: str) -> str:
        text = raw.replace("\r\n", "\n").replace("\r", "\n")
        text = _TRAILING_WS_RE.sub("\n", text).strip()
        text = self._strip_tail_noise(text)
        text = self._cleaner.strip_ui_noise(text).strip()

        header = _COMMENTS_HEADER_RE.search(text)
        if header is None:
            result = "\n\n".join(self._clean_lines(text))
            logger.debug(
                "threads_text_normalized",
                extra={
                    "has_comments_header": False,
                    "language": detect_language(result),
                    "chars_in": len(raw),
                    "chars_out": len(result),
                },
            )
            return result

        main_content = "\n\n".join(self._clean_lines(text[: header.start()]))
        comments = self._extract_comments(text[header.end() :], main_content)

        logger.debug(
            "threads_text_normalized",
            extra={
                "has_comments_header": True,
                "language": detect_language(main_content),
                "declared_comments": int(header.group(1)),
                "kept_comments": len(comments),
                "chars_in": len(raw),
            },
        )

        if not comments:
            return main_content

        section = f"{COMMENTS_SECTION_TOKEN}\n" + f"\n{COMMENT_DIVIDER_TOKEN}\n".join(comments)
        if not main_content:
            return section
        return f"{main_content}\n\n{section}"

    def _strip_tail_noise(self, text: str) -> str:
        # Each tail marker consumes itself and everything after it.
        for pattern in self._tail_patterns:
            match = pattern.search(text)
            if match:
                text = text[: match.start()]
        return text.strip()

    def _clean_lines(self, text: str) -> list[str]:
        lines: list[str] = []
        for line in text.split("\n"):
            cleaned = self._cleaner.clean(line)
            if cleaned and not self._cleaner.should_skip(cleaned):
                lines.append(cleaned)
        return lines

    def _extract_comments(self, after_header: str, main_content: str) -> list[str]:
        rules = self._rules
        main_is_korean = is_korean_content(main_content, rules.korean_ratio_threshold)

        blocks = (
            "\n".join(self._clean_lines(block))
            for block in _PARAGRAPH_BREAK_RE.split(after_header.strip())
        )

        seen: set[str] = set()
        comments: list[str] = []
        for block in blocks:
            if len(block) < rules.min_comment_length:
                continue
            # Long English blocks under a Korean post are unrelated threads or spam.
            if (
                main_is_korean
                and len(block) > rules.english_filter_min_length
                and is_mostly_english(block, rules.english_ratio_threshold)
            ):
                continue
            key = prefix_key(block, rules.comment_dedup_prefix, lowercase=True)
            if key in seen:
                continue
            seen.add(key)
            comments.append(block)
        return comments


_DEFAULT_NORMALIZER = ThreadsTextNormalizer()


def normalize_threads_text(raw: str | None) -> str:
    """Normalize raw Threads text with the default rule tables."""
    return _DEFAULT_NORMALIZER.normalize(raw)


def extract_comment_count(raw: str | None) -> int:
    """Return N from the first ``Comments (N)`` header, or 0 when absent."""
    if not raw:
        return 0
    match = _COMMENTS_HEADER_RE.search(raw)
    return int(match.group(1)) if match else 0


def split_normalized_text(text: str | None) -> ParsedThread:
    """Split normalized thread text into its body and individual comments."""
    if not text:
        return ParsedThread(body="")

    body, sep, tail = text.partition(COMMENTS_SECTION_TOKEN)
    if not sep:
        return ParsedThread(body=text.strip())

    segments = [segment.strip() for segment in tail.split(COMMENT_DIVIDER_TOKEN)]
    comments = tuple(
        ThreadComment(id=index, text=segment)
        for index, segment in enumerate(s for s in segments if s)
    )
    return ParsedThread(body=body.strip(), comments=comments)
