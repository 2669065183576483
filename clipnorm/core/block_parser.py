"""Structured block extraction for scraped Threads Markdown.

Walks the Markdown line by line, lifts inline images into their own blocks,
cleans the remaining text and groups everything into a main section followed
by comment sections. Two independent triggers open the comment section,
whichever fires first in line order:

* a numbered continuation ("1/ ...") after at least one accepted main line,
  which is the author's own self-threaded follow-up;
* a comment indicator line ("replied", "Reply to ...", "Replies").

Numbered continuations are always kept regardless of length, since they are
the author's own content and not short reactions from other users.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from clipnorm.config.rules import DEFAULT_BLOCK_PARSER_RULES, BlockParserRules
from clipnorm.core.lang import has_korean
from clipnorm.core.line_cleaner import LineCleaner
from clipnorm.core.text_utils import prefix_key
from clipnorm.domain.models.thread_content import (
    BlockKind,
    ContentBlock,
    ProcessedThreadContent,
    SectionKind,
    ThreadSection,
)

logger = logging.getLogger(__name__)

_IMAGE_SPLIT_RE = re.compile(r"(!\[.*?\]\(.*?\))")
_IMAGE_RE = re.compile(r"!\[.*?\]\((.*?)\)")
_NUMBERED_RE = re.compile(r"^\d+/\s")
_SHORT_NUMBER_RE = re.compile(r"^\d{1,4}$")
_PUNCTUATION_ONLY_RE = re.compile(r"^[\[\]().,]+$")
_PREAMBLE_PREFIXES = ("Title:", "URL Source:")


@dataclass
class _ParseState:
    sections: list[ThreadSection] = field(default_factory=list)
    kind: SectionKind = SectionKind.MAIN
    blocks: list[ContentBlock] = field(default_factory=list)
    seen: set[str] = field(default_factory=set)
    main_lines: int = 0

    @property
    def in_comments(self) -> bool:
        return self.kind is SectionKind.COMMENT

    def flush(self) -> None:
        if self.blocks:
            self.sections.append(ThreadSection(kind=self.kind, blocks=tuple(self.blocks)))
        self.blocks = []

    def open_comment_section(self) -> None:
        self.flush()
        self.kind = SectionKind.COMMENT


class ThreadBlockParser:
    """Parses scraped Markdown into ``ProcessedThreadContent``."""

    def __init__(
        self,
        rules: BlockParserRules | None = None,
        cleaner: LineCleaner | None = None,
    ) -> None:
        self._rules = rules or DEFAULT_BLOCK_PARSER_RULES
        self._cleaner = cleaner or LineCleaner()
        self._emoticons = frozenset(self._rules.emoticon_chars)

    def parse(self, markdown: str | None) -> ProcessedThreadContent:
        if not markdown or not markdown.strip():
            return ProcessedThreadContent()

        state = _ParseState()
        for line in markdown.split("\n"):
            trimmed = line.strip()
            if self._is_noise_line(trimmed):
                continue

            if not state.in_comments and state.main_lines > 0 and _NUMBERED_RE.match(trimmed):
                state.open_comment_section()

            if not state.in_comments and self.is_comment_indicator(trimmed):
                state.open_comment_section()
                continue

            for block in self.line_to_blocks(trimmed):
                if block.kind is BlockKind.TEXT and not self._accept_text(block.content, state):
                    continue
                state.blocks.append(block)

        state.flush()
        result = ProcessedThreadContent(sections=tuple(state.sections))
        logger.debug(
            "thread_blocks_parsed",
            extra={
                "sections": len(result.sections),
                "has_comments": result.has_comments,
                "main_lines": state.main_lines,
            },
        )
        return result

    def line_to_blocks(self, line: str) -> list[ContentBlock]:
        """Split a line into image blocks and cleaned text blocks, in order."""
        blocks: list[ContentBlock] = []
        for part in _IMAGE_SPLIT_RE.split(line):
            if not part or not part.strip():
                continue
            image = _IMAGE_RE.search(part)
            if image:
                # Every image is kept here; filtering happens downstream.
                url = image.group(1).strip()
                if url.startswith("http"):
                    blocks.append(ContentBlock.image(url))
                continue
            cleaned = self._cleaner.clean_fragment(part)
            if cleaned:
                blocks.append(ContentBlock.text(cleaned))
        return blocks

    def is_comment_indicator(self, line: str) -> bool:
        lower = line.strip().lower()
        if lower in self._rules.comment_indicator_lines:
            return True
        return any(phrase in lower for phrase in self._rules.comment_indicator_phrases)

    def _is_noise_line(self, trimmed: str) -> bool:
        if not trimmed:
            return True
        if trimmed.startswith(_PREAMBLE_PREFIXES):
            return True
        return bool(_SHORT_NUMBER_RE.match(trimmed) or _PUNCTUATION_ONLY_RE.match(trimmed))

    def _is_emoticon_only(self, text: str) -> bool:
        return all(ch.isspace() or ch in self._emoticons for ch in text)

    def _accept_text(self, content: str, state: _ParseState) -> bool:
        rules = self._rules
        key = prefix_key(content, rules.dedup_prefix)
        if key in state.seen:
            return False

        is_numbered = _NUMBERED_RE.match(content) is not None
        has_continuation = any(marker in content for marker in rules.continuation_markers)
        length = len(content)

        if not is_numbered:
            min_length = (
                rules.min_comment_text_length if state.in_comments else rules.min_main_text_length
            )
            if length < min_length or self._is_emoticon_only(content):
                return False

        if not state.in_comments:
            # Interleaved English strings in the main post are UI chrome.
            if not has_korean(content) and not has_continuation:
                return False
            state.main_lines += 1
        elif not (is_numbered or length > rules.long_comment_length or has_continuation):
            return False

        state.seen.add(key)
        return True


_DEFAULT_PARSER = ThreadBlockParser()


def parse_thread_content(markdown: str | None) -> ProcessedThreadContent:
    """Parse scraped Threads Markdown with the default rule tables."""
    return _DEFAULT_PARSER.parse(markdown)
