"""Thread content domain models.

Transient values built per scrape: the structured block tree produced by the
block parser, the split view of normalized thread text, and the combined
clip payload handed to prompt assembly or rendering.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


class BlockKind(str, enum.Enum):
    TEXT = "text"
    IMAGE = "image"


class SectionKind(str, enum.Enum):
    MAIN = "main"
    COMMENT = "comment"


@dataclass(frozen=True, slots=True)
class ContentBlock:
    """A single renderable unit: cleaned text or an absolute image URL."""

    kind: BlockKind
    content: str

    def __post_init__(self) -> None:
        if not self.content:
            msg = "Content block cannot be empty"
            raise ValueError(msg)

    @classmethod
    def text(cls, content: str) -> ContentBlock:
        return cls(BlockKind.TEXT, content)

    @classmethod
    def image(cls, url: str) -> ContentBlock:
        return cls(BlockKind.IMAGE, url)

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "content": self.content}


@dataclass(frozen=True, slots=True)
class ThreadSection:
    """An ordered group of blocks belonging to the post or to a comment run."""

    kind: SectionKind
    blocks: tuple[ContentBlock, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "blocks": [block.to_dict() for block in self.blocks]}


@dataclass(frozen=True, slots=True)
class ProcessedThreadContent:
    """Structured view of a scraped thread, in source order."""

    sections: tuple[ThreadSection, ...] = ()

    @property
    def has_comments(self) -> bool:
        return any(section.kind is SectionKind.COMMENT for section in self.sections)

    def iter_blocks(self) -> Iterator[ContentBlock]:
        for section in self.sections:
            yield from section.blocks

    def text_blocks(self) -> list[str]:
        return [b.content for b in self.iter_blocks() if b.kind is BlockKind.TEXT]

    def image_urls(self) -> list[str]:
        return [b.content for b in self.iter_blocks() if b.kind is BlockKind.IMAGE]

    def to_dict(self) -> dict[str, Any]:
        return {
            "sections": [section.to_dict() for section in self.sections],
            "hasComments": self.has_comments,
        }


@dataclass(frozen=True, slots=True)
class ThreadComment:
    id: int
    text: str


@dataclass(frozen=True, slots=True)
class ParsedThread:
    """Normalized thread text split back into body and individual comments."""

    body: str
    comments: tuple[ThreadComment, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "body": self.body,
            "comments": [{"id": c.id, "text": c.text} for c in self.comments],
        }


@dataclass(frozen=True, slots=True)
class ClipContent:
    """Everything the clip pipeline derives from one raw scrape."""

    normalized_text: str
    thread: ProcessedThreadContent
    images: tuple[str, ...] = ()
    comment_count: int = 0
    truncated: bool = field(default=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "normalizedText": self.normalized_text,
            "thread": self.thread.to_dict(),
            "images": list(self.images),
            "commentCount": self.comment_count,
            "truncated": self.truncated,
        }
