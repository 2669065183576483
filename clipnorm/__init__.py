"""Scraped-content normalization for clip saving.

Cleans noisy social-feed scrapes into prompt-ready text, a structured block
tree, and a filtered image list.
"""

from __future__ import annotations

from clipnorm.core.block_parser import ThreadBlockParser, parse_thread_content
from clipnorm.core.image_filter import (
    ImageURLFilter,
    extract_markdown_images,
    filter_clip_images,
    merge_image_lists,
)
from clipnorm.core.line_cleaner import LineCleaner
from clipnorm.core.pipeline import ClipContentProcessor
from clipnorm.core.threads_normalizer import (
    COMMENT_DIVIDER_TOKEN,
    COMMENTS_SECTION_TOKEN,
    ThreadsTextNormalizer,
    extract_comment_count,
    normalize_threads_text,
    split_normalized_text,
)
from clipnorm.domain.models.thread_content import (
    BlockKind,
    ClipContent,
    ContentBlock,
    ParsedThread,
    ProcessedThreadContent,
    SectionKind,
    ThreadComment,
    ThreadSection,
)

__version__ = "0.1.0"

__all__ = [
    "COMMENTS_SECTION_TOKEN",
    "COMMENT_DIVIDER_TOKEN",
    "BlockKind",
    "ClipContent",
    "ClipContentProcessor",
    "ContentBlock",
    "ImageURLFilter",
    "LineCleaner",
    "ParsedThread",
    "ProcessedThreadContent",
    "SectionKind",
    "ThreadBlockParser",
    "ThreadComment",
    "ThreadSection",
    "ThreadsTextNormalizer",
    "extract_comment_count",
    "extract_markdown_images",
    "filter_clip_images",
    "merge_image_lists",
    "normalize_threads_text",
    "parse_thread_content",
    "split_normalized_text",
]
