"""Clip content processing facade.

Runs the two independent consumers of a raw scrape (the flat text
normalizer and the structured block parser) and merges image candidates into
the single filtered list attached to the stored clip.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from clipnorm.config.content import ContentLimitsConfig
from clipnorm.core.block_parser import ThreadBlockParser
from clipnorm.core.image_filter import ImageURLFilter, extract_markdown_images, merge_image_lists
from clipnorm.core.logging_utils import truncate_log_content
from clipnorm.core.threads_normalizer import ThreadsTextNormalizer, extract_comment_count
from clipnorm.domain.models.thread_content import ClipContent

logger = logging.getLogger(__name__)


class ClipContentProcessor:
    def __init__(
        self,
        *,
        limits: ContentLimitsConfig | None = None,
        normalizer: ThreadsTextNormalizer | None = None,
        parser: ThreadBlockParser | None = None,
        image_filter: ImageURLFilter | None = None,
    ) -> None:
        self._limits = limits or ContentLimitsConfig()
        self._normalizer = normalizer or ThreadsTextNormalizer()
        self._parser = parser or ThreadBlockParser()
        self._image_filter = image_filter or ImageURLFilter()

    def bound_input(self, raw: str | None) -> tuple[str, bool]:
        """Cap *raw* to the configured size in UTF-8 bytes.

        Returns the (possibly shortened) text and whether it was truncated.
        A multi-byte character split by the cap is dropped.
        """
        if not raw:
            return "", False
        encoded = raw.encode("utf-8")
        limit = self._limits.max_text_bytes
        if len(encoded) <= limit:
            return raw, False
        return encoded[:limit].decode("utf-8", errors="ignore"), True

    def process(
        self, raw: str | None, image_urls: Iterable[str] | None = None
    ) -> ClipContent:
        text, truncated = self.bound_input(raw)
        if truncated:
            logger.info(
                "clip_content_truncated",
                extra={
                    "limit_bytes": self._limits.max_text_bytes,
                    "original_chars": len(raw or ""),
                },
            )

        normalized = self._normalizer.normalize(text)
        thread = self._parser.parse(text)
        images = merge_image_lists(
            extract_markdown_images(text, self._image_filter),
            image_urls,
            image_filter=self._image_filter,
        )[: self._limits.max_image_candidates]
        content = ClipContent(
            normalized_text=normalized,
            thread=thread,
            images=tuple(images),
            comment_count=extract_comment_count(text),
            truncated=truncated,
        )

        logger.debug(
            "clip_content_processed",
            extra={
                "normalized_chars": len(normalized),
                "sections": len(thread.sections),
                "has_comments": thread.has_comments,
                "images": len(images),
                "preview": truncate_log_content(normalized, 200),
            },
        )
        return content
