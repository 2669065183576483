"""Filtering of candidate clip images.

Drops avatars, icons, UI chrome, tiny CDN renditions and unsupported formats
from an extracted image list while keeping the surviving URLs in their
original relative order.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from clipnorm.config.rules import DEFAULT_IMAGE_FILTER_RULES, ImageFilterRules
from clipnorm.core.text_utils import dedupe_preserving_order

logger = logging.getLogger(__name__)

_MARKDOWN_IMAGE_RE = re.compile(r"!\[.*?\]\((.*?)\)")


class ImageURLFilter:
    """Stateless image URL filter driven by an ``ImageFilterRules`` table."""

    def __init__(self, rules: ImageFilterRules | None = None) -> None:
        self._rules = rules or DEFAULT_IMAGE_FILTER_RULES

    @property
    def rules(self) -> ImageFilterRules:
        return self._rules

    def is_allowed(self, url: str) -> bool:
        if not url or not isinstance(url, str):
            return False

        # CDNs sometimes encode sizes in the query string, so blocklists
        # look at the full URL; the extension check ignores the query.
        lower_raw = url.lower()
        lower_path = lower_raw.split("?", 1)[0]

        if not lower_raw.startswith("http"):
            return False
        if lower_path.endswith(self._rules.blocked_extensions):
            return False
        if any(pattern in lower_raw for pattern in self._rules.blocked_size_patterns):
            return False
        return not any(keyword in lower_raw for keyword in self._rules.blocked_keywords)

    def filter(self, urls: Iterable[str] | None) -> list[str]:
        if not urls:
            return []
        unique = dedupe_preserving_order(urls)
        kept = [url for url in unique if self.is_allowed(url)]
        logger.debug(
            "clip_images_filtered",
            extra={"candidates": len(unique), "kept": len(kept)},
        )
        return kept


_DEFAULT_FILTER = ImageURLFilter()


def filter_clip_images(
    urls: Iterable[str] | None, rules: ImageFilterRules | None = None
) -> list[str]:
    """Filter out profile pictures, icons, UI elements and small thumbnails."""
    image_filter = ImageURLFilter(rules) if rules is not None else _DEFAULT_FILTER
    return image_filter.filter(urls)


def extract_markdown_images(
    markdown: str | None, image_filter: ImageURLFilter | None = None
) -> list[str]:
    """Collect ``![alt](url)`` targets from Markdown and filter them."""
    if not markdown:
        return []
    candidates = [
        match.strip()
        for match in _MARKDOWN_IMAGE_RE.findall(markdown)
        if match.strip().startswith("http")
    ]
    return (image_filter or _DEFAULT_FILTER).filter(candidates)


def merge_image_lists(
    *lists: Iterable[str] | None, image_filter: ImageURLFilter | None = None
) -> list[str]:
    """Merge candidate lists in argument order into one filtered image list."""
    merged: list[str] = []
    for urls in lists:
        if urls:
            merged.extend(urls)
    return (image_filter or _DEFAULT_FILTER).filter(merged)
