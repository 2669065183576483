"""Rule tables for the scraped-content normalization pipeline.

Every table is a frozen model so a single default instance can be shared
across calls and threads. Tests and callers substitute their own tables by
constructing a new instance (or ``model_copy(update=...)``) and passing it to
the component constructor.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ._validators import _ensure_ratio, _ensure_regex_list, _parse_token_tuple

DEFAULT_BLOCKED_SIZE_PATTERNS: tuple[str, ...] = (
    "s150x150",
    "s96x96",
    "s64x64",
    "s32x32",
    "s48x48",
    "s16x16",
    "p50x50",
    "p150x150",
)

DEFAULT_BLOCKED_KEYWORDS: tuple[str, ...] = (
    "sprite",
    "icon",
    "favicon",
    "emoji",
    "reaction",
    "badge",
    "logo",
    "profile",
    "avatar",
    "user",
    "author",
)

DEFAULT_UI_LABELS: tuple[str, ...] = (
    "Translate",
    "See translation",
    "Log in",
    "Sign up",
    "Follow",
    "Like",
    "Reply",
    "Share",
    "Repost",
    "번역하기",
    "번역 보기",
    "로그인",
    "가입하기",
    "팔로우",
    "좋아요",
    "답글",
    "답글 달기",
    "공유하기",
    "리포스트",
)

DEFAULT_ENGAGEMENT_WORDS: tuple[str, ...] = (
    "like",
    "likes",
    "reply",
    "replies",
    "repost",
    "reposts",
    "view",
    "views",
    "share",
    "shares",
    "좋아요",
    "답글",
    "리포스트",
    "조회",
)

# Markdown-only chrome seen in rendered Threads pages (usernames, relative
# timestamps, footer links, source preamble).
DEFAULT_FRAGMENT_NOISE_PATTERNS: tuple[str, ...] = (
    r"Thread\s*={3,}\s*[\d.]+K?\s*views?",
    r"Thread\s*={3,}",
    r"^[a-z_]+\s*$",
    r"^(?:AI|NBA) Threads\s*$",
    r"^\d+[dhm]\s*$",
    r"to see more replies\.",
    r"View on Threads",
    r"\bLog in\b",
    r"^(?:Reply|Post)\s*$",
    r"\*\s*(?:Threads Terms|Privacy Policy|Cookies Policy|Report a problem)",
    r"^Title:.*$",
    r"^URL Source:.*$",
    r"Markdown Content:",
    # bare domain paths ("electrek.co/..."); full URLs are left to the URL rule
    r"(?<!/)\b[a-z]+\.[a-z]{2,}/[\w\-…]+",
)

# Each marker swallows itself and everything after it.
DEFAULT_TAIL_NOISE_PATTERNS: tuple[str, ...] = (
    r"Report a problem",
    r"Log in to see more replies",
    r"Related threads",
    r"\* © \d{4} \*",
    r"View all \d+ replies",
)

DEFAULT_EMOTICON_CHARS = "ㅋㅎㄷ!?😊😂🤣😭😍🥰👍👏🔥💯😲🙂"


class ImageFilterRules(BaseModel):
    """Blocklists applied to candidate image URLs."""

    model_config = ConfigDict(frozen=True)

    blocked_size_patterns: tuple[str, ...] = Field(default=DEFAULT_BLOCKED_SIZE_PATTERNS)
    blocked_keywords: tuple[str, ...] = Field(default=DEFAULT_BLOCKED_KEYWORDS)
    blocked_extensions: tuple[str, ...] = Field(default=(".svg", ".ico", ".gif"))

    @field_validator(
        "blocked_size_patterns", "blocked_keywords", "blocked_extensions", mode="before"
    )
    @classmethod
    def _lowercase_tokens(cls, value: Any) -> tuple[str, ...]:
        return _parse_token_tuple(value, lowercase=True)


class LineCleanerRules(BaseModel):
    """Vocabulary shared by every consumer of the line cleaner."""

    model_config = ConfigDict(frozen=True)

    ui_labels: tuple[str, ...] = Field(default=DEFAULT_UI_LABELS)
    engagement_words: tuple[str, ...] = Field(default=DEFAULT_ENGAGEMENT_WORDS)
    fragment_noise_patterns: tuple[str, ...] = Field(default=DEFAULT_FRAGMENT_NOISE_PATTERNS)

    @field_validator("ui_labels", "engagement_words", mode="before")
    @classmethod
    def _parse_vocabulary(cls, value: Any) -> tuple[str, ...]:
        return _parse_token_tuple(value)

    @field_validator("fragment_noise_patterns")
    @classmethod
    def _validate_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _ensure_regex_list(value, name="Fragment noise")


class NormalizerRules(BaseModel):
    """Thresholds and tail markers for the thread text normalizer."""

    model_config = ConfigDict(frozen=True)

    tail_noise_patterns: tuple[str, ...] = Field(default=DEFAULT_TAIL_NOISE_PATTERNS)
    korean_ratio_threshold: float = 0.3
    english_ratio_threshold: float = 0.7
    min_comment_length: int = 10
    english_filter_min_length: int = 100
    comment_dedup_prefix: int = 100

    @field_validator("tail_noise_patterns")
    @classmethod
    def _validate_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _ensure_regex_list(value, name="Tail noise")

    @field_validator("korean_ratio_threshold", "english_ratio_threshold", mode="before")
    @classmethod
    def _validate_ratio(cls, value: Any, info: ValidationInfo) -> float:
        return _ensure_ratio(value, name=info.field_name.replace("_", " ").capitalize())

    @field_validator(
        "min_comment_length", "english_filter_min_length", "comment_dedup_prefix"
    )
    @classmethod
    def _validate_positive(cls, value: int, info: ValidationInfo) -> int:
        if value <= 0:
            msg = f"{info.field_name.replace('_', ' ').capitalize()} must be positive"
            raise ValueError(msg)
        return value


class BlockParserRules(BaseModel):
    """Dedup, length and section-detection rules for the block parser."""

    model_config = ConfigDict(frozen=True)

    dedup_prefix: int = 200
    min_main_text_length: int = 10
    min_comment_text_length: int = 30
    long_comment_length: int = 100
    continuation_markers: tuple[str, ...] = Field(default=("이어서", "👇"))
    emoticon_chars: str = DEFAULT_EMOTICON_CHARS
    comment_indicator_phrases: tuple[str, ...] = Field(
        default=("replied", "reply to", "commented")
    )
    comment_indicator_lines: tuple[str, ...] = Field(default=("replies",))

    @field_validator("continuation_markers", mode="before")
    @classmethod
    def _parse_markers(cls, value: Any) -> tuple[str, ...]:
        return _parse_token_tuple(value)

    @field_validator("comment_indicator_phrases", "comment_indicator_lines", mode="before")
    @classmethod
    def _parse_indicators(cls, value: Any) -> tuple[str, ...]:
        return _parse_token_tuple(value, lowercase=True)

    @field_validator(
        "dedup_prefix", "min_main_text_length", "min_comment_text_length", "long_comment_length"
    )
    @classmethod
    def _validate_non_negative(cls, value: int, info: ValidationInfo) -> int:
        if value < 0:
            msg = f"{info.field_name.replace('_', ' ').capitalize()} cannot be negative"
            raise ValueError(msg)
        if info.field_name == "dedup_prefix" and value == 0:
            msg = "Dedup prefix must be positive"
            raise ValueError(msg)
        return value


DEFAULT_IMAGE_FILTER_RULES = ImageFilterRules()
DEFAULT_LINE_CLEANER_RULES = LineCleanerRules()
DEFAULT_NORMALIZER_RULES = NormalizerRules()
DEFAULT_BLOCK_PARSER_RULES = BlockParserRules()
