from __future__ import annotations

from .content import ContentLimitsConfig
from .rules import (
    DEFAULT_BLOCK_PARSER_RULES,
    DEFAULT_IMAGE_FILTER_RULES,
    DEFAULT_LINE_CLEANER_RULES,
    DEFAULT_NORMALIZER_RULES,
    BlockParserRules,
    ImageFilterRules,
    LineCleanerRules,
    NormalizerRules,
)
from .settings import AppConfig, RuntimeConfig, Settings, load_config

__all__ = [
    "DEFAULT_BLOCK_PARSER_RULES",
    "DEFAULT_IMAGE_FILTER_RULES",
    "DEFAULT_LINE_CLEANER_RULES",
    "DEFAULT_NORMALIZER_RULES",
    "AppConfig",
    "BlockParserRules",
    "ContentLimitsConfig",
    "ImageFilterRules",
    "LineCleanerRules",
    "NormalizerRules",
    "RuntimeConfig",
    "Settings",
    "load_config",
]
