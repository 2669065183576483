import pytest
from pydantic import ValidationError

from clipnorm.config import (
    DEFAULT_IMAGE_FILTER_RULES,
    BlockParserRules,
    ContentLimitsConfig,
    ImageFilterRules,
    LineCleanerRules,
    NormalizerRules,
    RuntimeConfig,
    load_config,
)


def test_default_rule_tables():
    assert ".svg" in DEFAULT_IMAGE_FILTER_RULES.blocked_extensions
    assert "s150x150" in DEFAULT_IMAGE_FILTER_RULES.blocked_size_patterns
    assert "Translate" in LineCleanerRules().ui_labels
    assert NormalizerRules().korean_ratio_threshold == 0.3
    assert BlockParserRules().dedup_prefix == 200


def test_rule_tables_are_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_IMAGE_FILTER_RULES.blocked_keywords = ("cat",)  # type: ignore[misc]


def test_image_rules_accept_comma_separated_tokens():
    rules = ImageFilterRules(blocked_keywords="Cat, DOG ,,cat")

    assert rules.blocked_keywords == ("cat", "dog")


def test_invalid_noise_pattern_is_rejected():
    with pytest.raises(ValidationError, match="not a valid regular expression"):
        LineCleanerRules(fragment_noise_patterns=("([unclosed",))


@pytest.mark.parametrize("value", [0, 1, 1.5, -0.2, "abc"])
def test_ratio_thresholds_must_be_exclusive_fraction(value):
    with pytest.raises(ValidationError):
        NormalizerRules(korean_ratio_threshold=value)


def test_negative_lengths_are_rejected():
    with pytest.raises(ValidationError, match="cannot be negative"):
        BlockParserRules(min_comment_text_length=-1)
    with pytest.raises(ValidationError, match="must be positive"):
        BlockParserRules(dedup_prefix=0)
    with pytest.raises(ValidationError, match="must be positive"):
        NormalizerRules(min_comment_length=0)


def test_content_limits_validation():
    assert ContentLimitsConfig().max_text_bytes == 50 * 1024
    assert ContentLimitsConfig(max_text_length_kb="8").max_text_length_kb == 8
    assert ContentLimitsConfig(max_image_candidates="").max_image_candidates == 100
    with pytest.raises(ValidationError, match="between 1 and 1024"):
        ContentLimitsConfig(max_text_length_kb=2048)
    with pytest.raises(ValidationError, match="must be an integer"):
        ContentLimitsConfig(max_text_length_kb="lots")


def test_runtime_config_normalizes_level():
    assert RuntimeConfig(log_level="debug").log_level == "DEBUG"
    assert RuntimeConfig(log_file="   ").log_file is None
    with pytest.raises(ValidationError, match="Invalid log level"):
        RuntimeConfig(log_level="LOUD")


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("CLIPNORM_LOG_LEVEL", "warning")
    monkeypatch.setenv("MAX_TEXT_LENGTH_KB", "16")

    config = load_config()

    assert config.runtime.log_level == "WARNING"
    assert config.content_limits.max_text_length_kb == 16


def test_load_config_defaults(monkeypatch):
    for name in ("CLIPNORM_LOG_LEVEL", "LOG_LEVEL", "CLIPNORM_LOG_FILE", "MAX_TEXT_LENGTH_KB"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.runtime.log_level == "INFO"
    assert config.runtime.log_file is None
    assert config.content_limits.max_text_length_kb == 50


def test_load_config_wraps_validation_errors(monkeypatch):
    monkeypatch.setenv("MAX_TEXT_LENGTH_KB", "0")

    with pytest.raises(RuntimeError, match="Configuration validation failed"):
        load_config()


def test_load_config_overrides_take_precedence(monkeypatch):
    monkeypatch.setenv("MAX_TEXT_LENGTH_KB", "16")

    config = load_config(content_limits={"max_text_length_kb": 4})

    assert config.content_limits.max_text_length_kb == 4


def test_comment_indicator_tables_are_lowercased():
    rules = BlockParserRules(
        comment_indicator_lines="Replies, Answers", comment_indicator_phrases=["Replied"]
    )

    assert rules.comment_indicator_lines == ("replies", "answers")
    assert rules.comment_indicator_phrases == ("replied",)
