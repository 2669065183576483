"""Environment-driven settings for clipnorm.

Flat environment variables (``CLIPNORM_LOG_LEVEL``, ``MAX_TEXT_LENGTH_KB``,
...) are mapped onto nested frozen models through each field's
``validation_alias``. Rule tables are not environment-driven; callers pass
them to components directly.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, SettingsConfigDict

from .content import ContentLimitsConfig

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RuntimeConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    log_level: str = Field(
        default="INFO", validation_alias=AliasChoices("CLIPNORM_LOG_LEVEL", "LOG_LEVEL")
    )
    log_file: str | None = Field(default=None, validation_alias="CLIPNORM_LOG_FILE")

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            msg = f"Invalid log level: {value!r} (expected one of {', '.join(_LOG_LEVELS)})"
            raise ValueError(msg)
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Any) -> str | None:
        path = str(value).strip() if value is not None else ""
        if "\x00" in path:
            msg = "Log file path must not contain NUL bytes"
            raise ValueError(msg)
        return path or None


@dataclass(frozen=True)
class AppConfig:
    runtime: RuntimeConfig
    content_limits: ContentLimitsConfig


def _env_names(field: FieldInfo) -> Iterator[str]:
    alias = field.validation_alias
    if isinstance(alias, AliasChoices):
        yield from (choice for choice in alias.choices if isinstance(choice, str))
    elif isinstance(alias, str):
        yield alias
    if field.alias:
        yield field.alias


def _collect_nested(model: type[BaseModel], source: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the values for *model*'s fields out of a flat mapping."""
    values: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        for env_name in _env_names(field):
            if env_name in source:
                values[name] = source[env_name]
                break
    return values


class Settings(BaseSettings):
    """Pipeline settings loaded from the environment and an optional ``.env``."""

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    content_limits: ContentLimitsConfig = Field(default_factory=ContentLimitsConfig)

    @model_validator(mode="before")
    @classmethod
    def _build_nested_from_env(cls, data: Any) -> Any:
        """Fill nested sections from flat variables; explicit arguments win."""
        if not isinstance(data, dict):
            return data

        source = {**os.environ, **data}
        result = dict(data)
        for name, field in cls.model_fields.items():
            model = field.annotation
            if not (isinstance(model, type) and issubclass(model, BaseModel)):
                continue
            explicit = result.get(name)
            from_env = _collect_nested(model, source)
            if not from_env or isinstance(explicit, BaseModel):
                continue
            result[name] = {**from_env, **explicit} if isinstance(explicit, dict) else from_env
        return result

    def as_app_config(self) -> AppConfig:
        return AppConfig(runtime=self.runtime, content_limits=self.content_limits)


def load_config(**overrides: Any) -> AppConfig:
    """Load configuration from the environment and ``.env``.

    Keyword arguments override environment values (flat names such as
    ``MAX_TEXT_LENGTH_KB`` or nested section dicts).

    Raises:
        RuntimeError: If configuration validation fails.
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        msg = f"Configuration validation failed: {exc}"
        raise RuntimeError(msg) from exc

    logger.debug(
        "config_loaded",
        extra={
            "log_level": settings.runtime.log_level,
            "max_text_length_kb": settings.content_limits.max_text_length_kb,
            "max_image_candidates": settings.content_limits.max_image_candidates,
        },
    )
    return settings.as_app_config()
