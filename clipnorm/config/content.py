from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ._validators import _ensure_bounded_int

_BOUNDS: dict[str, tuple[int, int, int]] = {
    # field: (default, minimum, maximum)
    "max_text_length_kb": (50, 1, 1024),
    "max_image_candidates": (100, 1, 1000),
}


class ContentLimitsConfig(BaseModel):
    """Size caps applied to a raw scrape before it enters the pipeline."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    max_text_length_kb: int = Field(
        default=50,
        validation_alias="MAX_TEXT_LENGTH_KB",
        description="Largest scrape accepted, in kilobytes of UTF-8",
    )
    max_image_candidates: int = Field(
        default=100,
        validation_alias="MAX_IMAGE_CANDIDATES",
        description="Largest number of filtered images attached to a clip",
    )

    @field_validator("max_text_length_kb", "max_image_candidates", mode="before")
    @classmethod
    def _validate_bounds(cls, value: Any, info: ValidationInfo) -> int:
        default, minimum, maximum = _BOUNDS[info.field_name]
        name = info.field_name.replace("_", " ").capitalize()
        return _ensure_bounded_int(
            value, name=name, default=default, minimum=minimum, maximum=maximum
        )

    @property
    def max_text_bytes(self) -> int:
        return self.max_text_length_kb * 1024
