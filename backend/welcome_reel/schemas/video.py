from __future__ import annotations
"""Pydantic v2 schemas for video generation."""

import enum

from pydantic import BaseModel, Field, model_validator


class AspectRatio(str, enum.Enum):
    """Aspect ratios a viewer can ask for."""

    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    SQUARE = "1:1"
    CLASSIC = "4:3"
    CLASSIC_PORTRAIT = "3:4"


class GenerateVideoRequest(BaseModel):
    """Schema for a single video generation request from the UI.

    Needs a prompt or a reference image; an image-only request is valid.
    """

    prompt: str = ""
    script_line: str = ""
    reference_image: str | None = Field(
        default=None,
        description="Data URI (data:image/...;base64,...) or bare base64 payload",
    )
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE

    @model_validator(mode="after")
    def _require_prompt_or_image(self) -> GenerateVideoRequest:
        if not self.prompt.strip() and not self.reference_image:
            raise ValueError("A prompt or a reference image is required")
        return self


class GenerateVideoResponse(BaseModel):
    """Schema returned once the video is ready to play."""

    video_url: str
    prompt: str
    aspect_ratio: AspectRatio


class VideoDefaults(BaseModel):
    """Prefill values for the generation form."""

    prompt: str
    script_line: str
    aspect_ratio: AspectRatio
    aspect_ratios: list[AspectRatio]
