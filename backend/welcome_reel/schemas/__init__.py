"""Pydantic v2 schemas package."""

from welcome_reel.schemas.credential import CredentialSelectionResult, CredentialStatus
from welcome_reel.schemas.video import (
    AspectRatio,
    GenerateVideoRequest,
    GenerateVideoResponse,
    VideoDefaults,
)

__all__ = [
    "AspectRatio",
    "CredentialSelectionResult",
    "CredentialStatus",
    "GenerateVideoRequest",
    "GenerateVideoResponse",
    "VideoDefaults",
]
