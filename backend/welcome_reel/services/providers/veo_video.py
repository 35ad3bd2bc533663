"""Gemini Veo video generation provider.

Submit → poll → resolve against the Veo long-running operation API through
the google-genai SDK. The API key is passed in by the caller; this module
never reads the environment.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from google import genai
from google.genai import types

from welcome_reel.schemas.video import AspectRatio
from welcome_reel.services.credential_gate import is_usable_key
from welcome_reel.services.prompt_builder import (
    PROVIDER_ASPECT_RATIO,
    apply_aspect_ratio_hint,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "veo-3.1-generate-preview"
DEFAULT_RESOLUTION = "720p"
DEFAULT_POLL_INTERVAL = 5.0
REFERENCE_IMAGE_MIME_TYPE = "image/png"

_DATA_URI_PREFIX = re.compile(r"^data:([^;,]+);base64,")


class ErrorKind(str, enum.Enum):
    MISSING_CREDENTIAL = "missing_credential"
    PROVIDER_REJECTED = "provider_rejected"
    NO_RESULT_RETURNED = "no_result_returned"
    TRANSPORT_OR_UNEXPECTED = "transport_or_unexpected"
    TIMED_OUT = "timed_out"


class GenerationError(Exception):
    """Terminal video generation failure. Never retried."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.TRANSPORT_OR_UNEXPECTED):
        super().__init__(message)
        self.kind = kind


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReferenceImage:
    """Raw image bytes plus the MIME type they arrived with."""
    data: bytes
    mime_type: str = REFERENCE_IMAGE_MIME_TYPE

    @classmethod
    def from_base64(cls, value: str) -> ReferenceImage:
        """Build from a data URI or a bare base64 payload.

        The ``data:<mime>;base64,`` prefix is stripped before decoding.
        Raises ValueError if the payload is empty or not base64.
        """
        mime_type = REFERENCE_IMAGE_MIME_TYPE
        payload = value.strip()
        match = _DATA_URI_PREFIX.match(payload)
        if match:
            mime_type = match.group(1)
            payload = payload[match.end():]
        if not payload:
            raise ValueError("Reference image payload is empty")
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Reference image is not valid base64 data: {e}") from e
        return cls(data=data, mime_type=mime_type)


@dataclass(frozen=True)
class GenerationRequest:
    """User input for one video, frozen once built."""
    prompt_text: str
    reference_image: ReferenceImage | None = None
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE


@dataclass(frozen=True)
class VeoReferenceImage:
    image_bytes: bytes
    mime_type: str = REFERENCE_IMAGE_MIME_TYPE
    reference_type: str = "asset"


@dataclass(frozen=True)
class VeoRequestConfig:
    """Every field Veo receives for this workflow, nothing else."""
    number_of_videos: int = 1
    resolution: str = DEFAULT_RESOLUTION
    aspect_ratio: str = PROVIDER_ASPECT_RATIO.value
    reference_images: tuple[VeoReferenceImage, ...] = field(default_factory=tuple)

    def to_sdk(self) -> types.GenerateVideosConfig:
        reference_images = [
            types.VideoGenerationReferenceImage(
                image=types.Image(image_bytes=ref.image_bytes, mime_type=ref.mime_type),
                reference_type=types.VideoGenerationReferenceType(ref.reference_type.upper()),
            )
            for ref in self.reference_images
        ]
        return types.GenerateVideosConfig(
            number_of_videos=self.number_of_videos,
            resolution=self.resolution,
            aspect_ratio=self.aspect_ratio,
            reference_images=reference_images or None,
        )


@dataclass(frozen=True)
class VideoResult:
    uri: str
    access_token: str

    @property
    def playable_url(self) -> str:
        return f"{self.uri}&key={self.access_token}"


# ---------------------------------------------------------------------------
# Request shaping
# ---------------------------------------------------------------------------

def build_request_config(
    request: GenerationRequest,
    resolution: str = DEFAULT_RESOLUTION,
) -> VeoRequestConfig:
    """Fixed 16:9, one video; the reference image is always labelled PNG."""
    refs: tuple[VeoReferenceImage, ...] = ()
    if request.reference_image is not None:
        refs = (VeoReferenceImage(image_bytes=request.reference_image.data),)
    return VeoRequestConfig(resolution=resolution, reference_images=refs)


def build_final_prompt(request: GenerationRequest) -> str:
    return apply_aspect_ratio_hint(request.prompt_text, request.aspect_ratio)


# ---------------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------------

async def generate_video(
    prompt_text: str,
    reference_image: ReferenceImage | str | None = None,
    aspect_ratio: AspectRatio | str = AspectRatio.LANDSCAPE,
    *,
    api_key: str | None,
    model: str = DEFAULT_MODEL,
    resolution: str = DEFAULT_RESOLUTION,
    client: Any | None = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    poll_timeout: float | None = None,
) -> VideoResult:
    """Generate one video via Google Veo and return its playable URL.

    Polls every ``poll_interval`` seconds until the operation is done. With
    ``poll_timeout`` unset the loop has no upper bound.

    Raises GenerationError on every failure, ValueError for an undecodable
    reference image.
    """
    if not is_usable_key(api_key):
        raise GenerationError(
            "API key not found. Please configure GEMINI_API_KEY in environment variables.",
            ErrorKind.MISSING_CREDENTIAL,
        )

    if isinstance(reference_image, str):
        reference_image = ReferenceImage.from_base64(reference_image)

    request = GenerationRequest(
        prompt_text=prompt_text,
        reference_image=reference_image,
        aspect_ratio=AspectRatio(aspect_ratio),
    )
    prompt = build_final_prompt(request)
    config = build_request_config(request, resolution=resolution)

    own_client = client is None
    try:
        if own_client:
            client = genai.Client(api_key=api_key)

        logger.info(
            "Submitting Veo job: model=%s requested_ratio=%s reference_image=%s",
            model, request.aspect_ratio.value, request.reference_image is not None,
        )
        operation = await client.aio.models.generate_videos(
            model=model,
            prompt=prompt,
            config=config.to_sdk(),
        )
        logger.info("Veo operation submitted: %s", getattr(operation, "name", None))

        operation = await _poll_operation(client, operation, poll_interval, poll_timeout)
    except GenerationError:
        raise
    except Exception as e:
        logger.error("Veo request failed: %s", e)
        raise GenerationError(str(e) or type(e).__name__, ErrorKind.TRANSPORT_OR_UNEXPECTED) from e
    finally:
        if own_client and client is not None:
            await client.aio.aclose()

    return _resolve_operation(operation, api_key)


async def _poll_operation(
    client: Any,
    operation: Any,
    poll_interval: float,
    poll_timeout: float | None,
) -> Any:
    """Re-fetch the operation until it reports done or carries an error."""
    elapsed = 0.0
    while not operation.done and not operation.error:
        if poll_timeout is not None and elapsed >= poll_timeout:
            raise GenerationError(
                f"Veo timed out after {poll_timeout:g}s",
                ErrorKind.TIMED_OUT,
            )
        await asyncio.sleep(poll_interval)
        elapsed += poll_interval
        operation = await client.aio.operations.get(operation)
        logger.debug(
            "Veo operation %s: polling (%.0fs elapsed)",
            getattr(operation, "name", None), elapsed,
        )
    return operation


def _resolve_operation(operation: Any, api_key: str) -> VideoResult:
    if operation.error:
        message = _error_message(operation.error) or "Video generation failed"
        logger.warning("Veo rejected the job: %s", message)
        raise GenerationError(message, ErrorKind.PROVIDER_REJECTED)

    uri = _first_video_uri(operation)
    if not uri:
        raise GenerationError("No video URI returned", ErrorKind.NO_RESULT_RETURNED)

    logger.info("Veo video ready: %s", uri)
    return VideoResult(uri=uri, access_token=api_key)


def _error_message(error: Any) -> str | None:
    if isinstance(error, dict):
        return error.get("message")
    return getattr(error, "message", None) or str(error)


def _first_video_uri(operation: Any) -> str | None:
    response = getattr(operation, "response", None)
    videos = getattr(response, "generated_videos", None) if response else None
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) if video else None
