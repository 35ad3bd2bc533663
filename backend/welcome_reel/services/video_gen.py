from __future__ import annotations
"""Video generation service — Credential Gate + Gemini Veo workflow.

1. Resolve the API key through the CredentialGate
2. Hand it to the Veo provider (submit → poll → resolve)
3. Return the playable URL

Extends BaseGenService for call metrics; there is no retry and no fallback.
"""

import logging
from typing import Any

from welcome_reel.config import Settings, get_settings
from welcome_reel.schemas.video import AspectRatio
from welcome_reel.services.base_gen_service import BaseGenService
from welcome_reel.services.credential_gate import CredentialGate, get_credential_gate
from welcome_reel.services.providers import veo_video
from welcome_reel.services.providers.veo_video import ReferenceImage, VideoResult

logger = logging.getLogger(__name__)


class VideoGenService(BaseGenService[VideoResult]):
    """Video generation service wrapping the Gemini Veo provider."""

    service_name = "video_gen"

    def __init__(
        self,
        gate: CredentialGate | None = None,
        settings: Settings | None = None,
        client: Any | None = None,
    ) -> None:
        super().__init__()
        self.gate = gate or get_credential_gate()
        self.settings = settings or get_settings()
        self.client = client

    async def _generate(self, **kwargs: Any) -> VideoResult:
        api_key = self.gate.resolve_api_key()
        if api_key is None:
            logger.warning("video_gen: no usable API key, request will be refused")
        return await veo_video.generate_video(
            kwargs["prompt_text"],
            kwargs.get("reference_image"),
            kwargs.get("aspect_ratio", AspectRatio.LANDSCAPE),
            api_key=api_key,
            model=self.settings.VEO_MODEL,
            resolution=self.settings.VEO_RESOLUTION,
            client=self.client,
            poll_interval=self.settings.VEO_POLL_INTERVAL,
            poll_timeout=self.settings.VEO_POLL_TIMEOUT,
        )


# Module-level singleton for metrics aggregation
_video_service = VideoGenService()


def get_video_service() -> VideoGenService:
    """Return the singleton VideoGenService."""
    return _video_service


async def generate_video(
    prompt_text: str,
    reference_image: ReferenceImage | str | None = None,
    aspect_ratio: AspectRatio | str = AspectRatio.LANDSCAPE,
) -> str:
    """Public API — returns ``<uri>&key=<credential>`` for the viewer."""
    result = await _video_service.execute(
        prompt_text=prompt_text,
        reference_image=reference_image,
        aspect_ratio=aspect_ratio,
    )
    return result.data.playable_url
