from __future__ import annotations
"""Video generation API — one request, one Veo job, one playable URL."""

import logging

from fastapi import APIRouter, HTTPException

from welcome_reel.schemas.video import (
    AspectRatio,
    GenerateVideoRequest,
    GenerateVideoResponse,
    VideoDefaults,
)
from welcome_reel.services.prompt_builder import (
    DEFAULT_SCENE_PROMPT,
    DEFAULT_SCRIPT_LINE,
    compose_prompt,
)
from welcome_reel.services.providers.veo_video import ErrorKind, GenerationError
from welcome_reel.services.video_gen import generate_video

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.MISSING_CREDENTIAL: 401,
    ErrorKind.PROVIDER_REJECTED: 502,
    ErrorKind.NO_RESULT_RETURNED: 502,
    ErrorKind.TRANSPORT_OR_UNEXPECTED: 502,
    ErrorKind.TIMED_OUT: 504,
}


@router.get("/defaults", response_model=VideoDefaults)
async def video_defaults() -> VideoDefaults:
    """Prefill values for the generation form."""
    return VideoDefaults(
        prompt=DEFAULT_SCENE_PROMPT,
        script_line=DEFAULT_SCRIPT_LINE,
        aspect_ratio=AspectRatio.LANDSCAPE,
        aspect_ratios=list(AspectRatio),
    )


@router.post("/generate", response_model=GenerateVideoResponse)
async def generate(req: GenerateVideoRequest) -> GenerateVideoResponse:
    """Generate a welcome video. Blocks until Veo finishes the job."""
    full_prompt = compose_prompt(req.prompt, req.script_line)

    try:
        video_url = await generate_video(
            full_prompt,
            reference_image=req.reference_image,
            aspect_ratio=req.aspect_ratio,
        )
    except GenerationError as e:
        raise HTTPException(
            status_code=_ERROR_STATUS[e.kind],
            detail={"kind": e.kind.value, "message": str(e)},
        )
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"kind": "invalid_reference_image", "message": str(e)},
        )

    return GenerateVideoResponse(
        video_url=video_url,
        prompt=full_prompt,
        aspect_ratio=req.aspect_ratio,
    )
