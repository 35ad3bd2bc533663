from __future__ import annotations
"""Metrics API — generation service usage statistics."""

from fastapi import APIRouter

from welcome_reel.services.video_gen import get_video_service

router = APIRouter()


@router.get("/generation")
async def generation_metrics():
    """Return usage statistics for the generation services."""
    return {"services": [get_video_service().get_metrics()]}
