"""API key gate endpoints — let the UI check for and request a key."""

from __future__ import annotations

from fastapi import APIRouter

from welcome_reel.schemas.credential import CredentialSelectionResult, CredentialStatus
from welcome_reel.services.credential_gate import get_credential_gate

router = APIRouter()


@router.get("/status", response_model=CredentialStatus)
async def credential_status() -> CredentialStatus:
    """Pre-check before generation: is a usable API key available?"""
    gate = get_credential_gate()
    return CredentialStatus(has_credential=await gate.has_credential())


@router.post("/select", response_model=CredentialSelectionResult)
async def select_credential() -> CredentialSelectionResult:
    """Open the host key picker, then re-check the key."""
    gate = get_credential_gate()
    available = await gate.request_credential_selection()
    message = None
    if not available:
        message = (
            "API key selection is not available here. "
            "Configure GEMINI_API_KEY in environment variables."
        )
    return CredentialSelectionResult(
        selection_available=available,
        has_credential=await gate.has_credential(),
        message=message,
    )
