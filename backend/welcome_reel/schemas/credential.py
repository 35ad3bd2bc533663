from __future__ import annotations
"""Pydantic v2 schemas for the API key gate."""

from pydantic import BaseModel


class CredentialStatus(BaseModel):
    has_credential: bool


class CredentialSelectionResult(BaseModel):
    """Outcome of asking the host to open its key picker."""

    selection_available: bool
    has_credential: bool
    message: str | None = None
