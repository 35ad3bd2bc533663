"""Pytest configuration helpers.

This conftest puts `backend/` on `sys.path` so tests can import the
`welcome_reel` package regardless of how pytest is invoked, and provides
a fake Veo client so no test touches the network.
"""
import os
import sys
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "backend"))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

PROVIDER_URI = "https://generativelanguage.googleapis.com/v1beta/files/abc:download?alt=media"


def make_operation(done=True, uri=PROVIDER_URI, error=None, videos=None, name="models/veo/operations/op-1"):
    """Build an object shaped like google.genai's GenerateVideosOperation."""
    if videos is None:
        videos = [SimpleNamespace(video=SimpleNamespace(uri=uri))] if uri else []
    response = SimpleNamespace(generated_videos=videos) if done and not error else None
    return SimpleNamespace(name=name, done=done, error=error, response=response)


def make_client(submitted, *polled):
    """Fake genai.Client: ``submitted`` comes back from generate_videos,
    each poll returns the next of ``polled``."""
    return SimpleNamespace(
        aio=SimpleNamespace(
            models=SimpleNamespace(generate_videos=AsyncMock(return_value=submitted)),
            operations=SimpleNamespace(get=AsyncMock(side_effect=list(polled))),
            aclose=AsyncMock(),
        )
    )


@pytest.fixture
def fake_sleep(monkeypatch):
    """Replace asyncio.sleep so poll loops finish instantly; records each wait."""
    import asyncio

    sleep = AsyncMock()
    monkeypatch.setattr(asyncio, "sleep", sleep)
    return sleep


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any API key the developer machine may export."""
    for name in ("GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
