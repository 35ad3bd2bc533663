"""HTTP-level tests for the FastAPI app."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from welcome_reel.main import app
from welcome_reel.services.providers.veo_video import ErrorKind, GenerationError

VIDEO_URL = "https://example.test/video.mp4?alt=media&key=AIzaSyD-k"


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


class TestCredentialsApi:

    def test_status_without_key(self, clean_env, client):
        resp = client.get("/api/credentials/status")
        assert resp.status_code == 200
        assert resp.json() == {"has_credential": False}

    def test_status_with_key(self, clean_env, client):
        clean_env.setenv("GEMINI_API_KEY", "AIzaSyD-real-key-value")
        assert client.get("/api/credentials/status").json() == {"has_credential": True}

    def test_select_without_host_picker(self, clean_env, client):
        resp = client.post("/api/credentials/select")
        body = resp.json()
        assert resp.status_code == 200
        assert body["selection_available"] is False
        assert body["has_credential"] is False
        assert "GEMINI_API_KEY" in body["message"]


class TestVideosApi:

    def test_defaults(self, client):
        body = client.get("/api/videos/defaults").json()
        assert body["script_line"] == "Bienvenidos a Contador 4.0"
        assert body["aspect_ratio"] == "16:9"
        assert body["aspect_ratios"] == ["16:9", "9:16", "1:1", "4:3", "3:4"]

    def test_generate_composes_prompt(self, client):
        with patch("welcome_reel.api.videos.generate_video", AsyncMock(return_value=VIDEO_URL)) as gen:
            resp = client.post("/api/videos/generate", json={
                "prompt": "A robot at a desk.",
                "script_line": "Hello",
                "aspect_ratio": "4:3",
                "reference_image": "data:image/png;base64,aGVsbG8=",
            })

        assert resp.status_code == 200
        body = resp.json()
        assert body["video_url"] == VIDEO_URL
        assert body["aspect_ratio"] == "4:3"
        expected_prompt = (
            'A robot at a desk. The character is saying: "Hello". '
            "He is welcoming the viewer enthusiastically."
        )
        assert body["prompt"] == expected_prompt
        gen.assert_awaited_once()
        assert gen.await_args.args == (expected_prompt,)
        assert gen.await_args.kwargs["reference_image"] == "data:image/png;base64,aGVsbG8="

    @pytest.mark.parametrize("kind,status", [
        (ErrorKind.MISSING_CREDENTIAL, 401),
        (ErrorKind.PROVIDER_REJECTED, 502),
        (ErrorKind.NO_RESULT_RETURNED, 502),
        (ErrorKind.TRANSPORT_OR_UNEXPECTED, 502),
        (ErrorKind.TIMED_OUT, 504),
    ])
    def test_generation_errors_map_to_status(self, client, kind, status):
        failing = AsyncMock(side_effect=GenerationError("boom", kind))
        with patch("welcome_reel.api.videos.generate_video", failing):
            resp = client.post("/api/videos/generate", json={"prompt": "scene"})

        assert resp.status_code == status
        assert resp.json()["detail"] == {"kind": kind.value, "message": "boom"}

    def test_bad_reference_image(self, client):
        failing = AsyncMock(side_effect=ValueError("Reference image is not valid base64 data"))
        with patch("welcome_reel.api.videos.generate_video", failing):
            resp = client.post("/api/videos/generate", json={"prompt": "scene", "reference_image": "%%"})

        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "invalid_reference_image"

    def test_unknown_aspect_ratio_rejected(self, client):
        resp = client.post("/api/videos/generate", json={"prompt": "scene", "aspect_ratio": "21:9"})
        assert resp.status_code == 422

    def test_image_only_request_accepted(self, client):
        with patch("welcome_reel.api.videos.generate_video", AsyncMock(return_value=VIDEO_URL)) as gen:
            resp = client.post("/api/videos/generate", json={
                "reference_image": "data:image/png;base64,aGVsbG8=",
            })

        assert resp.status_code == 200
        assert gen.await_args.args == (
            ' The character is saying: "". He is welcoming the viewer enthusiastically.',
        )

    def test_empty_prompt_without_image_rejected(self, client):
        with patch("welcome_reel.api.videos.generate_video", AsyncMock(return_value=VIDEO_URL)) as gen:
            resp = client.post("/api/videos/generate", json={"prompt": "  "})

        assert resp.status_code == 422
        gen.assert_not_awaited()


class TestMetricsApi:

    def test_generation_metrics(self, client):
        body = client.get("/api/metrics/generation").json()
        assert body["services"][0]["service"] == "video_gen"


def test_health(clean_env, client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["has_credential"] is False
