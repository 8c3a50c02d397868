"""Tests covering the FastAPI routes defined in :mod:`backend.main`."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))
from backend.config import ConfigurationError, get_settings
from backend.main import app
from backend.service import FAILURE_MESSAGE, TIMEOUT_MESSAGE, GenerationResult, get_music_service


class StubService:
    """Test double emulating :class:`backend.service.MusicGenerationService`."""

    def __init__(self) -> None:
        self.result = GenerationResult.success("https://cdn.example/song.mp3")
        self.calls: list[str] = []

    def generate(self, prompt: str) -> GenerationResult:
        self.calls.append(prompt)
        return self.result


@pytest.fixture
def client():
    """Yield a :class:`TestClient` backed by a stubbed service."""

    stub = StubService()
    app.dependency_overrides[get_music_service] = lambda: stub

    with TestClient(app) as test_client:
        test_client.app.state.stub_service = stub
        yield test_client

    app.dependency_overrides.clear()
    if hasattr(app.state, "stub_service"):
        delattr(app.state, "stub_service")


def get_stub(client: TestClient) -> StubService:
    return client.app.state.stub_service  # type: ignore[return-value]


def test_healthcheck_reports_backend_settings(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()

    assert payload["status"] == "ok"
    assert payload["musicApi"] == get_settings().music_api_base_url
    assert payload["mode"] == "music"


def test_generate_music_returns_media_uri(client: TestClient) -> None:
    response = client.post("/api/generate-music", json={"prompt": "sunny reggae"})

    assert response.status_code == 200
    assert response.json() == {"music": "https://cdn.example/song.mp3"}
    assert get_stub(client).calls == ["sunny reggae"]


def test_generate_music_omits_missing_media_uri(client: TestClient) -> None:
    get_stub(client).result = GenerationResult.success(None)

    response = client.post("/api/generate-music", json={"prompt": "silence"})

    assert response.status_code == 200
    assert response.json() == {}


@pytest.mark.parametrize("status", ["failed", "error"])
def test_generate_music_reports_generic_failure(client: TestClient, status: str) -> None:
    get_stub(client).result = GenerationResult.failure(status, FAILURE_MESSAGE)

    response = client.post("/api/generate-music", json={"prompt": "broken"})

    assert response.status_code == 500
    assert response.json() == {"error": "AI song generation failed"}


def test_generate_music_reports_timeout(client: TestClient) -> None:
    get_stub(client).result = GenerationResult.failure("timeout", TIMEOUT_MESSAGE)

    response = client.post("/api/generate-music", json={"prompt": "slow"})

    assert response.status_code == 504
    assert response.json() == {"error": "AI song generation timed out"}


def test_generate_music_accepts_empty_prompt(client: TestClient) -> None:
    response = client.post("/api/generate-music", json={"prompt": ""})

    assert response.status_code == 200
    assert get_stub(client).calls == [""]


def test_generate_music_requires_prompt(client: TestClient) -> None:
    response = client.post("/api/generate-music", json={})

    assert response.status_code == 422
    assert any(err["loc"][-1] == "prompt" for err in response.json()["detail"])
    assert get_stub(client).calls == []


def test_startup_fails_without_api_key(monkeypatch) -> None:
    monkeypatch.setenv("SONGSMITH_MUSIC_API_KEY", "")
    get_settings.cache_clear()
    get_music_service.cache_clear()
    try:
        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass
    finally:
        get_settings.cache_clear()
        get_music_service.cache_clear()
