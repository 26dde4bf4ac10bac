"""Shared test fixtures.

All remote services are replaced by MagicMock fakes; no test touches the network.
"""

from __future__ import annotations

import io
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from PIL import Image

import settings
from models import GeneratedScript, IdeaCard, ScriptScene, VideoIdea

CONFIG_KEYS = (
    "GOOGLE_API_KEY",
    "API_KEY",
    "GEMINI_TEXT_MODEL",
    "IMAGEN_MODEL",
    "VEO_MODEL",
    "FAL_IMAGE_MODEL",
    "THUMBNAIL_PROVIDER",
    "VIDEO_POLL_INTERVAL",
    "VIDEO_POLL_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """No secrets.toml and no inherited environment configuration."""
    monkeypatch.setattr(settings.st, "secrets", {})
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")


@pytest.fixture
def sample_idea() -> VideoIdea:
    return VideoIdea(
        title="I Taught My Baby to Speedrun Mario",
        hook="What if your toddler beat your personal best?",
        description="A tiny gamer takes on a retro classic.",
        script_outline=["Intro", "Setup", "The run", "Reaction", "Call to action"],
        target_audience="Parents who grew up gaming",
        thumbnail_suggestion="A shocked baby holding a retro controller, neon glow",
    )


@pytest.fixture
def sample_script() -> GeneratedScript:
    return GeneratedScript(
        title="I Taught My Baby to Speedrun Mario",
        script=[
            ScriptScene(
                scene=1,
                visual_description="A baby in a gaming chair slams a controller button.",
                voiceover="New world record, and I'm not even two!",
            )
        ],
    )


@pytest.fixture
def ideas_payload(sample_idea) -> str:
    """JSON the text model returns for an ideas request (camelCase keys)."""
    return json.dumps({"videoIdeas": [sample_idea.model_dump(by_alias=True)] * 3})


@pytest.fixture
def script_payload(sample_script) -> str:
    return json.dumps(sample_script.model_dump(by_alias=True))


@pytest.fixture
def png_bytes() -> bytes:
    """A square PNG, so normalisation has to crop it."""
    out = io.BytesIO()
    Image.new("RGBA", (512, 512), (200, 30, 30, 255)).save(out, format="PNG")
    return out.getvalue()


@pytest.fixture
def mock_client() -> MagicMock:
    """Fake genai.Client. Configure the return values per test."""
    return MagicMock()


@pytest.fixture
def make_response():
    """Factory for generate_content responses."""
    return lambda text: SimpleNamespace(text=text)


@pytest.fixture
def make_operation():
    """Factory for GenerateVideosOperation stand-ins."""

    def _make(done, uri=None, error=None, name="operations/test-op"):
        response = None
        if uri is not None:
            response = SimpleNamespace(generated_videos=[SimpleNamespace(video=SimpleNamespace(uri=uri))])
        return SimpleNamespace(name=name, done=done, error=error, response=response)

    return _make


@pytest.fixture
def idea_card(sample_idea) -> IdeaCard:
    return IdeaCard(idea=sample_idea)
