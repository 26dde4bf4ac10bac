# models.py
"""Data types shared by the generation modules, the Streamlit page and the CLI."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON (the shape the remote schema declares)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoIdea(_CamelModel):
    title: str = Field(description="A catchy, SEO-friendly, and highly clickable video title (under 70 characters).")
    hook: str = Field(
        description="A powerful opening sentence (the first 10-15 seconds) to grab the viewer's attention "
        "immediately and prevent them from skipping."
    )
    description: str = Field(
        description="A brief, engaging video description for YouTube, optimized with relevant keywords "
        "to improve search visibility."
    )
    script_outline: list[str] = Field(
        description="A bulleted list of 5-7 key talking points or scenes for the video script, "
        "structured for maximum viewer retention."
    )
    target_audience: str = Field(
        description="A specific description of the ideal viewer for this video, including their interests and pain points."
    )
    thumbnail_suggestion: str = Field(
        description="A vivid, detailed description of a high-click-through-rate (CTR) thumbnail image. "
        "Focus on emotion, clarity, and visual intrigue."
    )


class IdeasResponse(_CamelModel):
    video_ideas: list[VideoIdea] = Field(description="A list of 3 unique and compelling video ideas.")


class ScriptScene(_CamelModel):
    scene: int = Field(description="Scene number, which should always be 1.")
    visual_description: str = Field(description="A detailed description of the visuals for this single scene.")
    voiceover: str = Field(description="The exact, concise voiceover or dialogue for this scene.")


class GeneratedScript(_CamelModel):
    title: str = Field(description="The original video title.")
    script: list[ScriptScene] = Field(
        description="A list of scenes for the video. For this task, it must contain exactly one scene."
    )


def format_script(script: GeneratedScript) -> str:
    """Plain-text version of a script, used for copy/paste and the CLI output."""
    return "\n\n".join(
        f"Scene {scene.scene}\nVisual: {scene.visual_description}\nVoiceover: {scene.voiceover}"
        for scene in script.script
    )


@dataclass
class VideoInfo:
    duration: float
    size: tuple[int, int]
    has_audio: bool


@dataclass
class IdeaCard:
    """UI state of one idea card. Lives in st.session_state only."""

    idea: VideoIdea
    generated_script: GeneratedScript | None = None
    thumbnail_image: bytes | None = None  # JPEG
    is_generating: bool = False
    is_generating_video: bool = False
    video_generation_progress: str | None = None
    video_path: str | None = None
    video_info: VideoInfo | None = None

    @property
    def has_generated_content(self) -> bool:
        return self.generated_script is not None and self.thumbnail_image is not None

    def reset_video_state(self) -> None:
        self.is_generating_video = False
        self.video_generation_progress = None


# =============================================================================
# Exceptions
# =============================================================================


class GenerationError(Exception):
    """Base exception for anything the remote AI service failed to produce."""

    pass


class MissingApiKeyError(GenerationError):
    pass


class IdeaGenerationError(GenerationError):
    pass


class IdeaFormatError(IdeaGenerationError):
    """The model answered, but not with a usable list of ideas."""

    pass


class ScriptGenerationError(GenerationError):
    pass


class ThumbnailGenerationError(GenerationError):
    pass


class VideoGenerationError(GenerationError):
    pass


class QuotaExceededError(VideoGenerationError):
    pass


class NoVideoProducedError(VideoGenerationError):
    """The job finished, but without a downloadable video."""

    pass


class VideoDownloadError(GenerationError):
    pass
