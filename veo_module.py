# veo_module.py
import itertools
import os
import tempfile
import time
from pathlib import Path

import requests
from google.genai import types

import settings
from models import NoVideoProducedError, QuotaExceededError, VideoDownloadError, VideoGenerationError

LANGUAGES = ["English", "Telugu"]

AVATARS = {
    "none": "Voice only",
    "baby": "Baby",
    "nova": "Nova (news anchor)",
    "zen": "Zen (cartoon guide)",
    "anya": "Dr. Anya (scientist)",
}

AVATAR_INSTRUCTIONS = {
    "baby": """
      **Primary Character:** The narrator and on-screen character is an adorable, expressive, and hyper-realistic animated baby, modeled after a child with big, curious eyes and a happy smile.
      **Voice:** Use a cute, AI-generated baby-like voice that is still clear and easy to understand in the specified language. The voice must match the script's content and be perfectly lip-synced.
      **Animation:** The baby's animations should be lifelike and engaging, with natural expressions (giggles, wide eyes, etc.) and movements that fit the voiceover.
    """,
    "nova": """
      **Primary Character:** The narrator and on-screen character is 'Nova', a professional and trustworthy news anchor in her early 30s.
      **Appearance:** She should have a polished, professional look (e.g., a smart blazer), suitable for a major news network.
      **Voice:** Use a clear, articulate, and authoritative female voice in the specified language. The tone should be confident and engaging.
      **Animation:** Animations should be subtle and professional, with realistic facial expressions and hand gestures appropriate for a news broadcast.
    """,
    "zen": """
      **Primary Character:** The narrator and on-screen character is 'Zen', a friendly and calm cartoon guide.
      **Appearance:** A simple, 2D animated character with a warm and approachable design. Think modern educational cartoon style.
      **Voice:** Use a gentle, soothing, and friendly male or female voice in the specified language.
      **Animation:** Animation should be smooth and expressive in a 2D cartoon style, with clear gestures that help explain the concepts in the voiceover.
    """,
    "anya": """
      **Primary Character:** The narrator and on-screen character is 'Dr. Anya', a brilliant and approachable scientist in her 40s.
      **Appearance:** She should look like an expert in her field, perhaps in a lab coat or professional attire, with a realistic and detailed character model.
      **Voice:** Use an intelligent, clear, and enthusiastic female voice in the specified language, conveying expertise without being condescending.
      **Animation:** Animations should be realistic and expressive, showing passion for the subject. She should interact with virtual graphics or elements related to the script.
    """,
}

VOICE_ONLY_INSTRUCTION = (
    "**Voice Only:** This video should primarily be a voiceover with animated visuals as described in the script. "
    "No specific on-screen narrator is required."
)

PROGRESS_MESSAGES = [
    "Warming up the virtual cameras...",
    "Casting our AI actors...",
    "Teaching the AI to talk...",
    "Syncing dialogue and lip movements...",
    "Rendering the first scenes with voice...",
    "Compositing visual effects and audio...",
    "Adding the final polish to the animation...",
    "Almost there, preparing for premiere...",
]

INITIATING_MESSAGE = "Initiating video generation..."
DOWNLOADING_MESSAGE = "Downloading final video..."

NO_VIDEO_REASON = (
    "the AI was unable to produce a video, possibly due to internal errors or content safety filters."
)

QUOTA_MARKERS = ("quota", "resource_exhausted", "429")


def avatar_instruction(avatar):
    return AVATAR_INSTRUCTIONS.get(avatar, VOICE_ONLY_INSTRUCTION)


def format_scenes(script):
    if script is None:
        return ""
    return "".join(
        f"""
      ---
      **Scene:** {scene.scene}
      **Visuals:** {scene.visual_description}
      **Voiceover:** "{scene.voiceover}"
      ---
    """
        for scene in script.script
    )


def build_video_prompt(idea, script, language, avatar):
    return f"""
    **AI Director Final Execution Order**

    **1. PRIMARY OBJECTIVE: Full Audio & Lip-Sync**
       - **VOICEOVER:** Generate a complete, high-quality voiceover in **{language}**. The voice must match the **{avatar}** character profile.
       - **DIALOGUE:** The voiceover must narrate the *entire* script's "Voiceover" text, from the first scene to the last.
       - **LIP-SYNC:** The on-screen character's lip movements MUST be perfectly synchronized with the dialogue.
       - **FAILURE CONDITION:** A video that is silent, has missing audio, or poor lip-sync is an IMMEDIATE failure.

    **2. CHARACTER & AVATAR DIRECTIVE**
       {avatar_instruction(avatar)}

    **3. CINEMATIC & VISUALS DIRECTIVE**
       - **QUALITY:** Photorealistic, cinematic quality. Aim for the visual fidelity of an Unreal Engine 5 render.
       - **LIGHTING:** Use dramatic, cinematic lighting with soft shadows and ray-traced reflections.
       - **CAMERA:** Employ dynamic camera work (e.g., subtle pans, dolly shots, focus pulls) to create a professional feel.
       - **RESOLUTION:** 1080p (1920x1080), 16:9 aspect ratio.

    **4. DO NOT INCLUDE (Negative Prompt)**
       - Muted/silent output.
       - Robotic or unnatural character animation.
       - Static, boring camera shots.
       - Glitches, artifacts, or visual noise.
       - Truncated or incomplete videos that do not cover the full script.

    **5. SCRIPT FOR PRODUCTION (Scene by Scene)**
       **Title:** "{idea.title}"

       {format_scenes(script)}
    **--- SCRIPT END ---**

    Execute this directive with precision. The final output must be a polished, professional video ready for publication that fully renders the entire script provided.
    """


def is_quota_error(error):
    message = str(error).lower()
    return any(marker in message for marker in QUOTA_MARKERS)


def generate_video_from_script(idea, script, language, avatar, client=None):
    """Starts the Veo job and returns its operation handle."""
    client = client or settings.get_client()
    prompt = build_video_prompt(idea, script, language, avatar)

    print(f"🎬 Veo: starting video job for '{idea.title}' ({language}, avatar={avatar})")
    try:
        return client.models.generate_videos(
            model=settings.veo_model(),
            prompt=prompt,
            config=types.GenerateVideosConfig(number_of_videos=1),
        )
    except Exception as e:
        print(f"❌ Veo error: {e}")
        if is_quota_error(e):
            raise QuotaExceededError(
                "API Limit Reached: You've exceeded your current usage quota. "
                "Please check your plan and billing details."
            ) from e
        raise VideoGenerationError(
            "Failed to start the video generation process. Please check the console for details."
        ) from e


def get_videos_operation(operation, client=None):
    client = client or settings.get_client()
    return client.operations.get(operation)


def wait_for_video(operation, on_progress=None, client=None, sleep=time.sleep, poll_interval=None, timeout=None):
    """
    Polls `operation` at a fixed interval until the remote job reports done.

    After every refresh the next entry of PROGRESS_MESSAGES (cycling) is passed
    to `on_progress`. `timeout` bounds the total time slept; when it runs out a
    VideoGenerationError is raised. The job itself keeps running remotely.
    """
    client = client or settings.get_client()
    if poll_interval is None:
        poll_interval = settings.poll_interval()
    if poll_interval <= 0:
        raise ValueError(f"poll_interval must be positive, got {poll_interval}")

    messages = itertools.cycle(PROGRESS_MESSAGES)
    waited = 0.0
    while not operation.done:
        if timeout is not None and waited >= timeout:
            raise VideoGenerationError(f"Video generation did not finish within {int(timeout)} seconds.")
        sleep(poll_interval)
        waited += poll_interval
        operation = get_videos_operation(operation, client)

        message = next(messages)
        print(f"⏳ Veo: {message} ({int(waited)}s)")
        if on_progress:
            on_progress(message)

    return operation


def extract_video_uri(operation):
    if operation.error:
        print(f"❌ Veo: operation failed: {operation.error}")
        raise NoVideoProducedError(f"Reason: {NO_VIDEO_REASON} Please try a different script.")

    response = operation.response
    videos = (response.generated_videos if response else None) or []
    video = videos[0].video if videos else None
    if not video or not video.uri:
        print(f"❌ Veo: finished without a valid video URI: {operation}")
        raise NoVideoProducedError(f"Reason: {NO_VIDEO_REASON} Please try a different script.")
    return video.uri


def download_video(uri, dest_dir=None, api_key=None, chunk_size=1024 * 1024):
    """Downloads the rendered video to `dest_dir` (the temp dir by default) and returns its path."""
    api_key = api_key or settings.get_api_key()
    dest_dir = Path(dest_dir or tempfile.gettempdir())
    dest_dir.mkdir(parents=True, exist_ok=True)
    filepath = None

    try:
        with requests.get(uri, params={"key": api_key}, stream=True, timeout=120) as response:
            response.raise_for_status()
            # Unique name per download
            with tempfile.NamedTemporaryFile("wb", dir=dest_dir, prefix="veo_", suffix=".mp4", delete=False) as f:
                filepath = Path(f.name)
                for chunk in response.iter_content(chunk_size=chunk_size):
                    f.write(chunk)
    except (requests.RequestException, OSError) as e:
        print(f"❌ Veo: download failed: {e}")
        if filepath is not None and filepath.exists():
            os.remove(filepath)
        raise VideoDownloadError("Failed to download the generated video.") from e

    print(f"✅ Video saved: {filepath}")
    return filepath


def render_video(idea, script, language, avatar, on_progress=None, client=None, dest_dir=None, sleep=time.sleep):
    """Start -> poll -> download. Returns the local path of the finished video."""
    client = client or settings.get_client()

    if on_progress:
        on_progress(INITIATING_MESSAGE)
    operation = generate_video_from_script(idea, script, language, avatar, client=client)
    operation = wait_for_video(
        operation, on_progress=on_progress, client=client, sleep=sleep, timeout=settings.poll_timeout()
    )
    uri = extract_video_uri(operation)

    if on_progress:
        on_progress(DOWNLOADING_MESSAGE)
    return download_video(uri, dest_dir=dest_dir)
