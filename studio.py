# studio.py
"""
Card-level actions shared by the Streamlit page and the CLI.

Each action mutates an IdeaCard in place, so the caller only has to re-render.
Failures leave the card in its previous state and re-raise the GenerationError.
"""

import time
from concurrent.futures import ThreadPoolExecutor

import gemini_module
import media_module
import settings
import thumbnail_module
import veo_module
from models import IdeaCard, IdeaFormatError


def generate_concepts(topic, client=None):
    client = client or settings.get_client()
    result = gemini_module.generate_youtube_content(topic, client=client)
    if not result.video_ideas:
        raise IdeaFormatError("Failed to generate content. The AI returned an unexpected format.")
    return [IdeaCard(idea=idea) for idea in result.video_ideas]


def create_script_and_thumbnail(card, client=None):
    """Script and thumbnail are independent calls, so they run side by side."""
    client = client or settings.get_client()
    card.is_generating = True
    try:
        with ThreadPoolExecutor(max_workers=2) as executor:
            script_future = executor.submit(gemini_module.generate_video_script, card.idea, client)
            thumb_future = executor.submit(thumbnail_module.generate_thumbnail, card.idea.thumbnail_suggestion, client)
            script = script_future.result()
            thumbnail = thumb_future.result()
    finally:
        card.is_generating = False

    card.generated_script = script
    card.thumbnail_image = thumbnail
    return card


def produce_video(card, language, avatar, on_progress=None, client=None, dest_dir=None, sleep=time.sleep):
    """
    Renders the card's script into a video and stores its local path on the card.

    `on_progress` receives every progress message after it has been written to
    card.video_generation_progress.
    """
    if card.generated_script is None:
        raise ValueError("Generate a script before producing a video.")

    client = client or settings.get_client()

    def report(message):
        card.video_generation_progress = message
        if on_progress:
            on_progress(message)

    card.is_generating_video = True
    try:
        path = veo_module.render_video(
            card.idea,
            card.generated_script,
            language,
            avatar,
            on_progress=report,
            client=client,
            dest_dir=dest_dir,
            sleep=sleep,
        )
    finally:
        card.reset_video_state()

    card.video_path = str(path)
    try:
        card.video_info = media_module.probe_video(path)
    except (OSError, KeyError) as e:
        # Unreadable container: the card shows the video without a summary
        print(f"⚠️ Could not inspect {path}: {e}")
        card.video_info = None
    return card
