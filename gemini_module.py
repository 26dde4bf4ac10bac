# gemini_module.py
import json

from google.genai import types

import settings
from models import GeneratedScript, IdeaFormatError, IdeaGenerationError, IdeasResponse, ScriptGenerationError, VideoIdea

IDEAS_SYSTEM_INSTRUCTION = (
    "You are 'Viral Views AI', a world-class YouTube content strategist and creative director. "
    "Your goal is to generate highly engaging, viral video ideas that can attract millions of subscribers. "
    "For any given topic, you must provide a comprehensive content plan. Be creative, specific, and focus on "
    "what makes content shareable and watchable. Adhere strictly to the provided JSON schema."
)

SCRIPT_SYSTEM_INSTRUCTION = (
    "You are a professional screenwriter specializing in creating ultra-short, viral video clips. "
    "Your task is to turn a video concept into a production-ready script for a single scene, lasting about "
    "8-10 seconds. Follow the JSON schema precisely, ensuring the script array contains only one item."
)


def strip_json_fence(text):
    """Removes a ```json ... ``` wrapper if the model added one anyway."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _generate_json(client, prompt, system_instruction, schema, **sampling):
    # 1. Call the model with JSON output enforced
    response = client.models.generate_content(
        model=settings.text_model(),
        contents=prompt,
        config=types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=schema,
            **sampling,
        ),
    )
    # 2. Validate against the schema
    if not response.text:
        raise ValueError("Model returned an empty response")
    return schema.model_validate_json(strip_json_fence(response.text))


def generate_youtube_content(topic, client=None):
    """
    Asks the model for three video ideas about `topic`.

    Raises IdeaGenerationError when the call fails or the answer does not match
    the IdeasResponse schema. A blank topic raises ValueError before any call.
    """
    if not topic or not topic.strip():
        raise ValueError("Please enter a topic to generate ideas.")

    client = client or settings.get_client()
    prompt = f'Generate 3 viral YouTube video ideas for the topic: "{topic}"'

    print(f"🧠 Gemini: generating ideas for '{topic}'...")
    try:
        result = _generate_json(
            client, prompt, IDEAS_SYSTEM_INSTRUCTION, IdeasResponse, temperature=0.8, top_p=0.9
        )
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        print(f"❌ Gemini: unexpected ideas format: {e}")
        raise IdeaFormatError("Failed to fetch or parse content from the AI model.") from e
    except Exception as e:
        print(f"❌ Gemini error: {e}")
        raise IdeaGenerationError("Failed to fetch or parse content from the AI model.") from e

    print(f"✅ Gemini: {len(result.video_ideas)} ideas ready")
    return result


def build_script_prompt(idea: VideoIdea) -> str:
    return f"""
    Your task is to create a script for a single, concise, and engaging video clip, approximately 8-10 seconds long.
    The script must focus on a single situation or moment, not a full story.

    Based on the video idea:
    Title: "{idea.title}"
    Hook: "{idea.hook}"

    Generate a script that contains ONLY ONE SCENE. This scene should describe one of the following:
    1. A character delivering a single, impactful line of dialogue.
    2. A character performing a single, clear, and visually interesting action.
    3. A very short voiceover (1-2 sentences) explaining a single, focused visual.

    The goal is to create content that is focused and perfectly sized for an 8-10 second video.
    - **Visual Description:** Must be vivid and clear for an animator, describing only what happens in this single scene.
    - **Voiceover:** Must be extremely brief and directly related to the visual.

    Return the original title in your response, and ensure the 'script' array in the JSON contains exactly one scene object.
    """


def generate_video_script(idea, client=None):
    """Single-scene script for an 8-10 second clip."""
    client = client or settings.get_client()

    print(f"✍️ Gemini: writing script for '{idea.title}'...")
    try:
        script = _generate_json(
            client, build_script_prompt(idea), SCRIPT_SYSTEM_INSTRUCTION, GeneratedScript, temperature=0.7
        )
    except Exception as e:
        print(f"❌ Gemini script error: {e}")
        raise ScriptGenerationError("Failed to generate the video script.") from e

    print(f"✅ Gemini: script ready ({len(script.script)} scene)")
    return script


# Manual run
if __name__ == "__main__":
    ideas = generate_youtube_content("Funny talking babies")
    print(json.dumps(ideas.model_dump(by_alias=True), indent=2, ensure_ascii=False))
