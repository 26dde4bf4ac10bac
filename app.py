from pathlib import Path

import streamlit as st

import media_module
import settings
import studio
import veo_module
from models import GenerationError, IdeaFormatError, MissingApiKeyError, NoVideoProducedError, format_script

# --- 1. Page & sidebar ---
st.set_page_config(page_title="Viral Views AI", page_icon="🎬", layout="wide")
st.title("🎬 Viral Views AI")
st.caption(
    "Your personal AI agent for scripting and producing realistic, voice-narrated animated videos for YouTube "
    "that captivate audiences and skyrocket your subscriber count."
)

with st.sidebar:
    st.header("⚙️ System")

    api_key = settings.get_api_key()
    if api_key:
        st.success("✅ Gemini API: Connected")
    else:
        st.error("❌ Gemini API: Missing Key (GOOGLE_API_KEY)")

    st.divider()
    st.subheader("🖼️ Thumbnails")
    try:
        provider = settings.thumbnail_provider()
        st.write(f"Backend: **{provider}**")
        if provider == "fal" and not settings.get_secret("FAL_KEY"):
            st.warning("FAL_KEY is not set; thumbnail generation will fail.")
    except ValueError as e:
        st.error(str(e))

    st.divider()
    st.subheader("🎞️ Video")
    st.write(f"Model: `{settings.veo_model()}`")
    st.write(f"Progress check every {settings.poll_interval():.0f}s")


@st.cache_resource
def get_client(key):
    return settings.get_client(key)


def client():
    return get_client(api_key)


# Session state: one list of IdeaCard objects plus the last error message
if "ideas" not in st.session_state:
    st.session_state["ideas"] = None
if "error" not in st.session_state:
    st.session_state["error"] = None


# --- 2. Card views ---
def section(title, body):
    st.markdown(f"**{title}**")
    st.write(body)


def render_concept(index, card):
    idea = card.idea
    st.subheader(idea.title)
    section("Attention-Grabbing Hook", f'_"{idea.hook}"_')
    section("Target Audience", idea.target_audience)
    section("Thumbnail Idea", idea.thumbnail_suggestion)

    if st.button("✨ Create Script & Thumbnail", key=f"script_{index}", width="stretch"):
        st.session_state["error"] = None
        with st.spinner("Creating Content..."):
            try:
                studio.create_script_and_thumbnail(card, client=client())
            except GenerationError as e:
                st.session_state["error"] = f'Failed to generate content for "{idea.title}". {e}'
        st.rerun()


def render_video(card):
    st.video(card.video_path)
    info = card.video_info
    if info:
        st.caption(media_module.describe_video(info))
        if not info.has_audio:
            st.warning("The generated video has no audio track. Try a different script or avatar.")
    st.download_button(
        "⬇️ Download video",
        data=Path(card.video_path).read_bytes(),
        file_name=Path(card.video_path).name,
        mime="video/mp4",
        key=f"download_{card.video_path}",
        width="stretch",
    )


def render_video_controls(index, card):
    st.divider()
    st.markdown("**Ready to Produce Video with Voiceover?**")
    col1, col2 = st.columns(2)
    with col1:
        language = st.selectbox("Language", veo_module.LANGUAGES, key=f"lang_{index}")
    with col2:
        avatar = st.selectbox(
            "Narrator", list(veo_module.AVATARS), format_func=veo_module.AVATARS.get, key=f"avatar_{index}"
        )

    if st.button("🎞️ Generate Video", key=f"video_{index}", type="primary", width="stretch"):
        st.session_state["error"] = None
        with st.status("Generating Video", expanded=True) as status:

            def on_progress(message):
                status.update(label=f"Generating Video: {message}")
                status.write(message)

            try:
                studio.produce_video(card, language, avatar, on_progress=on_progress, client=client())
                status.update(label="✅ Video ready!", state="complete", expanded=False)
            except NoVideoProducedError as e:
                status.update(label="❌ Video generation failed", state="error")
                st.session_state["error"] = f'Video generation failed for "{card.idea.title}". {e}'
            except GenerationError as e:
                status.update(label="❌ Video generation failed", state="error")
                st.session_state["error"] = f'Failed to generate video for "{card.idea.title}". {e}'
        st.rerun()

    st.caption(
        "This will generate a complete video file with a high-quality AI audio voiceover and realistic, "
        "lip-synced animation. The process may take several minutes."
    )


def render_production(index, card):
    script = card.generated_script
    if card.video_path:
        render_video(card)
    else:
        st.image(card.thumbnail_image, caption=f"Generated thumbnail for {card.idea.title}", width="stretch")

    st.subheader(script.title)
    st.markdown("**Full Video Script**")
    for scene in script.script:
        with st.container(border=True):
            st.markdown(f"**Scene {scene.scene}**")
            st.markdown(f"**Visual:** {scene.visual_description}")
            st.markdown(f'**Voiceover:** "{scene.voiceover}"')

    with st.expander("📋 Copy Full Script"):
        st.code(format_script(script), language=None)

    if not card.video_path:
        render_video_controls(index, card)


# --- 3. Main flow ---
st.divider()
st.header("💡 Enter Your Channel Topic")
topic = st.text_area(
    "Channel topic",
    placeholder="e.g., 'Funny talking babies', 'Retro Gaming Speedruns', 'AI for Beginners'...",
    height=110,
    label_visibility="collapsed",
)

if st.button(
    "Generate Video Concepts", key="generate_concepts", type="primary", width="stretch", disabled=not topic.strip()
):
    if not topic.strip():
        st.session_state["error"] = "Please enter a topic to generate ideas."
    else:
        st.session_state["error"] = None
        st.session_state["ideas"] = None
        with st.spinner("Generating Concepts..."):
            try:
                st.session_state["ideas"] = studio.generate_concepts(topic, client=client())
            except MissingApiKeyError as e:
                st.session_state["error"] = str(e)
            except IdeaFormatError:
                st.session_state["error"] = "Failed to generate content. The AI returned an unexpected format."
            except GenerationError:
                st.session_state["error"] = "An error occurred while generating ideas. Please try again."
    st.rerun()

if st.session_state["error"]:
    st.error(st.session_state["error"])

ideas = st.session_state["ideas"]
if ideas:
    columns = st.columns(3)
    for index, card in enumerate(ideas):
        with columns[index % 3]:
            with st.container(border=True):
                if card.has_generated_content:
                    render_production(index, card)
                else:
                    render_concept(index, card)
elif not st.session_state["error"]:
    st.caption("Your next viral video script is just a click away.")
