# settings.py
import os

import streamlit as st
from dotenv import load_dotenv
from google import genai

from models import MissingApiKeyError

load_dotenv()

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGEN_MODEL = "imagen-4.0-generate-001"
DEFAULT_VEO_MODEL = "veo-2.0-generate-001"
DEFAULT_FAL_IMAGE_MODEL = "fal-ai/flux/dev"

DEFAULT_POLL_INTERVAL = 10  # seconds between operation refreshes
MIN_POLL_INTERVAL = 1
DEFAULT_POLL_TIMEOUT = 15 * 60

THUMBNAIL_PROVIDERS = ("imagen", "fal")


def get_secret(key_name, default=None):
    """Looks a key up in st.secrets first, then in os.environ."""
    try:
        if key_name in st.secrets:
            return st.secrets[key_name]
    except (FileNotFoundError, AttributeError):
        pass
    return os.getenv(key_name, default)


def get_api_key():
    return get_secret("GOOGLE_API_KEY") or get_secret("API_KEY")


def text_model():
    return get_secret("GEMINI_TEXT_MODEL", DEFAULT_TEXT_MODEL)


def imagen_model():
    return get_secret("IMAGEN_MODEL", DEFAULT_IMAGEN_MODEL)


def veo_model():
    return get_secret("VEO_MODEL", DEFAULT_VEO_MODEL)


def fal_image_model():
    return get_secret("FAL_IMAGE_MODEL", DEFAULT_FAL_IMAGE_MODEL)


def thumbnail_provider():
    provider = str(get_secret("THUMBNAIL_PROVIDER", "imagen")).strip().lower()
    if provider not in THUMBNAIL_PROVIDERS:
        raise ValueError(f"Unknown THUMBNAIL_PROVIDER: {provider!r} (expected one of {THUMBNAIL_PROVIDERS})")
    return provider


def poll_interval():
    """Seconds between operation refreshes, never below MIN_POLL_INTERVAL."""
    return max(float(get_secret("VIDEO_POLL_INTERVAL", DEFAULT_POLL_INTERVAL)), MIN_POLL_INTERVAL)


def poll_timeout():
    """Seconds to wait for a video job. 0 or a negative value disables the limit."""
    value = float(get_secret("VIDEO_POLL_TIMEOUT", DEFAULT_POLL_TIMEOUT))
    return value if value > 0 else None


def get_client(api_key=None):
    """Builds a google-genai client from the configured key."""
    api_key = api_key or get_api_key()
    if not api_key:
        raise MissingApiKeyError("GOOGLE_API_KEY (or API_KEY) is not set. Add it to .env or .streamlit/secrets.toml.")
    return genai.Client(api_key=api_key)
