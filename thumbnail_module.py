# thumbnail_module.py
import base64
import io

import fal_client
import requests
from google.genai import types
from PIL import Image, ImageOps

import settings
from models import ThumbnailGenerationError

THUMBNAIL_SIZE = (1280, 720)  # 16:9, YouTube's recommended thumbnail size


def build_thumbnail_prompt(suggestion):
    return (
        f'Create a high-impact, high-click-through-rate YouTube thumbnail based on this description: "{suggestion}". '
        "The thumbnail should be visually stunning, emotionally resonant, and have clear, bold elements. "
        "Avoid putting any text on the image itself. The aspect ratio must be 16:9."
    )


def normalize_thumbnail(image_bytes, size=THUMBNAIL_SIZE, quality=90):
    """
    Center-crops any image to 16:9, resizes it to `size` and re-encodes it as RGB JPEG.
    """
    with Image.open(io.BytesIO(image_bytes)) as img:
        img = ImageOps.fit(img.convert("RGB"), size, method=Image.LANCZOS)
        out = io.BytesIO()
        img.save(out, format="JPEG", quality=quality)
    return out.getvalue()


def to_data_url(jpeg_bytes):
    return "data:image/jpeg;base64," + base64.b64encode(jpeg_bytes).decode("ascii")


def _generate_with_imagen(prompt, client):
    client = client or settings.get_client()
    response = client.models.generate_images(
        model=settings.imagen_model(),
        prompt=prompt,
        config=types.GenerateImagesConfig(
            number_of_images=1,
            output_mime_type="image/jpeg",
            aspect_ratio="16:9",
        ),
    )
    # Safety filters can leave the list empty
    if not response.generated_images:
        raise ValueError("Imagen returned no images")
    return response.generated_images[0].image.image_bytes


def _generate_with_fal(prompt):
    # 1. Submit to fal.ai and wait for the result
    handler = fal_client.submit(
        settings.fal_image_model(),
        arguments={
            "prompt": prompt,
            "image_size": "landscape_16_9",
            "num_inference_steps": 30,
        },
    )
    result = handler.get()
    image_url = result["images"][0]["url"]

    # 2. Download the image
    response = requests.get(image_url, timeout=60)
    response.raise_for_status()
    return response.content


def generate_thumbnail(suggestion, client=None):
    """Returns a 1280x720 JPEG (bytes) for the idea's thumbnail suggestion."""
    prompt = build_thumbnail_prompt(suggestion)

    try:
        provider = settings.thumbnail_provider()
        print(f"🎨 Thumbnail ({provider}): generating...")
        if provider == "fal":
            raw = _generate_with_fal(prompt)
        else:
            raw = _generate_with_imagen(prompt, client)
        jpeg = normalize_thumbnail(raw)
    except Exception as e:
        print(f"❌ Thumbnail error: {e}")
        raise ThumbnailGenerationError("Failed to generate the thumbnail image.") from e

    print(f"✅ Thumbnail ready ({len(jpeg) // 1024} KB)")
    return jpeg
