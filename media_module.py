# media_module.py
from moviepy.video.io.VideoFileClip import VideoFileClip

from models import VideoInfo


def probe_video(path):
    """Reads duration, frame size and whether an audio track is present."""
    clip = VideoFileClip(str(path))
    try:
        return VideoInfo(
            duration=float(clip.duration or 0),
            size=tuple(clip.size),
            has_audio=clip.audio is not None,
        )
    finally:
        clip.close()


def describe_video(info):
    w, h = info.size
    audio = "with audio" if info.has_audio else "no audio track"
    return f"{info.duration:.1f}s · {w}x{h} · {audio}"
