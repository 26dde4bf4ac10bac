# main.py
"""Runs the whole topic -> ideas -> script/thumbnail -> video flow without a browser."""

import argparse
import sys
from pathlib import Path

import media_module
import settings
import studio
import veo_module
from models import GenerationError, format_script


def build_parser():
    parser = argparse.ArgumentParser(description="Viral Views AI: topic to narrated video")
    parser.add_argument("topic", nargs="?", help="channel topic (asked interactively when omitted)")
    parser.add_argument("--idea", type=int, default=1, help="which of the generated ideas to produce (1-based)")
    parser.add_argument("--language", default="English", choices=veo_module.LANGUAGES)
    parser.add_argument("--avatar", default="none", choices=list(veo_module.AVATARS))
    parser.add_argument("--output-dir", default="output", type=Path)
    parser.add_argument("--skip-video", action="store_true", help="stop after the script and thumbnail")
    return parser


def create_video(topic, idea_number=1, language="English", avatar="none", output_dir=Path("output"),
                 skip_video=False, client=None):
    print(f"🚀 Project start: topic '{topic}'")
    client = client or settings.get_client()
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    # 1. Ideation
    cards = studio.generate_concepts(topic, client=client)
    for i, card in enumerate(cards, start=1):
        print(f"  {i}. {card.idea.title}")
    if not 1 <= idea_number <= len(cards):
        raise ValueError(f"--idea must be between 1 and {len(cards)}")
    card = cards[idea_number - 1]

    # 2. Script & thumbnail
    print(f"\n--- 🛠️ Producing '{card.idea.title}' ---")
    studio.create_script_and_thumbnail(card, client=client)
    (output_dir / "thumbnail.jpg").write_bytes(card.thumbnail_image)
    (output_dir / "script.txt").write_text(format_script(card.generated_script), encoding="utf-8")
    print(f"✅ Script and thumbnail written to {output_dir}")

    if skip_video:
        return card

    # 3. Video
    print("\n--- 🎬 Rendering video ---")
    studio.produce_video(card, language, avatar, client=client, dest_dir=output_dir)
    if card.video_info:
        print(f"ℹ️ {media_module.describe_video(card.video_info)}")
        if not card.video_info.has_audio:
            print("⚠️ The generated video has no audio track.")
    print(f"\n🎉 Done: {card.video_path}")
    return card


def main(argv=None):
    args = build_parser().parse_args(argv)
    topic = args.topic or input("Video topic (e.g. 'Retro Gaming Speedruns'): ")
    if not topic.strip():
        print("❌ Please enter a topic to generate ideas.")
        return 1

    try:
        create_video(
            topic,
            idea_number=args.idea,
            language=args.language,
            avatar=args.avatar,
            output_dir=args.output_dir,
            skip_video=args.skip_video,
        )
    except (GenerationError, ValueError) as e:
        print(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
