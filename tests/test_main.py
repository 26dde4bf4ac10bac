"""Tests for the command-line runner."""

from unittest.mock import MagicMock

import pytest

import main
from models import IdeaCard, IdeaGenerationError, VideoInfo


@pytest.fixture
def fake_studio(monkeypatch, sample_idea, sample_script, tmp_path):
    def generate_concepts(topic, client=None):
        return [IdeaCard(idea=sample_idea.model_copy(update={"title": f"Idea {i}"})) for i in range(1, 4)]

    def create_script_and_thumbnail(card, client=None):
        card.generated_script = sample_script
        card.thumbnail_image = b"\xff\xd8jpeg"
        return card

    def produce_video(card, language, avatar, client=None, dest_dir=None):
        card.video_path = str(dest_dir / "veo_1.mp4")
        card.video_info = VideoInfo(duration=8.0, size=(1280, 720), has_audio=False)
        return card

    monkeypatch.setattr(main.studio, "generate_concepts", generate_concepts)
    monkeypatch.setattr(main.studio, "create_script_and_thumbnail", create_script_and_thumbnail)
    produce = MagicMock(side_effect=produce_video)
    monkeypatch.setattr(main.studio, "produce_video", produce)
    return produce


class TestCreateVideo:
    def test_writes_script_and_thumbnail(self, fake_studio, tmp_path, mock_client):
        card = main.create_video("Retro Gaming", idea_number=2, output_dir=tmp_path, skip_video=True, client=mock_client)

        assert card.idea.title == "Idea 2"
        assert (tmp_path / "thumbnail.jpg").read_bytes() == b"\xff\xd8jpeg"
        assert (tmp_path / "script.txt").read_text(encoding="utf-8").startswith("Scene 1\nVisual:")
        fake_studio.assert_not_called()

    def test_renders_video(self, fake_studio, tmp_path, mock_client, capsys):
        card = main.create_video(
            "Retro Gaming", language="Telugu", avatar="zen", output_dir=tmp_path, client=mock_client
        )

        assert card.video_path == str(tmp_path / "veo_1.mp4")
        fake_studio.assert_called_once_with(card, "Telugu", "zen", client=mock_client, dest_dir=tmp_path)
        assert "no audio track" in capsys.readouterr().out

    def test_idea_out_of_range(self, fake_studio, tmp_path, mock_client):
        with pytest.raises(ValueError, match="between 1 and 3"):
            main.create_video("Retro Gaming", idea_number=4, output_dir=tmp_path, client=mock_client)


class TestMain:
    def test_success_exit_code(self, fake_studio, monkeypatch, tmp_path):
        monkeypatch.setattr(main.settings, "get_client", MagicMock())

        assert main.main(["Retro Gaming", "--skip-video", "--output-dir", str(tmp_path)]) == 0

    def test_generation_error_exit_code(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr(main.settings, "get_client", MagicMock())
        monkeypatch.setattr(
            main.studio, "generate_concepts", MagicMock(side_effect=IdeaGenerationError("Failed to fetch"))
        )

        assert main.main(["Retro Gaming", "--output-dir", str(tmp_path)]) == 1
        assert "Failed to fetch" in capsys.readouterr().out

    def test_blank_interactive_topic(self, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: "  ")

        assert main.main([]) == 1

    def test_rejects_unknown_avatar(self):
        with pytest.raises(SystemExit):
            main.main(["Retro Gaming", "--avatar", "robot"])
