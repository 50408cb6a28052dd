"""Tests for the note-illustrate command line."""

import json

import pytest
from click.testing import CliRunner
from unittest.mock import patch

from note_illustrator.cli import main
from note_illustrator.image_client import GeneratedImage, ImageClientError


@pytest.fixture
def runner():
    return CliRunner()


class TestAnalyzeCommand:
    """Tests for the analyze command."""

    def test_json_output(self, runner, note_file):
        """Test the JSON plan."""
        result = runner.invoke(main, ["analyze", str(note_file), "--images", "2", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["prompts"]) == 2
        assert data["style"]["id"] == "hyper_realism"

    def test_table_output(self, runner, note_file):
        """Test the rich summary."""
        result = runner.invoke(main, ["analyze", str(note_file)])

        assert result.exit_code == 0
        assert "Concepts:" in result.output

    def test_missing_note(self, runner, tmp_path):
        """Test that a missing note exits with status 1."""
        result = runner.invoke(main, ["analyze", str(tmp_path / "missing.md")])

        assert result.exit_code == 1
        assert "Note loading error" in result.output

    def test_invalid_threshold(self, runner, note_file):
        """Test that invalid config values exit with status 1."""
        result = runner.invoke(main, ["analyze", str(note_file), "--min-score", "150"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestPlaceCommand:
    """Tests for the place command."""

    def test_no_suggestions(self, runner, note_file):
        """Test the cursor hint when nothing scores high enough."""
        result = runner.invoke(main, ["place", str(note_file), "--prompt", "spaceship launch"])

        assert result.exit_code == 0
        assert "No section scored" in result.output

    def test_suggestions_table(self, runner, note_file):
        """Test a placement table."""
        result = runner.invoke(main, [
            "place", str(note_file),
            "--prompt", "photosynthesis sunlight chloroplasts",
            "--min-score", "0",
        ])

        assert result.exit_code == 0
        assert "Placement Suggestions" in result.output


class TestCatalogCommands:
    """Tests for styles and use-cases."""

    def test_styles(self, runner):
        """Test the styles table."""
        result = runner.invoke(main, ["styles"])

        assert result.exit_code == 0
        assert "Styles" in result.output

    def test_use_cases(self, runner):
        """Test the use-cases table."""
        result = runner.invoke(main, ["use-cases"])

        assert result.exit_code == 0
        assert "Use Cases" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_writes_images_and_note(self, runner, note_file, tmp_path):
        """Test saved images and the illustrated note."""
        output_dir = tmp_path / "out"

        with patch("note_illustrator.cli.ImageClient") as client_cls:
            client = client_cls.return_value
            client.generate_images.return_value = [GeneratedImage(b64_json="cG5n")]
            client.download.return_value = b"png"

            result = runner.invoke(main, [
                "generate", str(note_file),
                "--output-dir", str(output_dir),
                "--images", "2",
                "--api-key", "test-key",
            ])

        assert result.exit_code == 0, result.output
        assert (output_dir / "attachments" / "illustration_biology_hyper_realism_1.png").read_bytes() == b"png"
        assert (output_dir / "attachments" / "illustration_biology_hyper_realism_2.png").exists()

        illustrated = (output_dir / "biology.md").read_text(encoding="utf-8")
        assert "![[illustration_biology_hyper_realism_1.png|700]]" in illustrated
        assert "![[illustration_biology_hyper_realism_2.png|700]]" in illustrated
        assert client.generate_images.call_count == 2

    def test_client_error_exits(self, runner, note_file, tmp_path):
        """Test that image errors exit with status 1."""
        with patch("note_illustrator.cli.ImageClient") as client_cls:
            client_cls.return_value.generate_images.side_effect = ImageClientError("Rate limit exceeded.")

            result = runner.invoke(main, [
                "generate", str(note_file),
                "--output-dir", str(tmp_path / "out"),
                "--api-key", "test-key",
            ])

        assert result.exit_code == 1
        assert "Image generation error" in result.output
