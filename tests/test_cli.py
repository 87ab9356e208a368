"""Tests for the command-line interface."""

import json

from PIL import Image

from pictoprime.cli import main


class TestNumberCommand:
    """Tests for the number subcommand."""

    def test_json_output(self, capsys):
        """JSON report for a two digit search."""
        assert main(["number", "13", "--workers", "1", "--seed", "1", "--json"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report['prime'] == "73"
        assert report['attempts'] == 0
        assert report['workers'] == 1
        assert report['distinct_tested'] == 1

    def test_text_output(self, capsys):
        """Plain output shows the wrapped prime and a summary."""
        assert main(["number", "8049922777", "--workers", "2", "--seed", "3",
                     "--width", "5"]) == 0
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert len(lines[0]) == 5
        assert len(lines[1]) == 5
        assert "Distinct tested:" in out

    def test_settings_file(self, tmp_path, capsys):
        """A settings file replaces the digit tables."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "allowedModifications": {"1": ["7"], "7": ["1"]},
            "lastDigitModification": {},
            "confidence": 16,
        }))
        assert main(["number", "1111111117", "--settings", str(path),
                     "--workers", "1", "--seed", "2", "--json"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert set(report['prime']) <= {"1", "7"}

    def test_invalid_digits(self, capsys):
        """Malformed input is reported with a non-zero exit code."""
        assert main(["number", "12a4"]) == 2
        assert "Error" in capsys.readouterr().err

    def test_missing_settings_file(self, tmp_path, capsys):
        """A missing settings file is an error, not a crash."""
        assert main(["number", "8049922777", "--settings",
                     str(tmp_path / "nope.json")]) == 2

    def test_no_command(self, capsys):
        """Without a command help is printed."""
        assert main([]) == 1


class TestImageCommand:
    """Tests for the image subcommand."""

    def test_black_image(self, tmp_path, capsys):
        """A black picture becomes a prime made mostly of eights."""
        path = tmp_path / "black.png"
        Image.new("RGB", (8, 16), (0, 0, 0)).save(path)
        assert main(["image", str(path), "--width", "8", "--workers", "2",
                     "--seed", "4", "--json"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert len(report['prime']) == 64
        assert report['prime'][-1] == "9"

    def test_missing_image(self, tmp_path, capsys):
        """Unreadable paths give a non-zero exit code."""
        assert main(["image", str(tmp_path / "missing.png")]) == 2
