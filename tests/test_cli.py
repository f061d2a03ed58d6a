"""Tests for the CLI interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from drafty_text.cli import app, load_document


runner = CliRunner()


class TestLoadDocument:
    """Tests for input loading."""

    def test_markup_file(self, tmp_markup_file: Path):
        """Test that markup files are parsed."""
        doc = load_document(tmp_markup_file)

        assert doc.text.startswith("Hello world, meet @alice!")

    def test_json_file(self, tmp_path: Path):
        """Test that JSON files are decoded."""
        path = tmp_path / "doc.json"
        path.write_text('{"txt": "hi"}', encoding="utf-8")

        assert load_document(path).text == "hi"


class TestCLI:
    """Tests for CLI commands."""

    def test_version_flag(self):
        """Test --version flag."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Drafty" in result.stdout

    def test_help_flag(self):
        """Test --help flag."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "convert" in result.stdout

    def test_convert_prints_json(self, tmp_markup_file: Path):
        """Test printing the JSON form."""
        result = runner.invoke(app, ["convert", str(tmp_markup_file), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["txt"].startswith("Hello world")
        assert {"at": 6, "len": 5, "tp": "ST"} in data["fmt"]

    def test_convert_prints_html(self, tmp_path: Path):
        """Test printing HTML."""
        path = tmp_path / "in.txt"
        path.write_text("*hi*", encoding="utf-8")

        result = runner.invoke(app, ["convert", str(path), "-f", "html"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "<b>hi</b>"

    def test_convert_format_from_settings(self, tmp_path: Path, monkeypatch):
        """Test that the default format comes from the environment."""
        monkeypatch.setenv("DRAFTY_OUTPUT_FORMAT", "txt")
        path = tmp_path / "in.json"
        path.write_text('{"txt": "a b", "fmt": [{"at": 0, "len": 1, "tp": "EM"}]}', encoding="utf-8")

        result = runner.invoke(app, ["convert", str(path)])

        assert result.exit_code == 0
        assert result.stdout.strip() == "_a_ b"

    def test_invalid_settings(self, tmp_markup_file: Path, monkeypatch):
        """Test that a bad log level is reported instead of crashing."""
        monkeypatch.setenv("DRAFTY_LOG_LEVEL", "LOUD")

        result = runner.invoke(app, ["convert", str(tmp_markup_file)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout

    def test_convert_unknown_format(self, tmp_markup_file: Path):
        """Test that unknown print formats fail."""
        result = runner.invoke(app, ["convert", str(tmp_markup_file), "-f", "pdf"])

        assert result.exit_code == 1
        assert "Unknown format" in result.stdout

    def test_convert_to_file(self, tmp_markup_file: Path, tmp_path: Path):
        """Test writing an output file."""
        output = tmp_path / "out.html"

        result = runner.invoke(app, ["convert", str(tmp_markup_file), "-o", str(output)])

        assert result.exit_code == 0
        assert output.exists()
        assert "<b>world</b>" in output.read_text(encoding="utf-8")

    def test_convert_unsupported_output(self, tmp_markup_file: Path, tmp_path: Path):
        """Test that unsupported output extensions fail."""
        result = runner.invoke(
            app, ["convert", str(tmp_markup_file), "-o", str(tmp_path / "out.pdf")]
        )

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_missing_file_error(self, tmp_path: Path):
        """Test error when file doesn't exist."""
        result = runner.invoke(app, ["convert", str(tmp_path / "nonexistent.txt")])

        assert result.exit_code != 0

    def test_show(self, tmp_markup_file: Path):
        """Test terminal rendering."""
        result = runner.invoke(app, ["show", str(tmp_markup_file)])

        assert result.exit_code == 0
        assert "Hello world" in result.stdout

    def test_show_unreadable_format(self, tmp_path: Path):
        """Test that write-only formats cannot be shown."""
        path = tmp_path / "page.html"
        path.write_text("<b>x</b>", encoding="utf-8")

        result = runner.invoke(app, ["show", str(path)])

        assert result.exit_code == 1
