"""Tests for the command-line interface."""

import io
import json
from unittest.mock import patch

import pytest

from promptsmith.cli import main


@pytest.fixture
def values_file(tmp_path):
    path = tmp_path / "values.json"
    path.write_text(
        json.dumps({"input": "World", "tone": ["formal", "casual"], "title": "Greeting"}),
        encoding="utf-8",
    )
    return path


class TestFormatCommand:
    """Test the format command."""

    def test_format_template_file(self, tmp_path, values_file, capsys):
        template = tmp_path / "prompt.txt"
        template.write_text("{{title}}: Hello {{i}} ({{option:tone}})", encoding="utf-8")

        main(["format", str(template), "--values", str(values_file)])

        assert capsys.readouterr().out == "Greeting: Hello World (formal)"

    def test_format_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("Hello {{unknown}}"))

        main(["format", "-"])

        assert capsys.readouterr().out == "Hello {{unknown}}"

    def test_format_with_files(self, prompt_root, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("{{content:notes.md}}"))

        main(["format", "-", "--root", str(prompt_root), "--resolve-files"])

        assert capsys.readouterr().out == "Hello {{input}}"

    def test_missing_template_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["format", str(tmp_path / "missing.txt")])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_values_file(self, tmp_path, monkeypatch, capsys):
        bad = tmp_path / "values.json"
        bad.write_text("[1, 2]", encoding="utf-8")
        monkeypatch.setattr("sys.stdin", io.StringIO("{{input}}"))

        with pytest.raises(SystemExit):
            main(["format", "-", "--values", str(bad)])

        assert "must contain a JSON object" in capsys.readouterr().err


class TestKeysCommand:
    """Test the keys command."""

    def test_keys_listed(self, tmp_path, values_file, capsys):
        template = tmp_path / "prompt.txt"
        template.write_text("{{s|i}} {{c}} {{option:tone}}", encoding="utf-8")

        main(["keys", str(template), "--values", str(values_file)])

        assert capsys.readouterr().out.splitlines() == ["input", "clipboard", "option:tone"]


class TestServeCommand:
    """Test the serve command."""

    def test_serve_runs_uvicorn(self):
        with patch("promptsmith.cli.uvicorn.run") as mock_run:
            main(["serve", "--host", "0.0.0.0", "--port", "9000"])

        mock_run.assert_called_once_with(
            "promptsmith.api:create_app",
            host="0.0.0.0",
            port=9000,
            reload=False,
            factory=True,
        )


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 1
    assert "usage" in capsys.readouterr().out.lower()
