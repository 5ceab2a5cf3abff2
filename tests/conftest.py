"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from promptsmith.files import DirectorySerializer, IgnoreRulesCache, PathReader
from promptsmith.placeholders import PlaceholderFormatter, UsageInspector


@pytest.fixture
def formatter() -> PlaceholderFormatter:
    """Create a formatter with a private ignore cache."""
    return PlaceholderFormatter(reader=PathReader(DirectorySerializer(IgnoreRulesCache())))


@pytest.fixture
def inspector() -> UsageInspector:
    return UsageInspector()


@pytest.fixture
def prompt_root(tmp_path: Path) -> Path:
    """Create a root directory with files for file:/content: directives.

    Layout:
        root/notes.md            "Hello {{input}}"
        root/docs/a.txt          "A"
        root/docs/image.png      binary
        root/docs/node_modules/  ignored
        root/docs/sub/b.txt      "B"
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "notes.md").write_text("Hello {{input}}", encoding="utf-8")

    docs = root / "docs"
    (docs / "sub").mkdir(parents=True)
    (docs / "node_modules").mkdir()
    (docs / "a.txt").write_text("A", encoding="utf-8")
    (docs / "image.png").write_bytes(b"\x89PNG\r\n")
    (docs / "node_modules" / "dep.js").write_text("module.exports = {}", encoding="utf-8")
    (docs / "sub" / "b.txt").write_text("B", encoding="utf-8")

    (tmp_path / "secret.txt").write_text("outside the root", encoding="utf-8")
    return root


@pytest.fixture
def prompt_values() -> dict:
    """Merged prompt properties and context values."""
    return {
        "title": "My Awesome Prompt",
        "icon": "📎",
        "count": 123,
        "input": "user input",
        "clipboard": "clipboard data",
        "items": [{"name": "First item"}, {"name": "Second item"}],
        "tone": ["formal", "casual"],
        "length": {"short": "Keep it brief", "long": "Go into detail"},
    }
