"""Pytest fixtures for Drafty tests."""

import pytest
from pathlib import Path


class TreeFormatter:
    """Formatter returning plain (tag, data, content) tuples."""

    def apply(self, tag, data, content):
        return (tag, data, content)


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Make every test start with fresh settings."""
    monkeypatch.setattr("drafty_text.config._settings", None)


@pytest.fixture
def tree_formatter() -> TreeFormatter:
    """Formatter which exposes the render tree as tuples."""
    return TreeFormatter()


@pytest.fixture
def sample_markup() -> str:
    """Sample multi-line markup for testing."""
    return (
        "Hello *world*, meet @alice!\n"
        "Docs at example.com and _more_ at `code` #tinode"
    )


@pytest.fixture
def tmp_markup_file(tmp_path: Path, sample_markup: str) -> Path:
    """Create a temporary markup file for testing."""
    file_path = tmp_path / "note.txt"
    file_path.write_text(sample_markup, encoding="utf-8")
    return file_path
