"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    # Remove any PROMPTLINE_ env vars that might interfere
    for key in list(os.environ.keys()):
        if key.startswith("PROMPTLINE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_template_dir(tmp_path: Path) -> Path:
    """Create a temporary directory with test templates."""
    (tmp_path / "greeting.tpl").write_text(
        "Hello, {{ name }}! Welcome to {{ place }}."
    )
    (tmp_path / "system.md").write_text(
        "<SYSTEM>You are a helpful assistant{{ topic ? ` specializing in {{ topic }}` }}.</SYSTEM>"
    )
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "deep.prompt").write_text(
        "Nested template: {{ value }}"
    )
    (tmp_path / "notes.json").write_text('{"ignored": true}')
    return tmp_path


@pytest.fixture
def mock_env_file(tmp_path: Path) -> Path:
    """Create a temporary .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text(
        """
PROMPTLINE_MAX_RENDER_DEPTH=8
PROMPTLINE_TOKEN_MODEL=gpt-3.5-turbo
PROMPTLINE_LOG_LEVEL=DEBUG
"""
    )
    return env_file
