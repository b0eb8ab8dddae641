"""
Shared pytest fixtures for all tests.
"""
import tempfile
from pathlib import Path
from typing import Iterator

import pytest

from core.templates import InMemoryTemplateStorage, TemplateStore


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """A config file with a comment, a URL and a permission map."""
    file_path = temp_dir / "opencode.jsonc"
    file_path.write_text(
        """{
  // Global settings
  "$schema": "https://opencode.ai/config.json",
  "model": "anthropic/claude-sonnet-4-20250514",
  "permission": {
    "bash": {"*": "ask", "git *": "allow"},
  },
}
"""
    )
    return file_path


@pytest.fixture
def sample_document() -> dict:
    """A representative config document."""
    return {
        "$schema": "https://opencode.ai/config.json",
        "model": "anthropic/claude-sonnet-4-20250514",
        "permission": {
            "bash": {"*": "ask", "git *": "allow", "git push *": "deny"},
            "edit": "allow",
        },
        "provider": {
            "anthropic": {"options": {"apiKey": "{env:ANTHROPIC_API_KEY}"}},
        },
        "tui": {"scroll_speed": 2},
        "instructions": ["AGENTS.md"],
    }


@pytest.fixture
def template_store() -> TemplateStore:
    """An empty in-memory template store."""
    return TemplateStore(InMemoryTemplateStorage())
