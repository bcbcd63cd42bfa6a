"""Shared pytest fixtures for the nodegen test suite.

Provides reusable fixtures for:
- A scripted stand-in for the interactive prompt
- A small fake framework template tree
- Configs pointing at temporary directories
- A mocked package-manager runner
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from nodegen.catalog import FRAMEWORKS
from nodegen.config import Config
from nodegen.scaffolder.installer import InstallRunner


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

class ScriptedPrompt:
    """Prompt that replays canned answers and records every question."""

    def __init__(self, answers: list[str] | None = None, confirm: bool = False) -> None:
        self.answers = list(answers or [])
        self.confirm_answer = confirm
        self.questions: list[str] = []
        self.confirmations: list[str] = []

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.confirm_answer

    def ask(self, message: str) -> str:
        self.questions.append(message)
        return self.answers.pop(0) if self.answers else ""


@pytest.fixture
def scripted_prompt():
    """Factory for :class:`ScriptedPrompt` instances.

    Usage:
        def test_something(scripted_prompt):
            prompt = scripted_prompt(["lodash", "postgres"], confirm=True)
    """
    def factory(answers: list[str] | None = None, confirm: bool = False) -> ScriptedPrompt:
        return ScriptedPrompt(answers, confirm)

    return factory


# ---------------------------------------------------------------------------
# Templates & config
# ---------------------------------------------------------------------------

@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """A fake template root with one small tree per framework."""
    root = tmp_path / "templates"
    for spec in FRAMEWORKS.values():
        tree = root / spec.template
        (tree / "src").mkdir(parents=True)
        (tree / "server.js").write_text(
            f"// {spec.framework.value} entry point\n", encoding="utf-8"
        )
        (tree / "src" / "app.js").write_text("module.exports = {};\n", encoding="utf-8")
        (tree / "README.md").write_text(f"# {spec.framework.value}\n", encoding="utf-8")
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def config(output_dir: Path, templates_dir: Path) -> Config:
    """Config writing into a temp directory from the fake templates."""
    return Config(output_dir=output_dir, templates_dir=templates_dir)


# ---------------------------------------------------------------------------
# Mock package manager
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_installer() -> MagicMock:
    """An InstallRunner whose ``install`` succeeds without running anything."""
    installer = MagicMock(spec=InstallRunner)
    installer.install = AsyncMock(return_value=0)
    return installer

