"""Shared fixtures for the clia_scaffold test-suite."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

import pytest


class ScriptedPrompter:
    """Prompter that answers from a script and remembers every question."""

    def __init__(self, confirms: bool | Iterable[bool] = True, name: str | None = None) -> None:
        if isinstance(confirms, bool):
            self._constant: bool | None = confirms
            self._answers: list[bool] = []
        else:
            self._constant = None
            self._answers = list(confirms)
        self.name = name
        self.confirm_questions: list[str] = []
        self.ask_questions: list[tuple[str, str]] = []

    def confirm(self, message: str) -> bool:
        self.confirm_questions.append(message)
        if self._constant is not None:
            return self._constant
        return self._answers.pop(0)

    def ask(self, message: str, default: str) -> str:
        self.ask_questions.append((message, default))
        return default if self.name is None else self.name


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under *root* to its content."""
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


@pytest.fixture
def node_project(tmp_path: Path) -> Path:
    """A directory holding nothing but ``package.json`` with ``{"name": "x"}``."""
    (tmp_path / "package.json").write_text(json.dumps({"name": "x"}), encoding = "utf-8")
    return tmp_path


@pytest.fixture
def yes() -> ScriptedPrompter:
    return ScriptedPrompter(True)


@pytest.fixture
def no() -> ScriptedPrompter:
    return ScriptedPrompter(False)
