"""Tests for the confirm-before-overwrite gate."""

from __future__ import annotations

import logging

import pytest

from clia_scaffold.gate import ConfirmationGate, Outcome
from conftest import ScriptedPrompter


@pytest.fixture
def calls() -> list[str]:
    return []


def test_absent_target_runs_without_prompt(calls: list[str]) -> None:
    prompter = ScriptedPrompter(False)
    gate = ConfirmationGate(prompter)

    outcome = gate(False, "Overwrite?", lambda: calls.append("write"), target = "/config/default.js")

    assert outcome is Outcome.PROCEEDED
    assert calls == ["write"]
    assert prompter.confirm_questions == []


def test_existing_target_confirmed(calls: list[str], caplog: pytest.LogCaptureFixture) -> None:
    prompter = ScriptedPrompter(True)
    gate = ConfirmationGate(prompter)

    with caplog.at_level(logging.WARNING):
        outcome = gate(True, "Overwrite?", lambda: calls.append("write"), target = "/config/default.js")

    assert outcome is Outcome.PROCEEDED
    assert calls == ["write"]
    assert prompter.confirm_questions == ["Overwrite?"]
    assert "/config/default.js already exists" in caplog.text


def test_existing_target_declined(calls: list[str], caplog: pytest.LogCaptureFixture) -> None:
    prompter = ScriptedPrompter(False)
    gate = ConfirmationGate(prompter, log_pad = ">> ")

    with caplog.at_level(logging.WARNING):
        outcome = gate(True, "Overwrite?", lambda: calls.append("write"), target = "/mycli")

    assert outcome is Outcome.SKIPPED
    assert calls == []
    assert ">> OK, not overwriting /mycli" in caplog.text


def test_errors_from_action_propagate() -> None:
    gate = ConfirmationGate(ScriptedPrompter(True))

    def boom() -> None:
        raise OSError("disk full")

    with pytest.raises(OSError, match = "disk full"):
        gate(True, "Overwrite?", boom, target = "/x")
