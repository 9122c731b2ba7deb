"""Confirm-before-overwrite protocol shared by every destructive step."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Protocol

import typer

log = logging.getLogger(__name__)

__all__ = ["Outcome", "Prompter", "TyperPrompter", "ConfirmationGate", ]


class Outcome(str, enum.Enum):
    PROCEEDED = "proceeded"
    SKIPPED = "skipped"


class Prompter(Protocol):
    """Interactive question backend."""

    def confirm(self, message: str) -> bool:
        ...

    def ask(self, message: str, default: str) -> str:
        ...


class TyperPrompter:
    """Prompter reading answers from stdin through Typer."""

    def __init__(self, confirm_default: bool = True) -> None:
        self.confirm_default = confirm_default

    def confirm(self, message: str) -> bool:
        return typer.confirm(message, default = self.confirm_default)

    def ask(self, message: str, default: str) -> str:
        return typer.prompt(message, default = default)


class ConfirmationGate:
    """Run an action directly, or only after the operator agrees to overwrite.

    The gate itself never touches the file system; all side effects live in
    the ``on_proceed`` callback.
    """

    def __init__(self, prompter: Prompter, log_pad: str = "==> ") -> None:
        self.prompter = prompter
        self.log_pad = log_pad

    def __call__(
            self, target_exists: bool, prompt_message: str, on_proceed: Callable[[], object], *,
            target: str, ) -> Outcome:
        if not target_exists:
            on_proceed()
            return Outcome.PROCEEDED

        log.warning(f"{target} already exists")
        if self.prompter.confirm(prompt_message):
            on_proceed()
            return Outcome.PROCEEDED

        log.warning(f"{self.log_pad}OK, not overwriting {target}")
        return Outcome.SKIPPED
