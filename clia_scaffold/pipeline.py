"""Project context resolution and the sequential step executor.

``run_init`` is what the ``init`` command calls:

1. resolve the target directory and fail fast when it has no manifest,
2. settle the entrypoint name (flag or prompt),
3. run :func:`~clia_scaffold.steps.default_steps` one after another.

A declined overwrite only marks that step as skipped.  Any other failure
stops the run with a :class:`~clia_scaffold.exceptions.StepError`; steps that
already ran stay applied, and re-running is the way to recover.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from . import manifest
from .exceptions import CliaError, InvalidEntrypointNameError, StepError
from .gate import ConfirmationGate, Outcome, Prompter
from .settings import ScaffoldSettings
from .steps import COMMANDS_DIR, CONFIG_DIR, ScaffoldingStep, default_steps

log = logging.getLogger(__name__)

__all__ = ["ProjectContext", "StepResult", "PipelineReport", "Pipeline", "resolve_root", "precheck",
        "validate_entrypoint_name", "resolve_context", "run_init", "ENTRYPOINT_PROMPT", ]

ENTRYPOINT_PROMPT = "What would you like the cli command entrypoint to be named?"


class ProjectContext(BaseModel):
    """Everything a step needs to know about the project being initialized."""

    model_config = ConfigDict(frozen = True)

    root_dir: Path
    entrypoint_name: str
    manifest: dict[str, Any]
    settings: ScaffoldSettings = Field(default_factory = ScaffoldSettings)


class StepResult(BaseModel):
    step: str
    outcome: Outcome


class PipelineReport(BaseModel):
    results: list[StepResult] = Field(default_factory = list)

    def record(self, step: str, outcome: Outcome) -> None:
        self.results.append(StepResult(step = step, outcome = outcome))

    @property
    def proceeded(self) -> list[str]:
        return [r.step for r in self.results if r.outcome is Outcome.PROCEEDED]

    @property
    def skipped(self) -> list[str]:
        return [r.step for r in self.results if r.outcome is Outcome.SKIPPED]


class Pipeline:
    """Run scaffolding steps strictly in order."""

    def __init__(self, steps: Iterable[ScaffoldingStep], gate: ConfirmationGate) -> None:
        self.steps = list(steps)
        self.gate = gate

    def run(self, ctx: ProjectContext) -> PipelineReport:
        report = PipelineReport()
        for step in self.steps:
            log.info(f"{ctx.settings.log_pad}{step.announcement(ctx)}")
            try:
                outcome = step.run(ctx, self.gate)
            except (CliaError, OSError) as exc:
                target = step.target(ctx)
                log.error(f"Step '{step.name}' failed for {target}: {exc}")
                raise StepError(step.name, target, str(exc)) from exc
            log.debug(f"Step '{step.name}' {outcome.value}")
            report.record(step.name, outcome)
        return report


def resolve_root(directory: str | Path | None) -> Path:
    if directory is None:
        return Path.cwd().resolve()
    return Path(directory).expanduser().resolve()


def precheck(root_dir: Path, settings: ScaffoldSettings) -> None:
    """Refuse to touch a directory that has no manifest."""
    manifest.require(root_dir, settings)


def validate_entrypoint_name(name: str, settings: ScaffoldSettings | None = None) -> str:
    settings = settings or ScaffoldSettings()
    name = name.strip()
    if not name:
        raise InvalidEntrypointNameError("The entrypoint name must not be empty")
    if name in {".", ".."} or "/" in name or (os.altsep and os.altsep in name) or os.sep in name:
        raise InvalidEntrypointNameError(
                f"'{name}' is not a valid entrypoint name, it must be a plain file name"
                )
    reserved = {settings.manifest_filename, CONFIG_DIR, COMMANDS_DIR}
    if name in reserved:
        raise InvalidEntrypointNameError(
                f"'{name}' is already used by the scaffold, pick another entrypoint name"
                )
    return name


def resolve_context(
        directory: str | Path | None, entrypoint_name: str | None, prompter: Prompter,
        settings: ScaffoldSettings | None = None, ) -> ProjectContext:
    """Build the :class:`ProjectContext` for a run.

    The precondition and the manifest parse both happen before the operator
    is asked anything, so a bad target never gets a prompt.
    """
    settings = settings or ScaffoldSettings()
    root_dir = resolve_root(directory)
    precheck(root_dir, settings)
    doc = manifest.load(root_dir, settings)
    log.info(f"Initializing project in {root_dir} for {settings.reserved_field}")

    if entrypoint_name is None:
        entrypoint_name = prompter.ask(ENTRYPOINT_PROMPT, settings.default_entrypoint_name)
    entrypoint_name = validate_entrypoint_name(entrypoint_name, settings)

    return ProjectContext(root_dir = root_dir, entrypoint_name = entrypoint_name, manifest = doc, settings = settings, )


def run_init(
        directory: str | Path | None = None, entrypoint_name: str | None = None, *, prompter: Prompter,
        settings: ScaffoldSettings | None = None, steps: Iterable[ScaffoldingStep] | None = None, ) -> PipelineReport:
    """Initialize *directory* with clia resources.

    Parameters
    ----------
    directory:
        Project root; defaults to the current working directory.
    entrypoint_name:
        Entrypoint file name.  ``None`` asks the operator.
    prompter:
        Source of answers for the name question and overwrite confirmations.
    settings:
        Tool settings, defaults when omitted.
    steps:
        Override the default step list (tests only).

    Returns
    -------
    PipelineReport
        Outcome of every step, in order.
    """
    settings = settings or ScaffoldSettings()
    ctx = resolve_context(directory, entrypoint_name, prompter, settings)
    gate = ConfirmationGate(prompter, log_pad = settings.log_pad)
    pipeline = Pipeline(default_steps() if steps is None else steps, gate)
    return pipeline.run(ctx)
