"""Top-level package for *clia_scaffold*."""

from __future__ import annotations

from .exceptions import (CliaError, FileCreationError, InvalidEntrypointNameError, ManifestNotFoundError,
                         ManifestParseError, SettingsError, StepError, )
from .gate import ConfirmationGate, Outcome, Prompter, TyperPrompter
from .pipeline import Pipeline, PipelineReport, ProjectContext, run_init
from .settings import ScaffoldSettings, load_settings

__all__ = ["run_init", "Pipeline", "PipelineReport", "ProjectContext", "ConfirmationGate", "Outcome", "Prompter",
        "TyperPrompter", "ScaffoldSettings", "load_settings", "CliaError", "FileCreationError",
        "InvalidEntrypointNameError", "ManifestNotFoundError", "ManifestParseError", "SettingsError", "StepError", ]
