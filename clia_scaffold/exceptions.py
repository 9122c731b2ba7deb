"""Custom exception hierarchy for the clia_scaffold package.

All public functions raise :class:`CliaError` (or a subclass) so
that callers can catch a single exception type.  This also allows the
CLI to catch all exceptions and print a user-friendly message.

A declined overwrite is *not* an error and never raises.
"""

from __future__ import annotations

from pathlib import Path


class CliaError(RuntimeError):
    """Base exception for all clia-scaffold related errors."""


class ManifestNotFoundError(CliaError):
    """Raised when the project root holds no manifest file."""


class ManifestParseError(CliaError):
    """Raised when the manifest exists but is not a JSON object."""


class FileCreationError(CliaError):
    """Raised when a file or directory cannot be created or written to."""


class InvalidEntrypointNameError(CliaError):
    """Raised when the chosen entrypoint name cannot be used as a file name."""


class SettingsError(CliaError):
    """Raised when a settings file is missing or invalid."""


class StepError(CliaError):
    """Raised by the pipeline when a scaffolding step fails.

    Carries the failing step's name and target path; the original error is
    chained as ``__cause__``.
    """

    def __init__(self, step: str, target: Path, message: str) -> None:
        super().__init__(f"Step '{step}' failed for {target}: {message}")
        self.step = step
        self.target = target
