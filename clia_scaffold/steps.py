"""Scaffolding steps run by :class:`clia_scaffold.pipeline.Pipeline`.

Each step closes over nothing but the :class:`ProjectContext` it is handed,
re-checks the file system every run and is therefore safe to repeat.
Directory steps never prompt; file and manifest steps go through the
:class:`~clia_scaffold.gate.ConfirmationGate`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from . import manifest
from .file_generator import ensure_directory, make_executable, read_asset, write_bytes, write_file
from .gate import ConfirmationGate, Outcome

if TYPE_CHECKING:
    from .pipeline import ProjectContext

__all__ = ["ScaffoldingStep", "GatedStep", "EnsureConfigDir", "DefaultConfigFile", "ManifestMerge", "EntrypointFile",
        "EnsureCommandsDir", "CommandFile", "STARTER_COMMANDS", "default_steps", ]

CONFIG_DIR = "config"
COMMANDS_DIR = "commands"
LOCAL_CONFIG_NAME = "local.js"
DEFAULT_CONFIG_NAME = "default.js"
DEFAULT_CONFIG_CONTENT = "module.exports = {};"
ENTRYPOINT_ASSET = "clia.js"
COMMAND_SUFFIX = ".js"
STARTER_COMMANDS = ("use", "add-requirement")


def _label(ctx: ProjectContext, path: Path) -> str:
    """Project-relative path rendered as ``/config/default.js``."""
    return "/" + path.relative_to(ctx.root_dir).as_posix()


class ScaffoldingStep:
    """A named unit of work bound to a target path."""

    name: str = "step"

    def target(self, ctx: ProjectContext) -> Path:
        raise NotImplementedError

    def announcement(self, ctx: ProjectContext) -> str:
        return f"{self.name} ({_label(ctx, self.target(ctx))})"

    def run(self, ctx: ProjectContext, gate: ConfirmationGate) -> Outcome:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class GatedStep(ScaffoldingStep):
    """Step whose write needs confirmation when its target already exists."""

    prompt_message: str = "Do you want to overwrite it with the clia default one?"

    def exists(self, ctx: ProjectContext) -> bool:
        return self.target(ctx).exists()

    def apply(self, ctx: ProjectContext) -> None:
        raise NotImplementedError

    def subject(self, ctx: ProjectContext) -> str:
        return _label(ctx, self.target(ctx))

    def run(self, ctx: ProjectContext, gate: ConfirmationGate) -> Outcome:
        return gate(
                self.exists(ctx), self.prompt_message, lambda: self.apply(ctx), target = self.subject(ctx), )


class EnsureConfigDir(ScaffoldingStep):
    """Create ``config/`` and its ``.gitignore``; neither is ever overwritten."""

    name = "config-dir"

    def target(self, ctx: ProjectContext) -> Path:
        return ctx.root_dir / CONFIG_DIR

    def announcement(self, ctx: ProjectContext) -> str:
        return f"ensuring /{CONFIG_DIR} directory exists"

    def run(self, ctx: ProjectContext, gate: ConfirmationGate) -> Outcome:
        config_dir = self.target(ctx)
        ensure_directory(config_dir)
        gitignore = config_dir / ".gitignore"
        if not gitignore.exists():
            write_file(gitignore, LOCAL_CONFIG_NAME)
        return Outcome.PROCEEDED


class DefaultConfigFile(GatedStep):
    name = "default-config"
    prompt_message = "Do you want to overwrite it with the clia default?"

    def target(self, ctx: ProjectContext) -> Path:
        return ctx.root_dir / CONFIG_DIR / DEFAULT_CONFIG_NAME

    def announcement(self, ctx: ProjectContext) -> str:
        return f"adding default config at {_label(ctx, self.target(ctx))}"

    def apply(self, ctx: ProjectContext) -> None:
        write_file(self.target(ctx), DEFAULT_CONFIG_CONTENT)


class ManifestMerge(GatedStep):
    """Add (or reset) the reserved field in the manifest."""

    name = "manifest"
    prompt_message = "Do you want to overwrite the property with clia defaults?"

    def target(self, ctx: ProjectContext) -> Path:
        return manifest.manifest_path(ctx.root_dir, ctx.settings)

    def announcement(self, ctx: ProjectContext) -> str:
        return (f"Adding the {ctx.settings.reserved_field} property and related meta to your "
                f"{ctx.settings.manifest_filename}")

    def exists(self, ctx: ProjectContext) -> bool:
        return manifest.has_reserved_field(ctx.manifest, ctx.settings)

    def subject(self, ctx: ProjectContext) -> str:
        return f"{ctx.settings.reserved_field} property in {ctx.settings.manifest_filename}"

    def apply(self, ctx: ProjectContext) -> None:
        updated = manifest.with_reserved_field_set(ctx.manifest, ctx.settings)
        manifest.persist(ctx.root_dir, updated, ctx.settings)


class EntrypointFile(GatedStep):
    """Copy the entrypoint template to the project root and mark it executable."""

    name = "entrypoint"

    def target(self, ctx: ProjectContext) -> Path:
        return ctx.root_dir / ctx.entrypoint_name

    def announcement(self, ctx: ProjectContext) -> str:
        return "Copying cli entrypoint command to the root of your project"

    def apply(self, ctx: ProjectContext) -> None:
        path = write_bytes(self.target(ctx), read_asset(ENTRYPOINT_ASSET))
        make_executable(path)


class EnsureCommandsDir(ScaffoldingStep):
    name = "commands-dir"

    def target(self, ctx: ProjectContext) -> Path:
        return ctx.root_dir / COMMANDS_DIR

    def announcement(self, ctx: ProjectContext) -> str:
        return "Ensuring commands directory exists"

    def run(self, ctx: ProjectContext, gate: ConfirmationGate) -> Outcome:
        ensure_directory(self.target(ctx))
        return Outcome.PROCEEDED


class CommandFile(GatedStep):
    """Copy one starter command template into ``commands/``."""

    def __init__(self, command: str) -> None:
        self.command = command
        self.name = f"command:{command}"

    @property
    def filename(self) -> str:
        return f"{self.command}{COMMAND_SUFFIX}"

    def target(self, ctx: ProjectContext) -> Path:
        return ctx.root_dir / COMMANDS_DIR / self.filename

    def announcement(self, ctx: ProjectContext) -> str:
        return f"Adding {_label(ctx, self.target(ctx))} command"

    def apply(self, ctx: ProjectContext) -> None:
        write_bytes(self.target(ctx), read_asset(COMMANDS_DIR, self.filename))


def default_steps() -> list[ScaffoldingStep]:
    """Fresh step objects in the order ``init`` runs them."""
    return [EnsureConfigDir(), DefaultConfigFile(), ManifestMerge(), EntrypointFile(), EnsureCommandsDir(),
            *(CommandFile(command) for command in STARTER_COMMANDS), ]
