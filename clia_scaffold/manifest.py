"""Read and update the project manifest (``package.json``).

The manifest is an arbitrary JSON object.  Only the reserved top-level field
is ever added or replaced; every other field keeps its value and position.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .exceptions import ManifestNotFoundError, ManifestParseError
from .file_generator import write_file
from .settings import ScaffoldSettings

log = logging.getLogger(__name__)

__all__ = ["Requirements", "ReservedField", "manifest_path", "require", "load", "has_reserved_field", "with_reserved_field_set",
        "persist", ]

ManifestDocument = dict[str, Any]


class Requirements(BaseModel):
    enabled: bool = True
    executables: list[str] = Field(default_factory = list)


class ReservedField(BaseModel):
    """Shape of the tool-owned manifest entry."""

    help: str
    requirements: Requirements = Field(default_factory = Requirements)


def manifest_path(root_dir: Path, settings: ScaffoldSettings) -> Path:
    return root_dir / settings.manifest_filename


def require(root_dir: Path, settings: ScaffoldSettings) -> Path:
    """Return the manifest path, raising ManifestNotFoundError when it is absent."""
    path = manifest_path(root_dir, settings)
    if not path.is_file():
        raise ManifestNotFoundError(
                f"No {settings.manifest_filename} found in {root_dir}, are you trying to init "
                f"in a directory that isn't a node project?"
                )
    return path


def load(root_dir: Path, settings: ScaffoldSettings) -> ManifestDocument:
    """Load the manifest found at *root_dir*.

    Raises
    ------
    ManifestNotFoundError
        No manifest file exists at the root.
    ManifestParseError
        The file is unreadable, not valid JSON, or not a JSON object.
    """
    path = require(root_dir, settings)
    try:
        doc = json.loads(path.read_text(encoding = "utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestParseError(f"Could not parse {path}: {exc}") from exc
    if not isinstance(doc, dict):
        raise ManifestParseError(f"{path} must contain a JSON object, got {type(doc).__name__}")
    return doc


def has_reserved_field(doc: ManifestDocument, settings: ScaffoldSettings) -> bool:
    return settings.reserved_field in doc


def default_reserved_field(settings: ScaffoldSettings) -> dict[str, Any]:
    return ReservedField(help = settings.help_text).model_dump()


def with_reserved_field_set(doc: ManifestDocument, settings: ScaffoldSettings) -> ManifestDocument:
    """Return a copy of *doc* whose reserved field holds the default content.

    The input is left untouched.  An existing reserved field is replaced in
    place so key order is stable across repeated merges.
    """
    updated = dict(doc)
    updated[settings.reserved_field] = default_reserved_field(settings)
    return updated


def persist(root_dir: Path, doc: ManifestDocument, settings: ScaffoldSettings) -> Path:
    """Serialize *doc* with 2-space indentation and replace the manifest."""
    path = manifest_path(root_dir, settings)
    text = json.dumps(doc, indent = 2, ensure_ascii = False) + "\n"
    log.debug(f"Writing {len(text)} bytes to {path}")
    return write_file(path, text)
