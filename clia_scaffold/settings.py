"""Configuration for the scaffolding run.

Settings have sensible defaults and can optionally be overridden from a JSON
file, mirroring how the rest of the tool is configured.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import SettingsError

log = logging.getLogger(__name__)

__all__ = ["ScaffoldSettings", "load_settings", "SETTINGS_FILENAME", ]

SETTINGS_FILENAME = "clia_scaffold.json"

DEFAULT_HELP_TEXT = ("For more info on setting values here, see "
                     "https://github.com/rockholla/nodejs-clia#packagejson-cliarequirements")


class ScaffoldSettings(BaseModel):
    """Tool-level knobs shared by every step of a run."""

    model_config = ConfigDict(frozen = True, extra = "forbid")

    manifest_filename: str = Field(
            "package.json", description = "Manifest file expected at the project root.", )
    reserved_field: str = Field(
            "clia", description = "Top-level manifest key owned by this tool.", )
    help_text: str = Field(
            DEFAULT_HELP_TEXT, description = "Help string stored in the reserved field.", )
    default_entrypoint_name: str = Field(
            "clia", description = "Entrypoint name offered when none is given.", )
    log_pad: str = Field("==> ", description = "Prefix for step announcements.")


def load_settings(config_path: str | Path | None = None) -> ScaffoldSettings:
    """Load settings from a JSON file, or return the defaults.

    Parameters
    ----------
    config_path:
        Path to the JSON settings file.  If the path points to a
        directory, ``clia_scaffold.json`` inside it is used.  ``None``
        returns the defaults.

    Returns
    -------
    ScaffoldSettings
        Validated, immutable settings.
    """
    if config_path is None:
        return ScaffoldSettings()

    cfg_file = Path(config_path).expanduser()
    if cfg_file.is_dir():
        cfg_file = cfg_file / SETTINGS_FILENAME

    if not cfg_file.is_file():
        raise SettingsError(f"Settings file not found: {cfg_file}")

    try:
        with cfg_file.open("r", encoding = "utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise SettingsError(f"Failed to read settings {cfg_file}: {exc}") from exc

    if not isinstance(raw, dict):
        raise SettingsError(f"Settings file {cfg_file} must contain a JSON object")

    try:
        settings = ScaffoldSettings(**raw)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings in {cfg_file}: {exc}") from exc

    log.debug(f"Loaded settings from {cfg_file}")
    return settings
