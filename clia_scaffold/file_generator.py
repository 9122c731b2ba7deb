"""Low-level file-system helpers used by the *clia_scaffold* package.

The goal of this module is to provide **pure, synchronous** helpers that
write files, read the bundled template assets, create directories and set
file modes.  Writers return a :class:`pathlib.Path` pointing to the
created file and raise a ``FileCreationError`` (defined in
:mod:`clia_scaffold.exceptions`) on failure.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from importlib import resources
from pathlib import Path

from .exceptions import FileCreationError

__all__ = ["write_file", "write_bytes", "read_asset", "ensure_directory", "make_executable", "EXECUTABLE_MODE", ]

EXECUTABLE_MODE = 0o755

_ASSET_PACKAGE = "clia_scaffold"


def _default_mode() -> int:
    """Mode a plain ``open()`` would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_bytes(target: Path | str, content: bytes) -> Path:
    """Write *content* to *target* atomically.

    The function creates any missing parent directories, writes the
    content to a uniquely named temporary sibling file first, and then
    atomically moves the temporary file to ``target``.  This prevents
    partial writes if the process is interrupted, and never touches
    other files next to ``target``.

    Parameters
    ----------
    target:
        Destination file path.
    content:
        Raw bytes to write.
    Returns
    -------
    Path
        The absolute path of the written file.
    """

    target = Path(target).expanduser().resolve()
    tmp: Path | None = None
    try:
        target.parent.mkdir(parents = True, exist_ok = True)
        fd, tmp_name = tempfile.mkstemp(dir = target.parent, prefix = f".{target.name}.", suffix = ".tmp")
        tmp = Path(tmp_name)
        with os.fdopen(fd, "wb") as fp:
            fp.write(content)
        os.chmod(tmp, _default_mode())
        tmp.replace(target)
        return target
    except OSError as exc:
        if tmp is not None:
            with contextlib.suppress(OSError):
                tmp.unlink()
        raise FileCreationError(f"Failed to write file {target!s}: {exc}") from exc


def write_file(target: Path | str, content: str, *, encoding: str = "utf-8") -> Path:
    """Text variant of :func:`write_bytes`."""

    return write_bytes(target, content.encode(encoding))


def read_asset(*parts: str) -> bytes:
    """Return the raw bytes of a bundled template under ``assets/``.

    Templates are opaque: they are copied byte for byte and never
    rendered.
    """

    asset = resources.files(_ASSET_PACKAGE).joinpath("assets", *parts)
    try:
        return asset.read_bytes()
    except OSError as exc:
        raise FileCreationError(f"Bundled asset {'/'.join(parts)} is unavailable: {exc}") from exc


def ensure_directory(path: Path | str) -> bool:
    """Create *path* if it does not exist.

    Returns ``True`` when the directory was created, ``False`` when it was
    already there.
    """

    path = Path(path)
    if path.is_dir():
        return False
    try:
        path.mkdir(parents = True)
    except OSError as exc:
        raise FileCreationError(f"Failed to create directory {path}: {exc}") from exc
    return True


def make_executable(path: Path | str, mode: int = EXECUTABLE_MODE) -> Path:
    """Set *path* to ``rwxr-xr-x`` (or *mode*)."""

    path = Path(path)
    try:
        os.chmod(path, mode)
    except OSError as exc:
        raise FileCreationError(f"Failed to chmod {path}: {exc}") from exc
    return path
