"""Helpers for resolving output directories and image references.

Exporters write their final files into an explicit ``output_dir``. Scratch
files (the HTML page handed to the headless browser for PDF printing) go to
a ``.sd_tmp`` sub-directory, or to :pyfunc:`tempfile.mkdtemp` when the
output directory is not writable. The scratch directory is removed at
interpreter exit unless ``keep_tmp`` is set.
"""
from __future__ import annotations

import atexit
import errno
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional, Tuple


__all__ = ["prepare_workspace", "resolve_asset", "is_remote", "with_suffix"]

REMOTE_PREFIXES = ("http://", "https://", "data:")

SCRATCH_DIR_NAME = ".sd_tmp"
_UNWRITABLE = (errno.EACCES, errno.EROFS)


def _make_scratch_dir(out_path: Path) -> Tuple[Path, bool]:
    """Return ``(scratch_dir, inside_output_dir)``."""
    scratch = out_path / SCRATCH_DIR_NAME
    try:
        scratch.mkdir(exist_ok=True)
    except OSError as exc:
        if exc.errno not in _UNWRITABLE:
            raise
        return Path(tempfile.mkdtemp(prefix="slidedeck_tmp_")), False
    return scratch, True


def prepare_workspace(output_dir: str | Path, *, keep_tmp: bool = False) -> Dict[str, Path]:
    """Create *output_dir* and a scratch directory for the PDF print page.

    ``keep_tmp`` only applies to a scratch dir inside *output_dir*; a
    system temp fallback is always removed at exit.

    Returns
    -------
    dict with keys ``output_dir`` and ``tmp_dir`` (absolute paths)
    """
    out_path = Path(output_dir).expanduser().resolve()
    out_path.mkdir(parents=True, exist_ok=True)

    tmp_path, inside = _make_scratch_dir(out_path)
    if not (keep_tmp and inside):
        atexit.register(shutil.rmtree, tmp_path, ignore_errors=True)

    return {"output_dir": out_path, "tmp_dir": tmp_path}


def is_remote(src: str) -> bool:
    return src.startswith(REMOTE_PREFIXES)


def resolve_asset(src: str, *, base_dir: Optional[Path] = None) -> str:
    """Return the resolved location of an image reference.

    Rules
    -----
    1. Remote URLs and data-URIs are returned unchanged.
    2. ``file://`` URLs are stripped to an absolute path.
    3. Relative paths are resolved against *base_dir*; without a
       *base_dir* they are returned unchanged.
    """
    if is_remote(src):
        return src

    if src.startswith("file://"):
        return str(Path(src[7:]).expanduser().resolve())

    path = Path(src).expanduser()
    if path.is_absolute():
        return str(path)
    if base_dir is None:
        return src
    return str((Path(base_dir) / path).resolve())


def with_suffix(output_path: str | Path, suffix: str, output_dir: Optional[Path] = None) -> Path:
    """Force *suffix* on *output_path*; bare file names land in *output_dir*."""
    path = Path(output_path)
    if path.suffix.lower() != suffix:
        path = path.with_name(path.name + suffix)
    if output_dir is not None and not path.is_absolute() and len(path.parts) == 1:
        path = Path(output_dir) / path
    return path
