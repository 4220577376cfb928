"""Stashing staged changes away and bringing them back."""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from tics.file_ops import TICS_DIR, PathLike, TicsError, copy_file, create_dir


def _files(directory: Path) -> list[Path]:
    try:
        return [p for p in directory.iterdir() if p.is_file()]
    except OSError:
        return []


def stash_push(root: PathLike = ".") -> Path:
    """Move the staged files into a new stash and return its directory."""
    tics = Path(root) / TICS_DIR
    stage = tics / "stage"
    stamp = time.strftime("%Y%m%d%H%M%S", time.localtime())
    stash_dir = create_dir(tics / "stash" / stamp)

    staged = _files(stage)
    for src in staged:
        copy_file(src, stash_dir / src.name)

    with open(tics / "stash" / "log.txt", "a", encoding="utf-8") as fh:
        fh.write(f"[{stamp}] Stashed changes\n")

    for src in staged:
        src.unlink(missing_ok=True)
    return stash_dir


def stash_pop(root: PathLike = ".") -> str:
    """Restore the most recent stash into the stage and return its name."""
    tics = Path(root) / TICS_DIR
    stash_root = tics / "stash"
    try:
        names = [p.name for p in stash_root.iterdir() if p.is_dir()]
    except OSError as exc:
        raise TicsError("No stashed changes found.") from exc
    if not names:
        raise TicsError("No stashed changes found.")

    latest = max(names)
    latest_dir = stash_root / latest
    stage = tics / "stage"
    for src in _files(latest_dir):
        copy_file(src, stage / src.name)
    shutil.rmtree(latest_dir, ignore_errors=True)
    return latest


def stash_list(root: PathLike = ".") -> list[str]:
    """Return the lines of the stash log."""
    log = Path(root) / TICS_DIR / "stash" / "log.txt"
    try:
        return log.read_text(encoding="utf-8").splitlines()
    except OSError:
        return []