"""Staging, committing, history and restoring of files."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

from tics.branch_ops import get_latest_commit
from tics.file_ops import (
    MAX_PATH,
    TICS_DIR,
    PathLike,
    TicsError,
    copy_file,
    create_dir,
    is_meta_file,
)
from tics.repo_ops import get_current_branch


@dataclass(frozen=True)
class LineDiff:
    """A line that differs between the working and the staged file."""

    line: int
    working: str
    staged: str


def _stage_files(root: PathLike) -> list[Path]:
    stage = Path(root) / TICS_DIR / "stage"
    try:
        return sorted(p for p in stage.iterdir() if p.is_file())
    except OSError as exc:
        raise TicsError(f"Error opening .tics/stage: {exc.strerror}") from exc


def _read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8", errors="replace").splitlines()


def _split_lines(data: bytes) -> list[str]:
    parts = data.decode("utf-8", errors="replace").split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def copy_staged_files(dest_dir: PathLike, root: PathLike = ".") -> list[str]:
    """Copy every staged file into ``dest_dir`` and return their names."""
    dest = Path(root) / dest_dir
    names = []
    for src in _stage_files(root):
        copy_file(src, dest / src.name)
        names.append(src.name)
    return names


def commit(message: str, root: PathLike = ".") -> Path:
    """Record the staged files as a new commit and return its directory."""
    tics = Path(root) / TICS_DIR
    stamp = time.strftime("%Y%m%d%H%M%S", time.localtime())
    time.sleep(0.1)

    branch = get_current_branch(root)
    commit_dir = create_dir(tics / "objects" / branch / stamp)
    staged = copy_staged_files(commit_dir, root)

    history = create_dir(tics / "history")
    for name in staged:
        if is_meta_file(name):
            continue
        with open(history / f"{name}.history", "a", encoding="utf-8") as fh:
            fh.write(f"[{stamp}] {message} ({branch})\n")

    with open(tics / "log.txt", "a", encoding="utf-8") as fh:
        fh.write(f"[{stamp}] Commit: {message} ({branch})\n")

    for name in staged:
        (tics / "stage" / name).unlink(missing_ok=True)
    return commit_dir


def show_log(root: PathLike = ".") -> list[str]:
    """Return the lines of the repository log."""
    try:
        return _read_lines(Path(root) / TICS_DIR / "log.txt")
    except OSError as exc:
        raise TicsError("No commits yet.") from exc


def show_file_history(filename: str, root: PathLike = ".") -> list[str]:
    """Return the commit history lines recorded for ``filename``."""
    path = Path(root) / TICS_DIR / "history" / f"{filename}.history"
    try:
        return _read_lines(path)
    except OSError as exc:
        raise TicsError(f"No history for {filename}") from exc


def add_file(filename: str, root: PathLike = ".") -> Path:
    """Copy a working file into the stage and return the staged path."""
    if len(filename) + 26 > MAX_PATH:
        raise TicsError(f"Error: File path too long: {filename}")
    base = Path(root)
    dest = base / TICS_DIR / "stage" / filename
    try:
        copy_file(base / filename, dest)
    except TicsError as exc:
        raise TicsError(f"Failed to stage: {filename}") from exc
    return dest


def diff_file(filename: str, root: PathLike = ".") -> list[LineDiff]:
    """Compare a working file with its staged copy, line by line."""
    base = Path(root)
    try:
        working = _split_lines((base / filename).read_bytes())
        staged = _split_lines((base / TICS_DIR / "stage" / filename).read_bytes())
    except OSError as exc:
        raise TicsError("Either working file or staged file is missing.") from exc
    return [
        LineDiff(number, left, right)
        for number, (left, right) in enumerate(zip(working, staged), start=1)
        if left != right
    ]


def restore_file(filename: str, root: PathLike = ".") -> Path:
    """Overwrite a working file with its version from the latest commit."""
    base = Path(root)
    branch = get_current_branch(root)
    latest = get_latest_commit(branch, root)
    src = base / TICS_DIR / "objects" / branch / latest / filename
    if not latest or not src.exists():
        raise TicsError(f"No committed version of {filename} found.")
    dest = base / filename
    copy_file(src, dest)
    return dest