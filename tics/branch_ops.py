"""Branches: creation, switching and merging of CAD commits."""

from __future__ import annotations

import hashlib
import logging
import shutil
import time
from pathlib import Path

from tics.file_ops import MAX_PATH, TICS_DIR, PathLike, TicsError, copy_file, create_dir
from tics.repo_ops import get_current_branch

_log = logging.getLogger(__name__)

_MAX_TIMESTAMP = 63


class MergeConflictError(TicsError):
    """A merge was abandoned; ``conflicts`` holds one line per conflicting file."""

    def __init__(self, conflicts: list[str]) -> None:
        super().__init__("Error: Merge aborted due to conflicts")
        self.conflicts = list(conflicts)


def _check_branch_name(name: str, overhead: int) -> None:
    if len(name) + overhead > MAX_PATH:
        raise TicsError(f"Error: Branch name too long: {name}")


def create_branch(name: str, root: PathLike = ".") -> Path:
    """Create a branch reference and return its path."""
    _check_branch_name(name, 14)
    path = Path(root) / TICS_DIR / "refs" / name
    try:
        path.write_text(f"Branch {name} created.\n", encoding="utf-8")
    except OSError as exc:
        raise TicsError(f"Failed to create branch: {name}") from exc
    return path


def list_branches(root: PathLike = ".") -> list[str]:
    """Return the branch names in sorted order."""
    refs = Path(root) / TICS_DIR / "refs"
    try:
        return sorted(p.name for p in refs.iterdir())
    except OSError:
        return []


def checkout_branch(name: str, root: PathLike = ".") -> None:
    """Make ``name`` the current branch."""
    _check_branch_name(name, 14)
    tics = Path(root) / TICS_DIR
    if not (tics / "refs" / name).exists():
        raise TicsError(f"Branch {name} does not exist.")
    try:
        (tics / "config").write_text(
            f'{{ "branch": "{name}", "version": "0.3.1" }}\n', encoding="utf-8"
        )
    except OSError as exc:
        raise TicsError(f"Failed to switch to branch: {name}") from exc


def get_latest_commit(branch: str, root: PathLike = ".") -> str:
    """Return the newest commit timestamp of ``branch``, or ``""`` if it has none."""
    _check_branch_name(branch, 16)
    branch_dir = Path(root) / TICS_DIR / "objects" / branch
    try:
        names = [p.name for p in branch_dir.iterdir() if p.is_dir()]
    except OSError:
        return ""
    latest = ""
    for name in names:
        if len(name) > _MAX_TIMESTAMP:
            _log.warning("Error: Timestamp too long: %s", name)
            continue
        latest = max(latest, name)
    return latest


def _is_cad_model(name: str) -> bool:
    return ".stl" in name and ".meta" not in name


def _cad_models(directory: Path) -> list[Path]:
    return sorted(p for p in directory.iterdir() if p.is_file() and _is_cad_model(p.name))


def _copy_model(src_dir: Path, dest_dir: Path, name: str, failure: str) -> None:
    dest_stl = dest_dir / name
    dest_meta = dest_dir / f"{name}.meta"
    try:
        copy_file(src_dir / name, dest_stl)
        copy_file(src_dir / f"{name}.meta", dest_meta)
    except TicsError as exc:
        _log.warning("%s", exc)
    if not (dest_stl.exists() and dest_meta.exists()):
        _log.warning(failure, name)


def merge_branch(branch_name: str, root: PathLike = ".") -> str:
    """Merge the latest commit of ``branch_name`` into the current branch.

    Returns the timestamp of the merge commit. Raises ``MergeConflictError``
    and discards the half-built commit when any file conflicts.
    """
    tics = Path(root) / TICS_DIR
    current = get_current_branch(root)
    if current == branch_name:
        raise TicsError(f"Cannot merge branch {branch_name} into itself.")
    if not (tics / "refs" / branch_name).exists():
        raise TicsError(f"Branch {branch_name} does not exist.")

    source_ts = get_latest_commit(branch_name, root)
    if not source_ts:
        raise TicsError(f"Error: No commits found in branch {branch_name}")
    current_ts = get_latest_commit(current, root)
    if not current_ts:
        _log.warning("Warning: No prior commits in %s, proceeding with merge", current)

    stamp = time.strftime("%Y%m%d%H%M%S", time.localtime())
    commit_dir = tics / "objects" / current / stamp
    create_dir(commit_dir)
    if not commit_dir.exists():
        raise TicsError(f"Error: Failed to create commit directory {commit_dir}")

    source_dir = tics / "objects" / branch_name / source_ts
    try:
        source_models = _cad_models(source_dir)
    except OSError as exc:
        raise TicsError(
            f"Error: Could not open source commit directory {source_dir}"
        ) from exc

    current_dir = tics / "objects" / current / current_ts if current_ts else None
    conflicts: list[str] = []

    for model in source_models:
        name = model.name
        source_meta = source_dir / f"{name}.meta"
        if not source_meta.exists():
            _log.warning("Warning: Source metadata missing for %s", name)
            continue
        if current_dir is not None:
            current_meta = current_dir / f"{name}.meta"
            if current_meta.exists():
                try:
                    same = (
                        hashlib.md5(current_meta.read_bytes()).digest()
                        == hashlib.md5(source_meta.read_bytes()).digest()
                    )
                except OSError:
                    conflicts.append(f"CONFLICT: Could not open metadata files for {name}")
                    continue
                if not same:
                    conflicts.append(f"CONFLICT: Metadata differences for {name}")
                    continue
        _copy_model(
            source_dir,
            commit_dir,
            name,
            "Warning: Failed to copy %s or its metadata to commit directory",
        )

    if current_dir is not None:
        try:
            current_models = _cad_models(current_dir)
        except OSError:
            current_models = []
        for model in current_models:
            name = model.name
            if not (source_dir / name).exists():
                conflicts.append(
                    f"CONFLICT: File {name} exists in {current} but not in {branch_name}"
                )
                continue
            if not (commit_dir / name).exists():
                _copy_model(
                    current_dir,
                    commit_dir,
                    name,
                    "Warning: Failed to copy %s or its metadata from current branch",
                )

    if conflicts:
        shutil.rmtree(commit_dir, ignore_errors=True)
        raise MergeConflictError(conflicts)

    try:
        with open(tics / "log.txt", "a", encoding="utf-8") as fh:
            fh.write(f"[{stamp}] Merge: Merged branch {branch_name} into {current}\n")
    except OSError:
        pass
    return stamp