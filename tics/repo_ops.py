"""Repository creation, branch lookup and status reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from tics.file_ops import TICS_DIR, PathLike, create_dir, is_meta_file

_BRANCH_KEY = '"branch": "'
_SUBDIRS = ("objects", "refs", "stash", "stage", "tags", "history")


def init_repo(repo_name: PathLike) -> Path:
    """Create an empty repository under ``repo_name`` and return its ``.tics`` path."""
    base = Path(repo_name)
    create_dir(base)
    tics = base / TICS_DIR
    create_dir(tics)
    for sub in _SUBDIRS:
        create_dir(tics / sub)

    (tics / "log.txt").write_text("", encoding="utf-8")
    (tics / "stash" / "log.txt").write_text("", encoding="utf-8")
    (tics / "config").write_text(
        '{ "branch": "main", "version": "0.3.1" }\n', encoding="utf-8"
    )
    (tics / "refs" / "main").write_text("Branch main created.\n", encoding="utf-8")
    return tics


def get_current_branch(root: PathLike = ".") -> str:
    """Return the branch named in the config, ``unknown`` if there is no config."""
    config = Path(root) / TICS_DIR / "config"
    try:
        with open(config, encoding="utf-8") as fh:
            line = fh.readline()
    except OSError:
        return "unknown"
    start = line.find(_BRANCH_KEY)
    if start < 0:
        return ""
    rest = line[start + len(_BRANCH_KEY):]
    end = rest.find('"')
    if end < 0:
        return ""
    return rest[:end]


def _regular_files(directory: Path) -> list[str]:
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return []
    return [p.name for p in entries if p.is_file() and not is_meta_file(p.name)]


@dataclass
class RepoStatus:
    """Staged and committed files of the current branch."""

    branch: str
    staged: list[str] = field(default_factory=list)
    committed: list[str] = field(default_factory=list)

    def render(self) -> str:
        lines = ["== tics Status ==", "Staged files:"]
        lines += [f"  {name}" for name in self.staged] or ["  (none)"]
        lines.append("Committed files:")
        lines += [f"  {name}" for name in self.committed] or ["  (none)"]
        lines += ["Current branch:", f"  {self.branch}"]
        return "\n".join(lines) + "\n"


def status(root: PathLike = ".") -> RepoStatus:
    """Collect the staged files and every file committed on the current branch."""
    tics = Path(root) / TICS_DIR
    branch = get_current_branch(root)
    staged = _regular_files(tics / "stage")

    committed: list[str] = []
    branch_dir = tics / "objects" / branch
    try:
        commits = sorted(p for p in branch_dir.iterdir() if p.is_dir())
    except OSError:
        commits = []
    for commit_dir in commits:
        committed.extend(_regular_files(commit_dir))

    return RepoStatus(branch=branch, staged=staged, committed=committed)