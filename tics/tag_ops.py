"""Tags: named markers stored under ``.tics/tags``."""

from __future__ import annotations

import time
from pathlib import Path

from tics.file_ops import MAX_PATH, TICS_DIR, PathLike, TicsError


def create_tag(tag_name: str, root: PathLike = ".") -> Path:
    """Write a tag file recording its creation time and return its path."""
    if len(tag_name) + 14 > MAX_PATH:
        raise TicsError(f"Error: Tag name too long: {tag_name}")
    path = Path(root) / TICS_DIR / "tags" / tag_name
    stamp = time.strftime("%Y%m%d%H%M%S", time.localtime())
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(f"Tag {tag_name} created at {stamp}\n")
    except OSError as exc:
        raise TicsError(f"Failed to create tag: {tag_name}") from exc
    return path


def list_tags(root: PathLike = ".") -> list[str]:
    """Return the tag names in sorted order; empty when there is no tag store."""
    tags = Path(root) / TICS_DIR / "tags"
    try:
        return sorted(p.name for p in tags.iterdir())
    except OSError:
        return []