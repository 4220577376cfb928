"""Filesystem helpers shared by the repository commands."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Union

MAX_FILES = 256
MAX_PATH = 1024
MAX_COMMAND = 2048

TICS_DIR = ".tics"

PathLike = Union[str, "os.PathLike[str]"]


class TicsError(Exception):
    """A repository operation failed; the message is the line to report."""


def is_meta_file(filename: str) -> bool:
    """Return True for metadata companions (names containing ``.meta``)."""
    return ".meta" in filename


def create_dir(path: PathLike) -> Path:
    """Create ``path`` and any missing parents; existing entries are accepted."""
    target = Path(path)
    try:
        os.makedirs(target, mode=0o755, exist_ok=True)
    except FileExistsError:
        # An existing non-directory entry is tolerated, as mkdir's EEXIST is.
        pass
    except OSError as exc:
        raise TicsError(f"Error creating directory: {exc.strerror}") from exc
    return target


def copy_file(src: PathLike, dest: PathLike) -> None:
    """Copy the bytes of ``src`` into ``dest``, replacing its content."""
    try:
        fsrc = open(src, "rb")
    except OSError as exc:
        raise TicsError(f"Error opening source file: {exc.strerror}") from exc
    with fsrc:
        try:
            fdest = open(dest, "wb")
        except OSError as exc:
            raise TicsError(f"Error opening destination file: {exc.strerror}") from exc
        with fdest:
            shutil.copyfileobj(fsrc, fdest)