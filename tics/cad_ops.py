"""CAD staging, STL inspection and simulated sensor/CAD events."""

from __future__ import annotations

import os
import struct
import time
from pathlib import Path

from tics.file_ops import TICS_DIR, PathLike, TicsError, copy_file, create_dir
from tics.repo_ops import get_current_branch

_BINARY_COUNT_OFFSET = 84


def _append_event(root: PathLike, filename: str, text: str) -> Path:
    branch = get_current_branch(root)
    stamp = time.strftime("%Y%m%d%H%M%S", time.localtime())
    commit_dir = create_dir(Path(root) / TICS_DIR / "objects" / branch / stamp)
    path = commit_dir / filename
    try:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        raise TicsError(f"Error: Failed to write {filename}: {exc.strerror}") from exc
    return path


def simulate_iot(root: PathLike = ".") -> Path:
    """Append a simulated sensor reading to a new commit of the current branch."""
    now = int(time.time())
    return _append_event(
        root,
        "sensor_data.txt",
        f"Timestamp: {now} | Temp: 24.2°C | Pressure: 1015 hPa\n",
    )


def simulate_cad(root: PathLike = ".") -> Path:
    """Append a simulated CAD event to a new commit of the current branch."""
    return _append_event(
        root, "cad_log.txt", "CAD event: draw_line from (0,0) to (100,200)\n"
    )


def parse_stl_vertices(filename: PathLike) -> int:
    """Count the vertices of an ASCII or binary STL file; 0 when none are found."""
    try:
        fh = open(filename, "rb")
    except OSError as exc:
        raise TicsError(f"Error opening STL file: {exc.strerror}") from exc
    with fh:
        if fh.readline().startswith(b"solid "):
            fh.seek(0)
            return sum(1 for line in fh if b"vertex " in line)
        fh.seek(_BINARY_COUNT_OFFSET)
        raw = fh.read(4)
    if len(raw) != 4:
        return 0
    (triangles,) = struct.unpack("<I", raw)
    count = (triangles * 3) & 0xFFFFFFFF
    return count if count < 2**31 else 0


def add_cad(filename: str, root: PathLike = ".") -> Path:
    """Stage a CAD file with a ``.meta`` record of its size and vertex count."""
    base = Path(root)
    source = base / filename
    stage = base / TICS_DIR / "stage"
    copy_file(source, stage / filename)
    try:
        size = os.stat(source).st_size
    except OSError as exc:
        raise TicsError(f"Error getting file stats: {exc.strerror}") from exc
    vertices = parse_stl_vertices(source)
    meta_path = stage / f"{filename}.meta"
    try:
        meta_path.write_text(f"size:{size}\nvertices:{vertices}\n", encoding="utf-8")
    except OSError as exc:
        raise TicsError(f"Error creating metadata file: {exc.strerror}") from exc
    return meta_path


def diff_cad(filename: str, root: PathLike = ".") -> str:
    """Return the staged metadata of an STL file."""
    if ".stl" not in filename:
        raise TicsError(f"Error: File {filename} is not an STL file.")
    meta_path = Path(root) / TICS_DIR / "stage" / f"{filename}.meta"
    if not meta_path.exists():
        raise TicsError(f"Error: Metadata file {meta_path} not found.")
    try:
        return meta_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TicsError(f"Error: Could not open metadata file {meta_path}.") from exc