import re
import struct

import pytest

from tics.cad_ops import add_cad, diff_cad, parse_stl_vertices, simulate_cad, simulate_iot
from tics.file_ops import TicsError
from tics.repo_ops import init_repo

ASCII_STL = (
    b"solid cube\n"
    b"  facet normal 0 0 1\n"
    b"    outer loop\n"
    b"      vertex 0 0 0\n"
    b"      vertex 1 0 0\n"
    b"      vertex 0 1 0\n"
    b"    endloop\n"
    b"  endfacet\n"
    b"endsolid cube\n"
)


@pytest.fixture
def repo(tmp_path):
    init_repo(tmp_path)
    return tmp_path


def test_parse_ascii_stl(tmp_path):
    path = tmp_path / "tri.stl"
    path.write_bytes(ASCII_STL)
    assert parse_stl_vertices(path) == 3


def test_parse_ascii_stl_without_vertices(tmp_path):
    path = tmp_path / "empty.stl"
    path.write_bytes(b"solid empty\nendsolid empty\n")
    assert parse_stl_vertices(path) == 0


def test_parse_binary_stl_reads_count_at_offset_84(tmp_path):
    path = tmp_path / "bin.stl"
    path.write_bytes(b"\0" * 84 + struct.pack("<I", 5) + b"\0" * 40)
    assert parse_stl_vertices(path) == 15


def test_parse_short_binary_stl(tmp_path):
    path = tmp_path / "short.stl"
    path.write_bytes(b"\0" * 20)
    assert parse_stl_vertices(path) == 0


def test_parse_missing_file(tmp_path):
    with pytest.raises(TicsError, match="Error opening STL file"):
        parse_stl_vertices(tmp_path / "missing.stl")


def test_add_cad_stages_file_and_meta(repo):
    (repo / "tri.stl").write_bytes(ASCII_STL)
    meta = add_cad("tri.stl", repo)
    stage = repo / ".tics" / "stage"
    assert (stage / "tri.stl").read_bytes() == ASCII_STL
    assert meta == stage / "tri.stl.meta"
    assert meta.read_text() == f"size:{len(ASCII_STL)}\nvertices:3\n"


def test_add_cad_missing_file(repo):
    with pytest.raises(TicsError):
        add_cad("nothing.stl", repo)


def test_diff_cad_returns_meta(repo):
    (repo / "tri.stl").write_bytes(ASCII_STL)
    meta = add_cad("tri.stl", repo)
    assert diff_cad("tri.stl", repo) == meta.read_text()


def test_diff_cad_rejects_non_stl(repo):
    with pytest.raises(TicsError, match="is not an STL file"):
        diff_cad("notes.txt", repo)


def test_diff_cad_missing_meta(repo):
    with pytest.raises(TicsError, match="not found"):
        diff_cad("ghost.stl", repo)


def test_simulate_iot_appends_reading(repo):
    path = simulate_iot(repo)
    assert path.name == "sensor_data.txt"
    assert path.parent.parent == repo / ".tics" / "objects" / "main"
    assert re.fullmatch(
        r"Timestamp: \d+ \| Temp: 24\.2°C \| Pressure: 1015 hPa\n",
        path.read_text(encoding="utf-8"),
    )


def test_simulate_cad_appends_event(repo):
    path = simulate_cad(repo)
    assert path.name == "cad_log.txt"
    assert re.fullmatch(r"\d{14}", path.parent.name)
    assert path.read_text().endswith("CAD event: draw_line from (0,0) to (100,200)\n")