import re

import pytest

from tics.file_ops import TicsError
from tics.repo_ops import init_repo
from tics.stash_ops import stash_list, stash_pop, stash_push


@pytest.fixture
def repo(tmp_path):
    init_repo(tmp_path)
    return tmp_path


def stage_dir(repo):
    return repo / ".tics" / "stage"


def test_push_moves_staged_files(repo):
    (stage_dir(repo) / "a.txt").write_text("alpha")
    (stage_dir(repo) / "b.txt").write_text("beta")
    stash_dir = stash_push(repo)
    assert sorted(p.name for p in stash_dir.iterdir()) == ["a.txt", "b.txt"]
    assert (stash_dir / "a.txt").read_text() == "alpha"
    assert list(stage_dir(repo).iterdir()) == []


def test_push_writes_log(repo):
    stash_dir = stash_push(repo)
    lines = stash_list(repo)
    assert len(lines) == 1
    assert re.fullmatch(r"\[\d{14}\] Stashed changes", lines[0])
    assert lines[0] == f"[{stash_dir.name}] Stashed changes"


def test_push_then_pop_round_trip(repo):
    (stage_dir(repo) / "model.stl").write_bytes(b"solid x\n")
    stash_dir = stash_push(repo)
    name = stash_pop(repo)
    assert name == stash_dir.name
    assert (stage_dir(repo) / "model.stl").read_bytes() == b"solid x\n"
    assert not stash_dir.exists()


def test_pop_takes_latest(repo):
    stash_root = repo / ".tics" / "stash"
    for stamp, content in (("20200101000000", "old"), ("20210101000000", "new")):
        (stash_root / stamp).mkdir()
        (stash_root / stamp / "f.txt").write_text(content)
    assert stash_pop(repo) == "20210101000000"
    assert (stage_dir(repo) / "f.txt").read_text() == "new"
    assert (stash_root / "20200101000000").is_dir()


def test_pop_without_stash(repo):
    with pytest.raises(TicsError, match="No stashed changes found."):
        stash_pop(repo)


def test_pop_without_repo(tmp_path):
    with pytest.raises(TicsError, match="No stashed changes found."):
        stash_pop(tmp_path)


def test_list_without_repo(tmp_path):
    assert stash_list(tmp_path) == []