from pathlib import Path

import pytest

from cms.errors import InvalidFilename, NotFound
from cms.infra.repository import FilesystemRepository, is_safe_basename


def test_write_read_list_delete(tmp_path: Path):
    repo = FilesystemRepository(tmp_path / "docs")
    assert repo.list() == []

    repo.write("b.md", b"# B")
    repo.write("a.txt", b"A")
    (tmp_path / "docs" / "subdir").mkdir()

    assert repo.list() == ["a.txt", "b.md"]
    assert repo.read("b.md") == b"# B"
    assert repo.exists("a.txt")

    repo.delete("a.txt")
    assert not repo.exists("a.txt")


def test_last_write_wins(tmp_path: Path):
    repo = FilesystemRepository(tmp_path)
    repo.write("a.txt", b"one")
    repo.write("a.txt", b"two")
    assert repo.read("a.txt") == b"two"


def test_missing_file_raises_not_found(tmp_path: Path):
    repo = FilesystemRepository(tmp_path)
    with pytest.raises(NotFound) as exc:
        repo.read("nope.txt")
    assert exc.value.message == "The file 'nope.txt' does not exist."
    with pytest.raises(NotFound):
        repo.delete("nope.txt")


@pytest.mark.parametrize("name", ["", ".", "..", "../users.yml", "a/b.txt", "a\\b.txt"])
def test_names_escaping_the_root_are_rejected(tmp_path: Path, name):
    repo = FilesystemRepository(tmp_path)
    assert not is_safe_basename(name)
    with pytest.raises(InvalidFilename):
        repo.path(name)
    assert repo.exists(name) is False
