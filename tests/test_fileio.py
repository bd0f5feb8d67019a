import pytest

from rasterkit.fileio import read_binary_file


def test_round_trip(tmp_path):
    data = bytes(range(256)) * 3
    path = tmp_path / "blob.bin"
    path.write_bytes(data)
    assert read_binary_file(path) == data


def test_accepts_string_path(tmp_path):
    path = tmp_path / "text.bin"
    path.write_bytes(b"abc\x00def")
    assert read_binary_file(str(path)) == b"abc\x00def"


def test_empty_file(tmp_path):
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")
    assert read_binary_file(path) == b""


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_binary_file(tmp_path / "missing.bin")