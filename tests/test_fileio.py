import io
import os

import pytest

from linuxlab import fileio


def test_overwrite_replaces_the_beginning(tmp_path):
    path = tmp_path / "tmp.txt"
    original = "hello world, this stays"
    path.write_text(original, encoding="utf-8")
    result = fileio.overwrite_and_read(path, "HELLO")
    assert result.startswith("HELLO")
    assert len(result) == len(original)
    assert result[5:] == original[5:]


def test_overwrite_longer_than_file(tmp_path):
    path = tmp_path / "tmp.txt"
    path.write_text("ab", encoding="utf-8")
    text = "处处好风光~~\n"
    assert fileio.overwrite_and_read(path, text) == text


def test_overwrite_requires_existing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        fileio.overwrite_and_read(tmp_path / "missing.txt", "x")


def test_overwrite_rejects_file_past_buffer(tmp_path):
    path = tmp_path / "big.txt"
    path.write_bytes(b"a" * (fileio.READ_SIZE + 10))
    with pytest.raises(ValueError):
        fileio.overwrite_and_read(path, "b")


def test_append_keeps_previous_content(tmp_path):
    path = tmp_path / "test.txt"
    path.write_text("abc", encoding="utf-8")
    assert fileio.append_and_read(path, "def") == "abc" + "def"
    assert path.read_text(encoding="utf-8") == "abc" + "def"


def test_append_creates_the_file(tmp_path):
    path = tmp_path / "new.txt"
    text = "天要黑了~~\n"
    assert fileio.append_and_read(path, text) == text
    assert path.exists()


def test_append_reads_at_most_buffer(tmp_path):
    path = tmp_path / "big.txt"
    path.write_bytes(b"z" * 2000)
    result = fileio.append_and_read(path, "tail")
    assert len(result) == fileio.READ_SIZE
    assert set(result) == {"z"}


def test_append_empty_to_empty_file_is_eof(tmp_path):
    with pytest.raises(EOFError):
        fileio.append_and_read(tmp_path / "empty.txt", "")


def test_unbuffered_write_comes_first():
    read_fd, write_fd = os.pipe()
    try:
        stream = open(write_fd, "w", encoding="utf-8", closefd=False)
        fileio.buffered_writes(stream, write_fd)
        stream.close()
    finally:
        os.close(write_fd)
    with os.fdopen(read_fd, "rb") as reader:
        data = reader.read()
    assert data == b"writeprintffprintffwrite"


def test_print_child():
    out = io.StringIO()
    fileio.print_child(out)
    assert out.getvalue() == "this is library\n"