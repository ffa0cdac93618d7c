import uuid

import pytest

from linuxlab.shm import SharedText, write_messages


@pytest.fixture
def key():
    value = uuid.uuid4().int & 0xFFFFFFFF
    yield value
    SharedText(value, 64, create=True).unlink()


def test_new_segment_reads_empty(key):
    with SharedText(key, 64) as shared:
        assert shared.read() == ""


def test_write_read_round_trip(key):
    with SharedText(key, 64) as shared:
        shared.write("hello shm")
        assert shared.read() == "hello shm"


def test_shorter_write_is_terminated(key):
    with SharedText(key, 64) as shared:
        shared.write("a long message")
        shared.write("short")
        assert shared.read() == "short"


def test_second_attachment_sees_data(key):
    with SharedText(key, 64) as writer:
        writer.write("天气")
        with SharedText(key, 64, create=False) as reader:
            assert reader.read() == "天气"


def test_attach_missing_segment_raises(key):
    with pytest.raises(FileNotFoundError):
        SharedText(key, 64, create=False)


def test_text_too_long_raises(key):
    with SharedText(key, 8) as shared:
        with pytest.raises(ValueError):
            shared.write("12345678")


def test_read_after_close_raises(key):
    shared = SharedText(key, 64)
    shared.close()
    with pytest.raises(ValueError):
        shared.read()


def test_write_messages_counts_and_leaves_last(key):
    with SharedText(key, 256) as shared:
        written = write_messages(shared, "msg", count=3, interval=0)
        assert written == 3
        assert shared.read() == "msg-2\n"


def test_unlink_removes_segment(key):
    shared = SharedText(key, 64)
    shared.close()
    shared.unlink()
    with pytest.raises(FileNotFoundError):
        SharedText(key, 64, create=False)