"""Shared memory holding a NUL-terminated text, addressed by a numeric key."""

import sys
import time
from multiprocessing import shared_memory

IPC_KEY = 0x12345678
SHM_SIZE = 4096
DEFAULT_MESSAGE = "今天天气暖洋洋~"


def _segment_name(key: int) -> str:
    return f"linuxlab_{key & 0xFFFFFFFF:08x}"


class SharedText:
    """A shared memory segment used as a C string buffer.

    With create=True the segment is created if missing and attached
    otherwise; with create=False it must already exist.
    """

    def __init__(self, key: int = IPC_KEY, size: int = SHM_SIZE, create: bool = True):
        if size < 1:
            raise ValueError("size must be at least 1")
        self.key = key
        name = _segment_name(key)
        shm = None
        if create:
            try:
                shm = shared_memory.SharedMemory(name=name, create=True, size=size)
            except FileExistsError:
                shm = None
        if shm is None:
            shm = shared_memory.SharedMemory(name=name)
            size = min(size, shm.size)
        self._shm: shared_memory.SharedMemory | None = shm
        self.size = size

    def _buffer(self) -> memoryview:
        if self._shm is None:
            raise ValueError("shared memory is closed")
        return self._shm.buf

    def write(self, text: str) -> None:
        """Store text followed by a NUL byte; raise ValueError if it does not fit."""
        data = text.encode("utf-8")
        if len(data) + 1 > self.size:
            raise ValueError(f"text of {len(data)} bytes does not fit in {self.size}")
        buf = self._buffer()
        buf[: len(data)] = data
        buf[len(data)] = 0

    def read(self) -> str:
        """Return the text up to the first NUL byte."""
        raw = bytes(self._buffer()[: self.size])
        end = raw.find(b"\0")
        if end != -1:
            raw = raw[:end]
        return raw.decode("utf-8", errors="replace")

    def close(self) -> None:
        """Detach from the segment; closing twice is harmless."""
        if self._shm is not None:
            self._shm.close()
            self._shm = None

    def unlink(self) -> None:
        """Remove the segment from the system; a missing one is ignored."""
        try:
            segment = shared_memory.SharedMemory(name=_segment_name(self.key))
        except FileNotFoundError:
            return
        segment.close()
        segment.unlink()

    def __enter__(self) -> "SharedText":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def write_messages(
    shared: SharedText,
    message: str = DEFAULT_MESSAGE,
    count: int | None = None,
    interval: float = 1.0,
) -> int:
    """Write "message-i\\n" for i = 0, 1, ... pausing interval seconds between.

    Runs forever when count is None; returns how many were written.
    """
    written = 0
    while count is None or written < count:
        if written:
            time.sleep(interval)
        shared.write(f"{message}-{written}\n")
        written += 1
    return written


def writer_main(argv=None) -> int:
    shared = SharedText(IPC_KEY, SHM_SIZE)
    try:
        write_messages(shared)
    except KeyboardInterrupt:
        pass
    finally:
        shared.close()
        shared.unlink()
    return 0


def reader_main(argv=None) -> int:
    shared = SharedText(IPC_KEY, SHM_SIZE)
    try:
        while True:
            sys.stdout.write(shared.read())
            sys.stdout.flush()
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        shared.close()
    return 0