"""File I/O demonstrations: stream and descriptor writes, reads and buffering."""

import os
import sys
from pathlib import Path
from typing import TextIO

READ_SIZE = 1023
FILE_MODE = 0o664
LIBRARY_MESSAGE = "this is library"


def _create_with_mode(path: str, flags: int) -> int:
    return os.open(path, flags, FILE_MODE)


def overwrite_and_read(path: str | Path, text: str) -> str:
    """Write text at the start of an existing file, then read the file back.

    The file must already exist. At most READ_SIZE bytes are read; a file
    longer than that raises ValueError, since it cannot be read to its end.
    """
    data = text.encode("utf-8")
    with open(path, "r+b") as stream:
        stream.write(data)
        stream.seek(0)
        content = stream.read(READ_SIZE)
        if stream.read(1):
            raise ValueError(f"file is longer than {READ_SIZE} bytes")
    return content.decode("utf-8", errors="replace")


def append_and_read(path: str | Path, text: str) -> str:
    """Append text to a file (creating it), then read from its start.

    At most READ_SIZE bytes are returned. An empty file raises EOFError.
    """
    data = text.encode("utf-8")
    with open(path, "a+b", opener=_create_with_mode) as stream:
        stream.write(data)
        stream.seek(0)
        content = stream.read(READ_SIZE)
    if not content:
        raise EOFError("at end of file")
    return content.decode("utf-8", errors="replace")


def buffered_writes(stream: TextIO, raw_fd: int) -> None:
    """Write three pieces through a buffered stream and one straight to raw_fd.

    The stream is flushed only at the end, so when both lead to the same
    place the unbuffered "write" arrives before the three buffered pieces.
    """
    stream.write("printf")
    stream.write("fprintf")
    stream.write("fwrite")
    os.write(raw_fd, b"write")
    stream.flush()


def print_child(stream: TextIO | None = None) -> None:
    """Print the library's greeting line."""
    print(LIBRARY_MESSAGE, file=stream if stream is not None else sys.stdout)