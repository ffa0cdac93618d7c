"""Named pipes: a reader that prints what arrives and a writer fed from input."""

import errno
import os
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

DEFAULT_PATH = "./test.fifo"
FIFO_MODE = 0o664
READ_SIZE = 1023


def ensure_fifo(path: str | Path = DEFAULT_PATH, mode: int = FIFO_MODE) -> Path:
    """Create the named pipe at path; an existing file there is accepted."""
    path = Path(path)
    try:
        os.mkfifo(path, mode)
    except OSError as exc:
        if exc.errno != errno.EEXIST:
            raise
    return path


def read_fifo(path: str | Path = DEFAULT_PATH) -> Iterator[bytes]:
    """Yield chunks read from the pipe until every writer has closed it.

    Opening blocks until some process opens the pipe for writing.
    """
    with open(path, "rb", buffering=0) as stream:
        while True:
            chunk = stream.read(READ_SIZE)
            if not chunk:
                return
            yield chunk


def write_fifo(path: str | Path, words: Iterable[str]) -> int:
    """Write each word to the pipe, without separators; return the bytes written.

    Opening blocks until some process opens the pipe for reading.
    """
    total = 0
    with open(path, "wb") as stream:
        for word in words:
            data = word.encode("utf-8")
            stream.write(data)
            stream.flush()
            total += len(data)
    return total


def _stdin_words() -> Iterator[str]:
    for line in sys.stdin:
        yield from line.split()


def reader_main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    path = args[0] if args else DEFAULT_PATH
    try:
        ensure_fifo(path)
        chunks = read_fifo(path)
        first = next(chunks, None)
        print("open success", flush=True)
        if first is not None:
            print(f"buf:[{first.decode('utf-8', errors='replace')}]", flush=True)
            for chunk in chunks:
                print(f"buf:[{chunk.decode('utf-8', errors='replace')}]", flush=True)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    print("all writers have closed the pipe")
    return 0


def writer_main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    path = args[0] if args else DEFAULT_PATH
    try:
        ensure_fifo(path)
        write_fifo(path, _stdin_words())
    except BrokenPipeError:
        print("all readers have closed the pipe")
        return 0
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0