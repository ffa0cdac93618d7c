"""Anonymous pipes: measuring capacity, passing data and joining commands."""

import os
import subprocess
import sys
import threading
from collections.abc import Sequence

DEFAULT_CHUNK = "今天好冷啊~"


def measure_pipe_capacity(chunk: bytes | str = DEFAULT_CHUNK) -> int:
    """Write chunk into a pipe nobody reads until it is full; return the bytes held.

    The write end is non-blocking, so the first write that would block
    ends the measurement instead of hanging.
    """
    if isinstance(chunk, str):
        chunk = chunk.encode("utf-8")
    if not chunk:
        raise ValueError("chunk must not be empty")
    read_fd, write_fd = os.pipe()
    total = 0
    try:
        os.set_blocking(write_fd, False)
        while True:
            try:
                total += os.write(write_fd, chunk)
            except BlockingIOError:
                return total
    finally:
        os.close(write_fd)
        os.close(read_fd)


def transfer(data: bytes | str) -> bytes:
    """Send data through a pipe from a writer thread and return what was read."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    read_fd, write_fd = os.pipe()
    errors: list[BaseException] = []

    def writer() -> None:
        try:
            with os.fdopen(write_fd, "wb") as stream:
                stream.write(data)
        except BaseException as exc:
            errors.append(exc)

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        with os.fdopen(read_fd, "rb") as stream:
            received = stream.read()
    finally:
        thread.join()
    if errors:
        raise errors[0]
    return received


def run_piped(first: Sequence[str], second: Sequence[str]) -> bytes:
    """Run `first | second` and return the standard output of second.

    A command that cannot be started raises OSError.
    """
    producer = subprocess.Popen(list(first), stdout=subprocess.PIPE)
    try:
        consumer = subprocess.Popen(
            list(second), stdin=producer.stdout, stdout=subprocess.PIPE
        )
    except BaseException:
        producer.stdout.close()
        producer.kill()
        producer.wait()
        raise
    producer.stdout.close()
    output, _ = consumer.communicate()
    producer.wait()
    return output


def main(argv=None) -> int:
    """Show the processes whose listing mentions ssh (ps -ef | grep ssh)."""
    try:
        output = run_piped(["ps", "-ef"], ["grep", "ssh"])
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    sys.stdout.buffer.write(output)
    sys.stdout.flush()
    return 0