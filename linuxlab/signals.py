"""Signal demonstrations: stop flags, blocking, one-shot handlers and reaping."""

import os
import signal
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager


def _restorable(handler):
    return signal.SIG_DFL if handler is None else handler


class StopFlag:
    """True until signum arrives; installs its handler when created."""

    def __init__(self, signum: int = signal.SIGINT):
        self.signum = signum
        self._running = True
        self._previous = signal.signal(signum, self._handle)
        self._restored = False

    def _handle(self, signum, frame) -> None:
        self._running = False

    def __bool__(self) -> bool:
        return self._running

    def restore(self) -> None:
        """Put back the handler that was installed before; harmless twice."""
        if not self._restored:
            signal.signal(self.signum, _restorable(self._previous))
            self._restored = True


@contextmanager
def blocked_signals(signals: Iterable[int] | None = None) -> Iterator[set]:
    """Block signals (all of them by default) inside the block.

    Yields the previous mask. Signals arriving meanwhile stay pending and
    are delivered when the previous mask is restored on leaving.
    """
    mask = signal.valid_signals() if signals is None else set(signals)
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, mask)
    try:
        yield previous
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)


def one_shot_handler(signum: int, callback: Callable[[int], None]):
    """Call callback(signum) on the next signum only, then restore the old handler.

    Returns the handler that was installed before.
    """
    previous = None

    def handler(num, frame) -> None:
        try:
            callback(num)
        finally:
            signal.signal(num, _restorable(previous))

    previous = signal.signal(signum, handler)
    return previous


def reap_children() -> list[tuple[int, int]]:
    """Collect every child that has already exited, without blocking.

    Returns (pid, raw status) pairs.
    """
    reaped: list[tuple[int, int]] = []
    while True:
        try:
            pid, status = os.waitpid(-1, os.WNOHANG)
        except ChildProcessError:
            break
        if pid == 0:
            break
        reaped.append((pid, status))
    return reaped


def install_child_reaper():
    """Reap exited children whenever SIGCHLD arrives; return the old handler."""

    def handler(signum, frame) -> None:
        reap_children()

    return signal.signal(signal.SIGCHLD, handler)