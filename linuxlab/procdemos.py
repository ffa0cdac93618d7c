"""Process demonstrations: arguments, environment, exit statuses and waiting."""

import os
import subprocess
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class WaitStatus:
    """A decoded wait() status."""

    exit_code: int | None = None
    signal: int | None = None
    stopped: bool = False
    core_dumped: bool = False

    @property
    def exited(self) -> bool:
        return self.exit_code is not None


def format_arguments(argv: Sequence[str]) -> list[str]:
    """Describe each program argument as "argv[i]=[arg]"."""
    return [f"argv[{index}]=[{arg}]" for index, arg in enumerate(argv)]


def format_environment(env: Mapping[str, str] | Iterable[str]) -> list[str]:
    """Describe each environment entry as "env[i]=[NAME=value]"."""
    if isinstance(env, Mapping):
        entries = [f"{key}={value}" for key, value in env.items()]
    else:
        entries = list(env)
    return [f"env[{index}]=[{entry}]" for index, entry in enumerate(entries)]


def get_myval(env: Mapping[str, str] | None = None) -> str:
    """Return MYVAL from env (the process environment by default)."""
    source = os.environ if env is None else env
    try:
        return source["MYVAL"]
    except KeyError:
        raise KeyError("There is no such environment variable") from None


def decode_wait_status(status: int) -> WaitStatus:
    """Decode a raw status as returned by waitpid()."""
    if status < 0:
        raise ValueError(f"invalid wait status: {status}")
    low = status & 0x7F
    if low == 0:
        return WaitStatus(exit_code=(status >> 8) & 0xFF)
    if low == 0x7F:
        return WaitStatus(signal=(status >> 8) & 0xFF, stopped=True)
    return WaitStatus(signal=low, core_dumped=bool(status & 0x80))


def wait_with_polling(
    process: subprocess.Popen,
    on_tick: Callable[[], None] | None = None,
    interval: float = 1.0,
) -> int:
    """Poll process without blocking, calling on_tick between polls.

    Returns the process's return code once it has finished.
    """
    while process.poll() is None:
        if on_tick is not None:
            on_tick()
        time.sleep(interval)
    return process.returncode


def describe_errno(code: int) -> str:
    """Return the system's description of an error number."""
    return os.strerror(code)


def run_with_env(
    program: str,
    args: Sequence[str] = (),
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess:
    """Run program with args and, if given, exactly the environment env.

    Output is captured as text; a program that cannot be started raises OSError.
    """
    return subprocess.run(
        [program, *args],
        env=None if env is None else dict(env),
        capture_output=True,
        text=True,
        check=False,
    )