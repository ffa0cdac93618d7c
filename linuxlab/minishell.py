"""A minimal interactive shell with pipes and output redirection."""

import os
import re
import subprocess
import sys
from contextlib import ExitStack
from dataclasses import dataclass, field

MAX_ARGS = 31
MAX_PIPELINE = 10
PROMPT = "[username@localhost ]$ "
FILE_MODE = 0o664

_REDIRECT = re.compile(r">(>?)\s*(\S*)")


@dataclass(frozen=True)
class Redirect:
    """Where a command's standard output goes: truncate or append to path."""

    path: str
    append: bool = False


@dataclass
class Command:
    """One command of a pipeline: its arguments and optional redirection."""

    argv: list[str] = field(default_factory=list)
    redirect: Redirect | None = None


def split_args(line: str) -> list[str]:
    """Split a command line at whitespace."""
    args = line.split()
    if len(args) > MAX_ARGS:
        raise ValueError(f"too many arguments (at most {MAX_ARGS})")
    return args


def parse_redirect(line: str) -> tuple[str, Redirect | None]:
    """Separate the command text from its '>' or '>>' redirection.

    The command is everything before the first '>'. When several
    redirections are given the last one wins.
    """
    start = line.find(">")
    if start == -1:
        return line, None
    redirect = None
    for match in _REDIRECT.finditer(line, start):
        if not match.group(2):
            raise ValueError("missing redirect target")
        redirect = Redirect(match.group(2), append=bool(match.group(1)))
    return line[:start], redirect


def split_pipeline(line: str) -> list[str]:
    """Split a line into the commands separated by '|'."""
    segments = line.split("|")
    if len(segments) > MAX_PIPELINE:
        raise ValueError(f"too many commands in pipeline (at most {MAX_PIPELINE})")
    return segments


def parse_command(line: str) -> Command:
    """Parse one pipeline segment into a Command."""
    rest, redirect = parse_redirect(line)
    return Command(split_args(rest), redirect)


def _open_target(redirect: Redirect):
    mode = "ab" if redirect.append else "wb"
    return open(
        redirect.path, mode, opener=lambda path, flags: os.open(path, flags, FILE_MODE)
    )


def run_pipeline(line: str) -> list[int]:
    """Run a command line and return the exit status of each command.

    A blank line runs nothing. Redirection targets are always created, but
    output only goes to them from the last command; earlier commands write
    into the pipe. A command that cannot be started raises OSError.
    """
    if not line.strip():
        return []
    commands = [parse_command(segment) for segment in split_pipeline(line)]
    if any(not command.argv for command in commands):
        raise ValueError("empty command in pipeline")

    processes: list[subprocess.Popen] = []
    with ExitStack() as stack:
        previous = None
        try:
            for index, command in enumerate(commands):
                last = index == len(commands) - 1
                stdout = None
                if command.redirect is not None:
                    target = stack.enter_context(_open_target(command.redirect))
                    if last:
                        stdout = target
                if not last:
                    stdout = subprocess.PIPE
                process = subprocess.Popen(command.argv, stdin=previous, stdout=stdout)
                if previous is not None:
                    previous.close()
                previous = process.stdout
                processes.append(process)
        except BaseException:
            if previous is not None:
                previous.close()
            for process in processes:
                process.kill()
                process.wait()
            raise
        return [process.wait() for process in processes]


def main(argv=None) -> int:
    """Read command lines from standard input until end of input."""
    while True:
        sys.stdout.write(PROMPT)
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            return 0
        try:
            run_pipeline(line.rstrip("\n"))
        except (OSError, ValueError) as exc:
            print(f"minishell: {exc}", file=sys.stderr)