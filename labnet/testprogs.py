"""Small helper programs for exercising a job-control shell."""

from __future__ import annotations

import os
import signal
import sys
import time

from labnet.textutil import atoi


def parse_seconds(argv: list[str], prog: str) -> int:
    """Return the single seconds argument; raise ``ValueError`` with usage otherwise."""
    if len(argv) != 1:
        raise ValueError(f"Usage: {prog} <n>")
    return atoi(argv[0])


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def _seconds_or_usage(argv: list[str] | None, prog: str) -> int | None:
    try:
        return parse_seconds(_args(argv), prog)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return None


def _spin(secs: int) -> None:
    for _ in range(secs):
        time.sleep(1)


def myspin_main(argv: list[str] | None = None) -> int:
    """Sleep for n seconds in one-second chunks."""
    secs = _seconds_or_usage(argv, "myspin")
    if secs is not None:
        _spin(secs)
    return 0


def myint_main(argv: list[str] | None = None) -> int:
    """Sleep for n seconds, then send SIGINT to this process."""
    secs = _seconds_or_usage(argv, "myint")
    if secs is None:
        return 0
    _spin(secs)
    try:
        os.kill(os.getpid(), signal.SIGINT)
    except OSError:
        sys.stderr.write("kill (int) error")
    return 0


def mysplit_main(argv: list[str] | None = None) -> int:
    """Fork a child that sleeps for n seconds and wait for it."""
    secs = _seconds_or_usage(argv, "mysplit")
    if secs is None:
        return 0
    if os.fork() == 0:
        try:
            _spin(secs)
        finally:
            os._exit(0)
    os.wait()
    return 0


def mystop_main(argv: list[str] | None = None) -> int:
    """Sleep for n seconds, then send SIGTSTP to this process's group."""
    secs = _seconds_or_usage(argv, "mystop")
    if secs is None:
        return 0
    _spin(secs)
    try:
        os.kill(-os.getpid(), signal.SIGTSTP)
    except OSError:
        sys.stderr.write("kill (tstp) error")
    return 0