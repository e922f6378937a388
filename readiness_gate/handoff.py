from __future__ import annotations

import errno
import logging
import os
import signal
import subprocess
import sys
from typing import Callable, Sequence

log = logging.getLogger(__name__)

FORWARDED_SIGNALS = (
    signal.SIGTERM,
    signal.SIGINT,
    signal.SIGHUP,
    signal.SIGQUIT,
    signal.SIGUSR1,
    signal.SIGUSR2,
)


class HandoffError(Exception):
    def __init__(self, command: str, err: OSError) -> None:
        self.command = command
        self.errno = err.errno
        self.strerror = err.strerror or str(err)
        super().__init__(f"cannot start {command}: {self.strerror}")

    @property
    def exit_code(self) -> int:
        # Shell conventions: 127 not found, 126 found but not executable.
        if self.errno == errno.ENOENT:
            return 127
        if self.errno in (errno.EACCES, errno.ENOEXEC, errno.EISDIR):
            return 126
        return 1


def build_argv(command: str, forwarded: Sequence[str]) -> list[str]:
    return [command, *forwarded]


def _flush() -> None:
    for h in logging.getLogger().handlers:
        h.flush()
    sys.stdout.flush()
    sys.stderr.flush()


def exec_handoff(
    command: str,
    forwarded: Sequence[str],
    *,
    execve: Callable[[str, list[str], dict[str, str]], object] = os.execve,
) -> None:
    """Replace the current process with ``command``.

    Environment and std streams are inherited. Only returns if ``execve`` is
    stubbed out; a real exec failure raises HandoffError.
    """

    argv = build_argv(command, forwarded)
    _flush()
    try:
        execve(command, argv, dict(os.environ))
    except OSError as e:
        raise HandoffError(command, e) from e


def spawn_handoff(command: str, forwarded: Sequence[str]) -> int:
    """Run ``command`` as a child, relay signals to it and return its exit code."""

    argv = build_argv(command, forwarded)
    _flush()
    try:
        child = subprocess.Popen(argv, executable=command)
    except OSError as e:
        raise HandoffError(command, e) from e

    def _relay(signum: int, _frame: object) -> None:
        log.debug("forwarding signal %s to pid %s", signum, child.pid)
        try:
            child.send_signal(signum)
        except ProcessLookupError:
            pass

    previous = {sig: signal.signal(sig, _relay) for sig in FORWARDED_SIGNALS}
    try:
        rc = child.wait()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)

    if rc < 0:
        return 128 - rc
    return rc
