from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Sequence

from readiness_gate.core.config import Settings
from readiness_gate.handoff import exec_handoff, spawn_handoff
from readiness_gate.probe import tcp_ok
from readiness_gate.targets import Target, parse_targets

log = logging.getLogger(__name__)

Probe = Callable[[Target], bool]
Sleep = Callable[[float], object]


def wait_for(
    target: Target,
    *,
    probe: Probe,
    sleep: Sleep,
    interval: float,
    stop: threading.Event | None = None,
) -> int:
    """Block until ``probe(target)`` succeeds. Returns the number of failed attempts.

    There is no attempt limit: an unavailable dependency is a retry signal,
    never an error. A set ``stop`` event ends the wait early.
    """

    failures = 0
    while not probe(target):
        if stop is not None and stop.is_set():
            log.debug("%s: wait abandoned after %s failed attempts", target.label, failures)
            return failures
        failures += 1
        log.warning("%s is not available yet - sleeping", target.label)
        sleep(interval)
    log.debug("%s (%s) is available after %s failed attempts", target.label, target.address, failures)
    return failures


def wait_all(
    targets: Sequence[Target],
    *,
    probe: Probe,
    sleep: Sleep | None = None,
    interval: float,
    parallel: bool = False,
) -> dict[str, int]:
    if not parallel:
        sleep = sleep or time.sleep
        return {t.label: wait_for(t, probe=probe, sleep=sleep, interval=interval) for t in targets}

    # Workers sleep on the event so an interrupt wakes them at once.
    stop = threading.Event()
    sleep = sleep or stop.wait
    pool = ThreadPoolExecutor(max_workers=len(targets), thread_name_prefix="gate")
    try:
        futures = {
            t.label: pool.submit(wait_for, t, probe=probe, sleep=sleep, interval=interval, stop=stop)
            for t in targets
        }
        results = {label: f.result() for label, f in futures.items()}
    except BaseException:
        stop.set()
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    pool.shutdown()
    return results


class ReadinessGate:
    def __init__(
        self,
        targets: Sequence[Target],
        *,
        command: str,
        ready_label: str = "DBs",
        app_name: str = "provisioner",
        interval: float = 1.0,
        connect_timeout: float | None = None,
        parallel: bool = False,
        handoff: str = "exec",
        probe: Probe | None = None,
        sleep: Sleep | None = None,
        execve: Callable[[str, list[str], dict[str, str]], object] = os.execve,
        spawn: Callable[[str, Sequence[str]], int] = spawn_handoff,
    ) -> None:
        self.targets = list(targets)
        self.command = command
        self.ready_label = ready_label
        self.app_name = app_name
        self.interval = interval
        self.connect_timeout = connect_timeout
        self.parallel = parallel
        self.handoff = handoff
        self._probe = probe or self._tcp_probe
        self._sleep = sleep
        self._execve = execve
        self._spawn = spawn

    @classmethod
    def from_settings(cls, s: Settings, **kwargs) -> ReadinessGate:
        return cls(
            parse_targets(s.GATE_TARGETS),
            command=s.GATE_EXEC,
            ready_label=s.GATE_READY_LABEL,
            app_name=s.APP_NAME,
            interval=s.GATE_RETRY_INTERVAL_S,
            connect_timeout=s.GATE_CONNECT_TIMEOUT_S,
            parallel=s.GATE_PARALLEL,
            handoff=s.GATE_HANDOFF,
            **kwargs,
        )

    def _tcp_probe(self, target: Target) -> bool:
        return tcp_ok(target.host, target.port, timeout=self.connect_timeout)

    def wait(self) -> dict[str, int]:
        return wait_all(
            self.targets,
            probe=self._probe,
            sleep=self._sleep,
            interval=self.interval,
            parallel=self.parallel,
        )

    def run(self, args: Sequence[str]) -> int:
        """Wait for every target, then hand off to the wrapped command with ``args``."""

        self.wait()
        log.info("%s are available - starting %s", self.ready_label, self.app_name)

        if self.handoff == "spawn":
            return self._spawn(self.command, args)

        exec_handoff(self.command, args, execve=self._execve)
        # Reached only when execve is not the real one.
        return 0
