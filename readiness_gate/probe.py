from __future__ import annotations

import logging
import socket
from typing import Iterable

from readiness_gate.targets import Target

log = logging.getLogger(__name__)


def tcp_ok(host: str, port: int, *, timeout: float | None = None) -> bool:
    """Return True if ``host:port`` accepts a TCP connection.

    Nothing is sent over the connection; it is closed as soon as it opens.
    """

    try:
        if timeout is None:
            s = socket.create_connection((host, port))
        else:
            s = socket.create_connection((host, port), timeout=timeout)
    except OSError as e:
        log.debug("connect %s:%s failed: %s", host, port, e)
        return False
    s.close()
    return True


def snapshot(targets: Iterable[Target], *, timeout: float | None = None) -> dict[str, bool]:
    return {t.label: tcp_ok(t.host, t.port, timeout=timeout) for t in targets}
