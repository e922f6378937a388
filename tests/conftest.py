from __future__ import annotations

import logging
import socket

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # configure_logging() replaces root handlers; put pytest's back afterwards.
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clean_gate_env(monkeypatch):
    for key in (
        "APP_NAME",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "GATE_TARGETS",
        "GATE_READY_LABEL",
        "GATE_RETRY_INTERVAL_S",
        "GATE_CONNECT_TIMEOUT_S",
        "GATE_PARALLEL",
        "GATE_EXEC",
        "GATE_HANDOFF",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def listener():
    """Port of a loopback socket that accepts connections (via the backlog)."""

    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.bind(("127.0.0.1", 0))
    srv.listen(16)
    try:
        yield srv.getsockname()[1]
    finally:
        srv.close()


@pytest.fixture()
def closed_port():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
