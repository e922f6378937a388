from __future__ import annotations

import json


def test_reports_ready_when_all_targets_accept(monkeypatch, listener, capsys):
    monkeypatch.setenv("GATE_TARGETS", f"PG=127.0.0.1:{listener},mongoDB=127.0.0.1:{listener}")

    from scripts.wait_deps import main

    assert main() == 0
    assert json.loads(capsys.readouterr().out) == {"ready": True, "PG": True, "mongoDB": True}


def test_reports_not_ready_without_retrying(monkeypatch, listener, closed_port, capsys):
    monkeypatch.setenv("GATE_TARGETS", f"PG=127.0.0.1:{listener},mongoDB=127.0.0.1:{closed_port}")

    from scripts.wait_deps import main

    assert main() == 1
    assert json.loads(capsys.readouterr().out) == {"ready": False, "PG": True, "mongoDB": False}


def test_reports_config_error(monkeypatch, capsys):
    monkeypatch.setenv("GATE_TARGETS", "")

    from scripts.wait_deps import main

    assert main() == 2
    out = json.loads(capsys.readouterr().out)
    assert out["ready"] is False
    assert "no targets" in out["error"]


def test_reports_invalid_settings(monkeypatch, capsys):
    monkeypatch.setenv("GATE_HANDOFF", "fork")

    from scripts.wait_deps import main

    assert main() == 2
    out = json.loads(capsys.readouterr().out)
    assert out["ready"] is False
    assert "GATE_HANDOFF" in out["error"]
