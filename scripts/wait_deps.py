"""One-shot dependency check, usable as a container healthcheck.

Probes every configured target once and prints the result as JSON.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from readiness_gate.core.config import Settings
from readiness_gate.probe import snapshot
from readiness_gate.targets import ConfigError, parse_targets


def main() -> int:
    try:
        s = Settings()
        targets = parse_targets(s.GATE_TARGETS)
    except (ConfigError, ValidationError) as e:
        print(json.dumps({"ready": False, "error": str(e)}))
        return 2

    status = snapshot(targets, timeout=s.GATE_CONNECT_TIMEOUT_S or 2.0)
    ready = all(status.values())
    print(json.dumps({"ready": ready, **status}))
    return 0 if ready else 1


if __name__ == "__main__":
    raise SystemExit(main())
