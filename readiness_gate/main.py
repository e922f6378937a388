from __future__ import annotations

import logging
import sys
from typing import Sequence

from pydantic import ValidationError

from readiness_gate.core.config import Settings
from readiness_gate.core.logging import configure_logging
from readiness_gate.gate import ReadinessGate
from readiness_gate.handoff import HandoffError
from readiness_gate.targets import ConfigError

log = logging.getLogger("readiness_gate")


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None, **gate_kwargs) -> int:
    """Container entrypoint.

    No option parsing: everything after argv[0] belongs to the wrapped command.
    """

    if argv is None:
        argv = sys.argv

    try:
        s = settings or Settings()
    except ValidationError as e:
        configure_logging("INFO")
        log.error("invalid configuration: %s", e)
        return 2

    configure_logging(s.LOG_LEVEL, s.LOG_FORMAT)

    try:
        gate = ReadinessGate.from_settings(s, **gate_kwargs)
    except ConfigError as e:
        log.error("invalid configuration: %s", e)
        return 2

    try:
        return gate.run(list(argv[1:]))
    except HandoffError as e:
        log.error("%s (errno %s)", e, e.errno)
        return e.exit_code
    except KeyboardInterrupt:
        log.warning("interrupted while waiting for dependencies")
        return 130


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
