from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from readiness_gate.core.logging import level_number


class Settings(BaseSettings):
    APP_NAME: str = "provisioner"
    LOG_LEVEL: str = "INFO"
    # Bare lines, same as the shell entrypoint used to echo.
    LOG_FORMAT: str = "%(message)s"

    # Ordered: the gate waits on these left to right unless GATE_PARALLEL is set.
    GATE_TARGETS: str = "PG=postgres:5432,mongoDB=mongodb:27017"
    GATE_READY_LABEL: str = "DBs"
    GATE_RETRY_INTERVAL_S: float = Field(default=1.0, ge=0)
    # None -> platform default connect timeout.
    GATE_CONNECT_TIMEOUT_S: float | None = Field(default=None, gt=0)
    GATE_PARALLEL: bool = False

    GATE_EXEC: str = "/usr/local/bin/service"
    GATE_HANDOFF: Literal["exec", "spawn"] = "exec"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level_number(v)
        return v.strip().upper()

    class Config:
        env_file = ".env"
        extra = "ignore"

