from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ConfigError(Exception):
    pass


class Target(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = Field(min_length=1)
    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


def _parse_entry(entry: str) -> Target:
    label, sep, address = entry.partition("=")
    if not sep:
        label, address = "", entry

    host, sep, port = address.strip().rpartition(":")
    if not sep or not host:
        raise ConfigError(f"target {entry!r}: expected [label=]host:port")
    if not port.isdigit():
        raise ConfigError(f"target {entry!r}: port must be a number")

    # IPv6 literals come bracketed: [::1]:5432
    if host.startswith("[") or host.endswith("]"):
        if not (host.startswith("[") and host.endswith("]")) or len(host) < 3:
            raise ConfigError(f"target {entry!r}: malformed IPv6 address")
        host = host[1:-1]

    label = label.strip() or host
    try:
        return Target(label=label, host=host, port=int(port))
    except ValidationError as e:
        raise ConfigError(f"target {entry!r}: {e.errors()[0]['msg']}") from e


def parse_targets(spec: str) -> list[Target]:
    """Parse ``label=host:port`` entries separated by commas.

    Order is preserved: it is the order the gate waits in.
    """

    targets: list[Target] = []
    seen: set[str] = set()
    for raw in spec.split(","):
        entry = raw.strip()
        if not entry:
            continue
        t = _parse_entry(entry)
        if t.label in seen:
            raise ConfigError(f"duplicate target label {t.label!r}")
        seen.add(t.label)
        targets.append(t)

    if not targets:
        raise ConfigError("no targets configured")
    return targets
