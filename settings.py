from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from storage.segments import DEFAULT_SEGMENT_COUNT

VERSION = "1.0.0"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _env_path(name: str) -> str | None:
    raw = (os.getenv(name) or "").strip()
    return raw or None


def parse_bind_addr(bind_addr: str) -> tuple[str, int]:
    """
    Split a "host:port" bind address. An empty host (":8080") binds all interfaces.
    """
    host, sep, port_s = bind_addr.strip().rpartition(":")
    if not sep:
        raise ValueError(f"bind address must look like host:port, got {bind_addr!r}")
    host = host.strip("[]") or "0.0.0.0"
    try:
        port = int(port_s)
    except ValueError as e:
        raise ValueError(f"invalid port in bind address {bind_addr!r}") from e
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range in bind address {bind_addr!r}")
    return host, port


@dataclass(frozen=True)
class Settings:
    # Server
    bind_addr: str

    # Process files (None disables)
    log_path: str | None
    pid_path: str | None

    # Store
    segment_count: int

    # Logging
    log_level: str
    debug_log_requests: bool

    def bind_host_port(self) -> tuple[str, int]:
        return parse_bind_addr(self.bind_addr)


def get_settings(**overrides: Any) -> Settings:
    """
    Build settings from the environment. Keyword overrides (field names) take
    precedence and the matching env var is not read.
    """
    values: dict[str, Any] = dict(overrides)

    if "bind_addr" not in values:
        values["bind_addr"] = os.getenv("DOCSTORE_BIND", ":8080")

    if "log_path" not in values:
        values["log_path"] = _env_path("DOCSTORE_LOG_PATH")
    if "pid_path" not in values:
        values["pid_path"] = _env_path("DOCSTORE_PID_PATH")

    if "segment_count" not in values:
        values["segment_count"] = _env_int("DOCSTORE_SEGMENTS", DEFAULT_SEGMENT_COUNT)
    if values["segment_count"] < 1:
        raise ValueError(f"segment count must be >= 1, got {values['segment_count']}")

    if "log_level" not in values:
        values["log_level"] = (os.getenv("LOG_LEVEL", "INFO")).strip().upper() or "INFO"
    if "debug_log_requests" not in values:
        values["debug_log_requests"] = _env_bool("DEBUG_LOG_REQUESTS", False)

    return Settings(**values)
