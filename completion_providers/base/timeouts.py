"""Unified timeout configuration for backend calls.

All adapters take their timeouts from :func:`get_timeout_config`; no adapter
hard-codes a numeric timeout.

Supported environment variables (all optional, positive floats):
    LLM_TIMEOUT_HTTP_SECONDS      HTTP/SDK request timeout (default 120)
    LLM_TIMEOUT_CONNECT_SECONDS   connection establishment timeout (default 10)
    LLM_TIMEOUT_PROCESS_SECONDS   local model runner wall clock (default 600)

The configuration is cached per process and refreshed when the relevant
environment values change, which keeps tests that monkeypatch the environment
deterministic.
"""
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Read/write timeout for a single backend request.
        connect_timeout_seconds: Connection establishment timeout.
        process_timeout_seconds: Wall clock cap for one local runner process.
    """

    http_timeout_seconds: float = 120.0
    connect_timeout_seconds: float = 10.0
    process_timeout_seconds: float = 600.0


_ENV_NAMES = (
    "LLM_TIMEOUT_HTTP_SECONDS",
    "LLM_TIMEOUT_CONNECT_SECONDS",
    "LLM_TIMEOUT_PROCESS_SECONDS",
)

_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from ``name``; fall back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("LLM_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
        connect_timeout_seconds=_parse_env_float("LLM_TIMEOUT_CONNECT_SECONDS", defaults.connect_timeout_seconds),
        process_timeout_seconds=_parse_env_float("LLM_TIMEOUT_PROCESS_SECONDS", defaults.process_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
