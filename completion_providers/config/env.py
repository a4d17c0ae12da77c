"""completion_providers.config.env
===============================

Centralized environment variable mapping for backend configuration.

Purpose
-------
- Single source of truth mapping each backend to the environment variables
  that configure it (gate variable, model, limits, endpoint).
- Small helpers to read those variables consistently (placeholder detection,
  tolerant numeric parsing).

Failure Modes
-------------
Helpers never raise on missing or malformed values; they return ``None`` or the
supplied default and let the store decide how to proceed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from ..base.backends import Backend


@dataclass(frozen=True)
class BackendEnv:
    """Names of the environment variables configuring one backend.

    ``gate`` is the credential (cloud) or endpoint (local) whose presence
    enables the backend at all.
    """

    gate: str
    model: str
    max_tokens: str
    temperature: str
    base_url: Optional[str] = None
    organization: Optional[str] = None


ENV_MAP: Dict[Backend, BackendEnv] = {
    Backend.OPENAI: BackendEnv(
        gate="OPENAI_API_KEY",
        model="OPENAI_DEFAULT_MODEL",
        max_tokens="OPENAI_MAX_TOKENS",
        temperature="OPENAI_TEMPERATURE",
        base_url="OPENAI_BASE_URL",
        organization="OPENAI_ORGANIZATION_ID",
    ),
    Backend.ANTHROPIC: BackendEnv(
        gate="ANTHROPIC_API_KEY",
        model="ANTHROPIC_DEFAULT_MODEL",
        max_tokens="ANTHROPIC_MAX_TOKENS",
        temperature="ANTHROPIC_TEMPERATURE",
        base_url="ANTHROPIC_BASE_URL",
    ),
    Backend.GOOGLE: BackendEnv(
        gate="GOOGLE_AI_API_KEY",
        model="GOOGLE_DEFAULT_MODEL",
        max_tokens="GOOGLE_MAX_TOKENS",
        temperature="GOOGLE_TEMPERATURE",
    ),
    Backend.COHERE: BackendEnv(
        gate="COHERE_API_KEY",
        model="COHERE_DEFAULT_MODEL",
        max_tokens="COHERE_MAX_TOKENS",
        temperature="COHERE_TEMPERATURE",
        base_url="COHERE_BASE_URL",
    ),
    Backend.LMSTUDIO: BackendEnv(
        gate="LMSTUDIO_HOST",
        model="LMSTUDIO_DEFAULT_MODEL",
        max_tokens="LMSTUDIO_MAX_TOKENS",
        temperature="LMSTUDIO_TEMPERATURE",
    ),
    Backend.OLLAMA: BackendEnv(
        gate="OLLAMA_HOST",
        model="OLLAMA_DEFAULT_MODEL",
        max_tokens="OLLAMA_MAX_TOKENS",
        temperature="OLLAMA_TEMPERATURE",
    ),
    Backend.DIRECT: BackendEnv(
        gate="LOCAL_MODELS_DIR",
        model="LOCAL_DEFAULT_MODEL",
        max_tokens="LOCAL_MAX_TOKENS",
        temperature="LOCAL_TEMPERATURE",
    ),
}

DEFAULT_PROVIDER_ENV = "DEFAULT_LLM_PROVIDER"
FALLBACK_ENABLED_ENV = "ENABLE_LLM_FALLBACK"
LOCAL_RUNNER_ENV = "LOCAL_RUNNER_COMMAND"
CONFIG_FILE_ENV = "PROVIDERS_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def read_str(environ: Mapping[str, str], name: Optional[str]) -> Optional[str]:
    """Return the stripped value of ``name`` or ``None`` when unset/blank."""
    if not name:
        return None
    raw = environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped or None


def read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    """Parse ``name`` as an int, falling back to ``default`` when malformed."""
    raw = read_str(environ, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    """Parse ``name`` as a float, falling back to ``default`` when malformed."""
    raw = read_str(environ, name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def read_flag(environ: Mapping[str, str], name: str) -> bool:
    """Return True only when ``name`` is exactly ``"true"`` (case-insensitive)."""
    return (read_str(environ, name) or "").lower() == "true"


__all__ = [
    "BackendEnv",
    "ENV_MAP",
    "DEFAULT_PROVIDER_ENV",
    "FALLBACK_ENABLED_ENV",
    "LOCAL_RUNNER_ENV",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "read_str",
    "read_int",
    "read_float",
    "read_flag",
]
