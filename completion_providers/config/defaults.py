"""completion_providers.config.defaults
====================================

Central place for small, stable default values used across the package and the
service layer. Values can be overridden via environment variables; these are
the fallbacks for local development and tests.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Generation defaults (shared by every backend) ----
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7

# ---- Cloud backends ----
OPENAI_DEFAULT_MODEL = "gpt-4o"
OPENAI_DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"

ANTHROPIC_DEFAULT_MODEL = "claude-3-opus-20240229"

GOOGLE_DEFAULT_MODEL = "gemini-pro"

COHERE_DEFAULT_MODEL = "command"
COHERE_DEFAULT_BASE_URL = "https://api.cohere.ai/v1"

# ---- Local backends ----
LMSTUDIO_DEFAULT_MODEL = "local-model"

OLLAMA_DEFAULT_MODEL = "llama3"

LOCAL_DEFAULT_MODEL = "llama-3-8b-q4"
# Runner script looked up inside LOCAL_MODELS_DIR when LOCAL_RUNNER_COMMAND is unset.
LOCAL_DEFAULT_RUNNER_SCRIPT = "run_local_model.py"

# ---- Service / HTTP layer ----
PROVIDER_SERVICE_DEFAULT_HOST = "127.0.0.1"
PROVIDER_SERVICE_DEFAULT_PORT = 3001


__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_EMBEDDING_MODEL",
    "ANTHROPIC_DEFAULT_MODEL",
    "GOOGLE_DEFAULT_MODEL",
    "COHERE_DEFAULT_MODEL",
    "COHERE_DEFAULT_BASE_URL",
    "LMSTUDIO_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_MODEL",
    "LOCAL_DEFAULT_MODEL",
    "LOCAL_DEFAULT_RUNNER_SCRIPT",
    "PROVIDER_SERVICE_DEFAULT_HOST",
    "PROVIDER_SERVICE_DEFAULT_PORT",
]
