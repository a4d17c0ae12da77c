"""Configuration layer for backends.

Goals
-----
* Centralize defaults (models, endpoints, generation limits).
* Build every backend's :class:`ProviderConfig` once at startup from
  environment-style input, with an optional JSON/YAML file for
  backend-specific extras.
* Expose which backends are actually usable through
  :class:`ProviderConfigStore`.

Environment Variable Conventions
--------------------------------
<BACKEND>_API_KEY or <BACKEND>_HOST (gate), <BACKEND>_DEFAULT_MODEL,
<BACKEND>_MAX_TOKENS, <BACKEND>_TEMPERATURE; plus DEFAULT_LLM_PROVIDER and
ENABLE_LLM_FALLBACK. See ``config.env.ENV_MAP`` for the exact names.
"""
from __future__ import annotations

from .provider_config import ProviderConfig
from .store import DEFAULT_MODELS, ProviderConfigStore, load_external_config

__all__ = [
    "ProviderConfig",
    "ProviderConfigStore",
    "DEFAULT_MODELS",
    "load_external_config",
]
