"""Provider configuration store.

Builds one :class:`ProviderConfig` per usable backend, once, at startup.

Sources, merged in order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) named by
       ``PROVIDERS_CONFIG_FILE``; only its per-backend ``extra`` mapping is
       used, e.g.::

           ollama:
             extra:
               keep_alive: 5m
    3. Environment variables (``config.env.ENV_MAP``), after loading a
       ``.env`` file once when reading the process environment.

A backend whose gate variable (credential or endpoint) is missing, or whose
cloud credential is a placeholder, is simply absent from the store.
Construction never performs network calls and never raises on malformed
numeric values.
"""
from __future__ import annotations

import json
import os
import shlex
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from ..base.backends import Backend
from ..base.logging import get_logger, log_event
from .defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    COHERE_DEFAULT_BASE_URL,
    COHERE_DEFAULT_MODEL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    GOOGLE_DEFAULT_MODEL,
    LMSTUDIO_DEFAULT_MODEL,
    LOCAL_DEFAULT_MODEL,
    LOCAL_DEFAULT_RUNNER_SCRIPT,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
)
from .env import (
    CONFIG_FILE_ENV,
    DEFAULT_PROVIDER_ENV,
    ENV_MAP,
    FALLBACK_ENABLED_ENV,
    LOCAL_RUNNER_ENV,
    is_placeholder,
    read_flag,
    read_float,
    read_int,
    read_str,
)
from .provider_config import ProviderConfig

DEFAULT_MODELS: Dict[Backend, str] = {
    Backend.OPENAI: OPENAI_DEFAULT_MODEL,
    Backend.ANTHROPIC: ANTHROPIC_DEFAULT_MODEL,
    Backend.GOOGLE: GOOGLE_DEFAULT_MODEL,
    Backend.COHERE: COHERE_DEFAULT_MODEL,
    Backend.LMSTUDIO: LMSTUDIO_DEFAULT_MODEL,
    Backend.OLLAMA: OLLAMA_DEFAULT_MODEL,
    Backend.DIRECT: LOCAL_DEFAULT_MODEL,
}

DEFAULT_BASE_URLS: Dict[Backend, str] = {
    Backend.COHERE: COHERE_DEFAULT_BASE_URL,
}

_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Overrides
    existing environment variables only if their current values appear to be
    placeholders.
    """
    global _DOTENV_LOADED  # noqa: PLW0603 - module-level once flag
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    try:
        if not os.path.isfile(path):
            return
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def load_external_config(path: Optional[str]) -> Dict[str, Any]:
    """Load the optional JSON/YAML config file; missing or invalid → ``{}``."""
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    return data if isinstance(data, dict) else {}


def _file_extra(file_cfg: Mapping[str, Any], backend: Backend) -> Dict[str, Any]:
    section = file_cfg.get(backend.value)
    if not isinstance(section, dict):
        return {}
    extra = section.get("extra")
    return dict(extra) if isinstance(extra, dict) else {}


def _runner_command(environ: Mapping[str, str], file_value: Any, models_dir: str) -> Tuple[str, ...]:
    """``LOCAL_RUNNER_COMMAND`` first, then the config file value, then the default script."""
    raw = read_str(environ, LOCAL_RUNNER_ENV)
    if raw:
        return tuple(shlex.split(raw))
    if isinstance(file_value, str) and file_value.strip():
        return tuple(shlex.split(file_value))
    if isinstance(file_value, (list, tuple)) and file_value:
        return tuple(str(part) for part in file_value)
    return (sys.executable, os.path.join(models_dir, LOCAL_DEFAULT_RUNNER_SCRIPT))


def _build_config(
    backend: Backend,
    environ: Mapping[str, str],
    file_cfg: Mapping[str, Any],
) -> Optional[ProviderConfig]:
    names = ENV_MAP[backend]
    gate = read_str(environ, names.gate)
    if gate is None or (backend.is_cloud and is_placeholder(gate)):
        return None

    extra = _file_extra(file_cfg, backend)
    if backend.is_cloud:
        api_key: Optional[str] = gate
        base_url = read_str(environ, names.base_url) or DEFAULT_BASE_URLS.get(backend)
    else:
        api_key = None
        base_url = gate
    if backend is Backend.DIRECT:
        extra["runner_command"] = _runner_command(environ, extra.get("runner_command"), gate)

    return ProviderConfig(
        backend=backend,
        model=read_str(environ, names.model) or DEFAULT_MODELS[backend],
        max_tokens=read_int(environ, names.max_tokens, DEFAULT_MAX_TOKENS),
        temperature=read_float(environ, names.temperature, DEFAULT_TEMPERATURE),
        api_key=api_key,
        base_url=base_url,
        organization=read_str(environ, names.organization),
        extra=extra,
    )


class ProviderConfigStore:
    """Read-only registry of configured backends.

    Instances are immutable after construction and safe for concurrent reads.
    Iteration order of :meth:`configured` follows :class:`Backend` declaration
    order.
    """

    def __init__(
        self,
        configs: Mapping[Backend, ProviderConfig],
        *,
        default: Optional[Backend] = None,
        fallback_enabled: bool = False,
    ) -> None:
        self._configs: Dict[Backend, ProviderConfig] = {
            b: configs[b] for b in Backend if b in configs
        }
        if default is not None and default not in self._configs:
            default = None
        if default is None and self._configs:
            default = next(iter(self._configs))
        self._default = default
        self._fallback_enabled = fallback_enabled

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProviderConfigStore":
        """Build the store from environment-style input.

        Parameters
        ----------
        environ:
            Mapping to read from. When ``None`` the process environment is used
            (after loading ``.env`` once).
        """
        logger = get_logger("providers.config")
        if environ is None:
            _load_dotenv_once()
            environ = os.environ
        file_cfg = load_external_config(read_str(environ, CONFIG_FILE_ENV))

        configs: Dict[Backend, ProviderConfig] = {}
        for backend in Backend:
            cfg = _build_config(backend, environ, file_cfg)
            if cfg is not None:
                configs[backend] = cfg

        requested_default = read_str(environ, DEFAULT_PROVIDER_ENV)
        default = Backend.parse(requested_default)
        if requested_default and default not in configs:
            log_event(
                logger,
                "config.default_unavailable",
                requested=requested_default,
                configured=[b.value for b in configs],
            )
        store = cls(configs, default=default, fallback_enabled=read_flag(environ, FALLBACK_ENABLED_ENV))
        log_event(
            logger,
            "config.initialized",
            configured=[b.value for b in store.configured()],
            default=store.default.value if store.default else None,
            fallback_enabled=store.fallback_enabled,
        )
        return store

    def is_configured(self, backend: Backend | str) -> bool:
        parsed = Backend.parse(backend)
        return parsed is not None and parsed in self._configs

    def get(self, backend: Backend | str) -> Optional[ProviderConfig]:
        parsed = Backend.parse(backend)
        return self._configs.get(parsed) if parsed is not None else None

    def configured(self) -> Tuple[Backend, ...]:
        return tuple(self._configs)

    @property
    def default(self) -> Optional[Backend]:
        """Explicit default when configured, else the first configured backend."""
        return self._default

    @property
    def fallback_enabled(self) -> bool:
        return self._fallback_enabled


__all__ = ["ProviderConfigStore", "DEFAULT_MODELS", "load_external_config"]
