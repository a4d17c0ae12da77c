"""Pytest configuration for the completion providers test suite.

Keeps every test hermetic: backend credentials from the developer's shell are
removed, ``.env`` loading is pointed at a missing file, and pooled HTTP
clients are dropped after each test.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from completion_providers.base.http import client as http_client
from completion_providers.config.env import ENV_MAP, CONFIG_FILE_ENV, DEFAULT_PROVIDER_ENV, FALLBACK_ENABLED_ENV


@pytest.fixture(autouse=True)
def _clean_provider_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip backend variables so only what a test sets is visible."""
    for names in ENV_MAP.values():
        for var in (names.gate, names.model, names.max_tokens, names.temperature, names.base_url, names.organization):
            if var:
                monkeypatch.delenv(var, raising=False)
    for var in (CONFIG_FILE_ENV, DEFAULT_PROVIDER_ENV, FALLBACK_ENABLED_ENV, "LOCAL_RUNNER_COMMAND"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    yield


@pytest.fixture(autouse=True)
def _reset_http_pool() -> Iterator[None]:
    yield
    # Clients are created lazily and never opened without a request, so a
    # plain clear is enough between tests.
    http_client._CLIENTS.clear()

