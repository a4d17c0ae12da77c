"""Shared async HTTP client pool for adapters.

Purpose:
    Provide a centralized pool of reusable ``httpx.AsyncClient`` instances so
    that concurrent completions against the same backend share connections.
    Timeouts derive exclusively from :func:`get_timeout_config`.

Lifecycle & cleanup:
    - Clients are cached by a composite key of ``base_url`` and ``purpose``.
    - :func:`close_all_clients` closes every pooled client; the composition
      root calls it on shutdown.

Thread-safety:
    Pool mutations are guarded by a lock so the pool is also safe to touch from
    worker threads (e.g. FastAPI sync dependencies).
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.AsyncClient] = {}
_LOCK = threading.RLock()


def build_timeout() -> httpx.Timeout:
    """Return the ``httpx.Timeout`` derived from the shared timeout config."""
    cfg = get_timeout_config()
    return httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.connect_timeout_seconds)


def get_async_client(
    base_url: Optional[str],
    purpose: str,
    headers: Optional[Mapping[str, str]] = None,
) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    Parameters:
        base_url: API base URL; relative request paths are resolved against it.
        purpose: Short discriminator (e.g. ``"cohere.chat"``). Keep stable to
            maximize reuse.
        headers: Static headers applied when the client is first created.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        kwargs = {"timeout": build_timeout(), "headers": dict(headers or {})}
        client = httpx.AsyncClient(base_url=base_url, **kwargs) if base_url else httpx.AsyncClient(**kwargs)
        _CLIENTS[key] = client
        return client


async def post_json(
    client: httpx.AsyncClient,
    path: str,
    payload: Mapping[str, Any],
    headers: Optional[Mapping[str, str]] = None,
) -> Any:
    """POST ``payload`` as JSON and return the decoded body.

    Non-2xx answers raise ``httpx.HTTPStatusError`` (classified by status);
    an undecodable body raises ``json.JSONDecodeError``.
    """
    resp = await client.post(path, json=dict(payload), headers=dict(headers or {}))
    resp.raise_for_status()
    return resp.json()


async def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for c in clients:
        await c.aclose()


__all__ = ["get_async_client", "close_all_clients", "build_timeout", "post_json"]
