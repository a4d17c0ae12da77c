from __future__ import annotations

import os

import uvicorn

from ..config.defaults import PROVIDER_SERVICE_DEFAULT_HOST, PROVIDER_SERVICE_DEFAULT_PORT


def _parse_port(value: str | None, default: int) -> int:
    """Best-effort parse of a port from string, falling back to ``default``."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start the development server for the completion service.

    Environment:

    - PROVIDER_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - PROVIDER_SERVICE_PORT: port to bind (default 3001)
    - PROVIDER_SERVICE_RELOAD: "true"/"false" to toggle auto-reload
      (default False).
    """
    host = os.getenv("PROVIDER_SERVICE_HOST", PROVIDER_SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv("PROVIDER_SERVICE_PORT"), PROVIDER_SERVICE_DEFAULT_PORT)
    reload_enabled = (os.getenv("PROVIDER_SERVICE_RELOAD") or "").lower() == "true"

    uvicorn.run(
        "completion_providers.service.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
