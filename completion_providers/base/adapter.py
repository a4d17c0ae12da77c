"""Shared adapter scaffolding.

:class:`BaseAdapter` centralizes what every backend adapter does around the
actual wire call:

- a per-call :class:`LogContext` (backend, model, request id, context id)
- ``completion.start`` / ``completion.end`` / ``completion.error`` events via
  ``normalized_log_event``
- mapping any non-``ProviderError`` exception onto the routing taxonomy with
  :func:`to_adapter_error`

Subclasses implement :meth:`_invoke` and return a fully normalized
:class:`CompletionResponse`.
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Optional

import httpx

from ..config.provider_config import ProviderConfig
from .backends import Backend
from .errors import to_adapter_error
from .http import get_async_client
from .logging import LogContext, get_logger, normalized_log_event
from .models import CompletionRequest, CompletionResponse


class BaseAdapter:
    """Common ``complete`` wrapper; subclasses provide ``_invoke``."""

    BACKEND: Backend

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or get_logger(f"providers.{self.BACKEND.value}")

    @property
    def backend(self) -> Backend:
        return self.BACKEND

    async def complete(self, request: CompletionRequest, config: ProviderConfig) -> CompletionResponse:
        ctx = LogContext(
            provider=self.BACKEND.value,
            model=config.model,
            request_id=uuid.uuid4().hex,
            context_id=request.context_id,
        )
        normalized_log_event(self._logger, "completion.start", ctx, phase="start", attempt=1)
        started = time.perf_counter()
        try:
            response = await self._invoke(request, config, ctx)
        except Exception as exc:  # noqa: BLE001 - normalized and re-raised
            err = to_adapter_error(exc, provider=self.BACKEND.value, model=config.model)
            normalized_log_event(
                self._logger,
                "completion.error",
                ctx,
                phase="error",
                attempt=1,
                error_code=err.code.value,
                level=logging.WARNING,
                error=err.message,
            )
            if err is exc:
                raise
            raise err from exc
        normalized_log_event(
            self._logger,
            "completion.end",
            ctx,
            phase="finalize",
            attempt=1,
            tokens=response.usage,
            duration_ms=int((time.perf_counter() - started) * 1000),
            finish_reason=response.finish_reason,
        )
        return response

    async def _invoke(
        self, request: CompletionRequest, config: ProviderConfig, ctx: LogContext
    ) -> CompletionResponse:  # pragma: no cover - abstract
        raise NotImplementedError

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{type(self).__name__}(backend={self.BACKEND.value!r})"


class HttpAdapter(BaseAdapter):
    """Adapter speaking plain JSON over ``httpx`` (no vendor SDK)."""

    PURPOSE = "chat"

    def __init__(self, client: Optional[httpx.AsyncClient] = None, **kwargs: Any) -> None:
        """
        Args:
            client: Optional pre-built ``httpx.AsyncClient`` (tests pass one
                backed by ``httpx.MockTransport``). When omitted a pooled
                client keyed by base URL is used.
        """
        super().__init__(**kwargs)
        self._client = client

    def _http(self, config: ProviderConfig) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return get_async_client(config.base_url, f"{self.BACKEND.value}.{self.PURPOSE}")


__all__ = ["BaseAdapter", "HttpAdapter"]
