"""Completion router with capability-based selection and single-level fallback.

Flow for one request:

1. Reject requests carrying neither a prompt nor turns.
2. Resolve the backend: explicit argument, else capability best match when the
   request lists capabilities, else the store default.
3. Invoke the backend's adapter.
4. On an adapter failure, when fallback is enabled, try every other configured
   backend once (cloud backends first, then local ones) and return the first
   success. Fallback attempts never fall back again.

Configuration and validation errors are never retried on another backend.
There is no backoff and no same-backend retry.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from ...config.provider_config import ProviderConfig
from ...config.store import ProviderConfigStore
from ..backends import CLOUD_BACKENDS, LOCAL_BACKENDS, Backend
from ..capabilities import CapabilityCatalog
from ..errors import (
    ConfigurationError,
    FallbackExhaustedError,
    InvalidRequestError,
    ProviderError,
    to_adapter_error,
)
from ..interfaces import CompletionAdapter
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import CompletionRequest, CompletionResponse
from ..utils.messages import MISSING_CONTENT_ERROR


class CompletionRouter:
    """Routes completion requests to configured backends.

    Example usage::

        router = CompletionRouter(store, adapters, CapabilityCatalog())
        response = await router.complete(CompletionRequest(prompt="hi"))
    """

    def __init__(
        self,
        store: ProviderConfigStore,
        adapters: Mapping[Backend, CompletionAdapter],
        catalog: Optional[CapabilityCatalog] = None,
        fallback_enabled: Optional[bool] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._adapters: Dict[Backend, CompletionAdapter] = dict(adapters)
        self._catalog = catalog or CapabilityCatalog()
        self._fallback_enabled = store.fallback_enabled if fallback_enabled is None else fallback_enabled
        self._logger = logger or get_logger("providers.router")

    @property
    def fallback_enabled(self) -> bool:
        return self._fallback_enabled

    async def complete(
        self,
        request: CompletionRequest,
        backend: "Backend | str | None" = None,
    ) -> CompletionResponse:
        """Produce a completion, falling back to other backends on failure.

        Raises
        ------
        InvalidRequestError
            Neither ``prompt`` nor ``messages`` was supplied.
        ConfigurationError
            No backend could be resolved, or the resolved one is not
            configured.
        FallbackExhaustedError
            The selected backend and every fallback failed.
        ProviderError
            The selected backend failed and fallback is disabled.
        """
        if not request.has_content():
            raise InvalidRequestError(message=MISSING_CONTENT_ERROR)
        selected, reason = self._resolve(request, backend)
        return await self._attempt(request, selected, reason=reason, is_fallback=False)

    def _resolve(self, request: CompletionRequest, backend: "Backend | str | None") -> Tuple[Backend, str]:
        if backend is not None:
            parsed = Backend.parse(backend)
            if parsed is None:
                raise ConfigurationError(message=f"Unknown provider: {backend}", provider=str(backend))
            return parsed, "explicit"
        if request.capabilities:
            chosen, _model = self._catalog.best_match(self._store, request.capabilities)
            return chosen, "capabilities"
        default = self._store.default
        if default is None:
            raise ConfigurationError(message="No LLM providers are configured")
        return default, "default"

    def _lookup(self, backend: Backend) -> Tuple[ProviderConfig, CompletionAdapter]:
        config = self._store.get(backend)
        adapter = self._adapters.get(backend)
        if config is None or adapter is None:
            raise ConfigurationError(
                message=f"Provider {backend.value} is not configured",
                provider=backend.value,
            )
        return config, adapter

    async def _attempt(
        self,
        request: CompletionRequest,
        backend: Backend,
        *,
        reason: str,
        is_fallback: bool,
    ) -> CompletionResponse:
        config, adapter = self._lookup(backend)
        ctx = LogContext(provider=backend.value, model=config.model, context_id=request.context_id)
        log_event(self._logger, "route.selected", ctx, reason=reason, fallback=is_fallback)
        try:
            return await adapter.complete(request, config)
        except Exception as exc:  # noqa: BLE001 - normalized below
            err = to_adapter_error(exc, provider=backend.value, model=config.model)
            normalized_log_event(
                self._logger,
                "route.error",
                ctx,
                phase="error",
                error_code=err.code.value,
                level=logging.WARNING,
                error=err.message,
            )
            if is_fallback or not self._fallback_enabled or not err.fallback_eligible:
                if err is exc:
                    raise
                raise err from exc
        return await self._fallback(request, backend, err)

    def fallback_backends(self, failed: "Backend | str") -> List[Backend]:
        """Configured backends to try after ``failed``: cloud first, then local.

        ``failed`` itself and unconfigured backends are never included.
        """
        failed_backend = Backend.parse(failed)
        return [
            b
            for b in (*CLOUD_BACKENDS, *LOCAL_BACKENDS)
            if b is not failed_backend and self._store.is_configured(b) and b in self._adapters
        ]

    async def _fallback(
        self,
        request: CompletionRequest,
        failed: Backend,
        first_error: ProviderError,
    ) -> CompletionResponse:
        attempts: List[ProviderError] = [first_error]
        candidates = self.fallback_backends(failed)
        if not candidates:
            raise first_error
        for attempt_no, candidate in enumerate(candidates, start=1):
            normalized_log_event(
                self._logger,
                "route.fallback",
                LogContext(provider=candidate.value, context_id=request.context_id),
                phase="fallback",
                attempt=attempt_no,
                failed_provider=failed.value,
            )
            try:
                return await self._attempt(request, candidate, reason="fallback", is_fallback=True)
            except ProviderError as err:
                attempts.append(err)
        last = attempts[-1]
        raise FallbackExhaustedError(
            message=last.message,
            provider=last.provider,
            code=last.code,
            model=last.model,
            retryable=last.retryable,
            raw=last,
            first_error=first_error,
            attempts=attempts,
        )


__all__ = ["CompletionRouter"]
