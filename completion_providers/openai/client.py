"""OpenAI adapter.

Chat completions and embeddings through the official ``openai`` SDK
(``AsyncOpenAI``). The system instruction travels as a leading system turn.

Timeouts come from ``get_timeout_config()``; the SDK's own retries are
disabled so the router alone decides what happens after a failure.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Tuple

import openai

from ..base.adapter import BaseAdapter
from ..base.backends import Backend
from ..base.errors import AdapterProtocolError, to_adapter_error
from ..base.http import build_timeout
from ..base.logging import LogContext, log_event
from ..base.models import CompletionRequest, CompletionResponse, TokenUsage
from ..base.utils.messages import with_system_turn
from ..base.utils.params import compact, pick
from ..base.utils.responses import normalize_finish_reason
from ..config.defaults import OPENAI_DEFAULT_EMBEDDING_MODEL
from ..config.provider_config import ProviderConfig

# ``extra`` keys consumed by the adapter itself rather than sent upstream.
_RESERVED_EXTRA = ("embedding_model",)


class OpenAIAdapter(BaseAdapter):
    """OpenAI chat completion + embedding adapter."""

    BACKEND = Backend.OPENAI

    def __init__(self, client: Any = None, **kwargs: Any) -> None:
        """
        Args:
            client: Optional pre-built ``AsyncOpenAI``-compatible client. When
                omitted one client is created per distinct credential set.
        """
        super().__init__(**kwargs)
        self._client = client
        self._clients: Dict[Tuple[Optional[str], Optional[str], Optional[str]], Any] = {}
        self._lock = threading.Lock()

    def _get_client(self, config: ProviderConfig) -> Any:
        if self._client is not None:
            return self._client
        key = (config.api_key, config.base_url, config.organization)
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                client = openai.AsyncOpenAI(
                    api_key=config.api_key,
                    organization=config.organization,
                    base_url=config.base_url,
                    timeout=build_timeout(),
                    max_retries=0,
                )
                self._clients[key] = client
            return client

    def build_payload(self, request: CompletionRequest, config: ProviderConfig) -> Dict[str, Any]:
        """Map the unified request onto ``chat.completions.create`` kwargs."""
        turns = with_system_turn(request, provider=self.BACKEND.value)
        payload = compact(
            {
                "model": config.model,
                "messages": [t.to_dict() for t in turns],
                "max_tokens": pick(request.max_tokens, config.max_tokens),
                "temperature": pick(request.temperature, config.temperature),
                "top_p": request.top_p,
                "stop": request.stop_sequences or None,
                "presence_penalty": request.presence_penalty,
                "frequency_penalty": request.frequency_penalty,
            }
        )
        extra = {k: v for k, v in config.extra.items() if k not in _RESERVED_EXTRA}
        if extra:
            payload["extra_body"] = extra
        return payload

    async def _invoke(self, request: CompletionRequest, config: ProviderConfig, ctx: LogContext) -> CompletionResponse:
        payload = self.build_payload(request, config)
        resp = await self._get_client(config).chat.completions.create(**payload)
        if not resp.choices:
            raise AdapterProtocolError(
                message="OpenAI response contained no choices",
                provider=self.BACKEND.value,
                model=config.model,
            )
        choice = resp.choices[0]
        usage = getattr(resp, "usage", None)
        return CompletionResponse(
            text=choice.message.content or "",
            provider=self.BACKEND.value,
            model=getattr(resp, "model", None) or config.model,
            usage=TokenUsage.from_counts(
                getattr(usage, "prompt_tokens", None),
                getattr(usage, "completion_tokens", None),
                getattr(usage, "total_tokens", None),
            ),
            finish_reason=normalize_finish_reason(getattr(choice, "finish_reason", None)),
        )

    async def embed(self, text: str, config: ProviderConfig) -> List[float]:
        """Return the embedding vector for ``text``.

        Uses ``extra["embedding_model"]`` when set, else
        ``text-embedding-3-small``.
        """
        model = str(config.extra.get("embedding_model") or OPENAI_DEFAULT_EMBEDDING_MODEL)
        ctx = LogContext(provider=self.BACKEND.value, model=model)
        log_event(self._logger, "embedding.start", ctx, chars=len(text))
        try:
            resp = await self._get_client(config).embeddings.create(model=model, input=text)
            vector = [float(v) for v in resp.data[0].embedding]
        except Exception as exc:  # noqa: BLE001 - normalized and re-raised
            err = to_adapter_error(exc, provider=self.BACKEND.value, model=model)
            log_event(self._logger, "embedding.error", ctx, error_code=err.code.value, error=err.message)
            if err is exc:
                raise
            raise err from exc
        log_event(self._logger, "embedding.end", ctx, dimensions=len(vector))
        return vector

    async def aclose(self) -> None:
        """Close SDK clients created by this adapter."""
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            await client.close()


__all__ = ["OpenAIAdapter"]
