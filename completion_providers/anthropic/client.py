"""Anthropic adapter.

Messages API through the official ``anthropic`` SDK (``AsyncAnthropic``).
The system instruction is sent in the dedicated ``system`` field; every
non-user turn is sent with the ``assistant`` role. Text blocks of the reply are
concatenated.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional, Tuple

import anthropic

from ..base.adapter import BaseAdapter
from ..base.backends import Backend
from ..base.http import build_timeout
from ..base.logging import LogContext
from ..base.models import CompletionRequest, CompletionResponse, TokenUsage
from ..base.utils.messages import split_system
from ..base.utils.params import compact, pick
from ..base.utils.responses import normalize_finish_reason
from ..config.provider_config import ProviderConfig


def _extract_text(content: Any) -> str:
    """Join the ``text`` of every text block in a Messages API reply."""
    parts = []
    for block in content or ():
        if getattr(block, "type", "text") == "text":
            text = getattr(block, "text", None)
            if text:
                parts.append(text)
    return "".join(parts)


class AnthropicAdapter(BaseAdapter):
    """Anthropic Messages API adapter."""

    BACKEND = Backend.ANTHROPIC

    def __init__(self, client: Any = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._client = client
        self._clients: Dict[Tuple[Optional[str], Optional[str]], Any] = {}
        self._lock = threading.Lock()

    def _get_client(self, config: ProviderConfig) -> Any:
        if self._client is not None:
            return self._client
        key = (config.api_key, config.base_url)
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                client = anthropic.AsyncAnthropic(
                    api_key=config.api_key,
                    base_url=config.base_url,
                    timeout=build_timeout(),
                    max_retries=0,
                )
                self._clients[key] = client
            return client

    def build_payload(self, request: CompletionRequest, config: ProviderConfig) -> Dict[str, Any]:
        """Map the unified request onto ``messages.create`` kwargs."""
        system, turns = split_system(request, provider=self.BACKEND.value)
        messages = [
            {"role": "user" if t.role == "user" else "assistant", "content": t.content}
            for t in turns
        ]
        payload = compact(
            {
                "model": config.model,
                "messages": messages,
                "system": system,
                "max_tokens": pick(request.max_tokens, config.max_tokens),
                "temperature": pick(request.temperature, config.temperature),
                "top_p": request.top_p,
                "stop_sequences": request.stop_sequences or None,
            }
        )
        if config.extra:
            payload["extra_body"] = dict(config.extra)
        return payload

    async def _invoke(self, request: CompletionRequest, config: ProviderConfig, ctx: LogContext) -> CompletionResponse:
        payload = self.build_payload(request, config)
        resp = await self._get_client(config).messages.create(**payload)
        usage = getattr(resp, "usage", None)
        return CompletionResponse(
            text=_extract_text(resp.content),
            provider=self.BACKEND.value,
            model=getattr(resp, "model", None) or config.model,
            usage=TokenUsage.from_counts(
                getattr(usage, "input_tokens", None),
                getattr(usage, "output_tokens", None),
            ),
            finish_reason=normalize_finish_reason(getattr(resp, "stop_reason", None)),
        )

    async def aclose(self) -> None:
        """Close SDK clients created by this adapter."""
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            await client.close()


__all__ = ["AnthropicAdapter"]
