"""Ollama adapter.

Talks to the local Ollama daemon (``OLLAMA_HOST``, e.g.
``http://localhost:11434``) via ``POST /api/chat`` with ``stream: false``.
Generation parameters travel in ``options`` (``num_predict`` is the token
cap). Usage is read from ``prompt_eval_count`` / ``eval_count`` and the finish
reason from ``done_reason``.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.adapter import HttpAdapter
from ..base.backends import Backend
from ..base.http import post_json
from ..base.logging import LogContext
from ..base.models import CompletionRequest, CompletionResponse, TokenUsage
from ..base.utils.messages import with_system_turn
from ..base.utils.params import compact, pick
from ..base.utils.responses import normalize_finish_reason
from ..config.provider_config import ProviderConfig

CHAT_PATH = "/api/chat"


class OllamaAdapter(HttpAdapter):
    """Local Ollama daemon adapter."""

    BACKEND = Backend.OLLAMA

    def build_payload(self, request: CompletionRequest, config: ProviderConfig) -> Dict[str, Any]:
        turns = with_system_turn(request, provider=self.BACKEND.value)
        options = compact(
            {
                "num_predict": pick(request.max_tokens, config.max_tokens),
                "temperature": pick(request.temperature, config.temperature),
                "top_p": request.top_p,
                "stop": request.stop_sequences or None,
                "presence_penalty": request.presence_penalty,
                "frequency_penalty": request.frequency_penalty,
            }
        )
        payload: Dict[str, Any] = {
            "model": config.model,
            "messages": [t.to_dict() for t in turns],
            "stream": False,
            "options": options,
        }
        # ``extra`` entries go to the top level (e.g. ``keep_alive``), except a
        # nested ``options`` mapping which is merged into the generation options.
        for key, value in config.extra.items():
            if key == "options" and isinstance(value, dict):
                options.update(value)
            elif key not in ("messages", "stream"):
                payload[key] = value
        return payload

    async def _invoke(self, request: CompletionRequest, config: ProviderConfig, ctx: LogContext) -> CompletionResponse:
        data = await post_json(self._http(config), CHAT_PATH, self.build_payload(request, config))
        message = data["message"]
        return CompletionResponse(
            text=message.get("content") or "",
            provider=self.BACKEND.value,
            model=data.get("model") or config.model,
            usage=TokenUsage.from_counts(data.get("prompt_eval_count"), data.get("eval_count")),
            finish_reason=normalize_finish_reason(data.get("done_reason")),
        )


__all__ = ["OllamaAdapter", "CHAT_PATH"]
