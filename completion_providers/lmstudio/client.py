"""LM Studio adapter.

LM Studio exposes an OpenAI-compatible server; ``LMSTUDIO_HOST`` is its base
URL including the ``/v1`` prefix (e.g. ``http://localhost:1234/v1``). The
adapter posts to ``/chat/completions`` with ``httpx`` and reads the standard
``choices`` / ``usage`` shape. No API key is required.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.adapter import HttpAdapter
from ..base.backends import Backend
from ..base.http import post_json
from ..base.logging import LogContext
from ..base.models import CompletionRequest, CompletionResponse, TokenUsage
from ..base.utils.messages import with_system_turn
from ..base.utils.params import compact, merge_extra, pick
from ..base.utils.responses import normalize_finish_reason
from ..config.provider_config import ProviderConfig

CHAT_PATH = "/chat/completions"


class LMStudioAdapter(HttpAdapter):
    """OpenAI-compatible local server adapter."""

    BACKEND = Backend.LMSTUDIO

    def build_payload(self, request: CompletionRequest, config: ProviderConfig) -> Dict[str, Any]:
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
                "stream": False,
            }
        )
        return merge_extra(payload, config.extra, reserved=("messages", "stream"))

    async def _invoke(self, request: CompletionRequest, config: ProviderConfig, ctx: LogContext) -> CompletionResponse:
        data = await post_json(self._http(config), CHAT_PATH, self.build_payload(request, config))
        choice = data["choices"][0]
        usage = data.get("usage") or {}
        return CompletionResponse(
            text=choice["message"].get("content") or "",
            provider=self.BACKEND.value,
            model=data.get("model") or config.model,
            usage=TokenUsage.from_counts(
                usage.get("prompt_tokens"),
                usage.get("completion_tokens"),
                usage.get("total_tokens"),
            ),
            finish_reason=normalize_finish_reason(choice.get("finish_reason")),
        )


__all__ = ["LMStudioAdapter", "CHAT_PATH"]
