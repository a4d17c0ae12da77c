"""Cohere adapter.

Calls the Cohere v1 ``/chat`` REST endpoint with ``httpx`` (no SDK).

Wire mapping:
    - the system instruction becomes ``preamble``
    - the last turn becomes ``message``; earlier turns become
      ``chat_history`` with ``USER`` / ``CHATBOT`` roles
    - ``top_p`` is sent as ``p``
    - usage is read from ``meta.billed_units`` (zero when absent)
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.adapter import HttpAdapter
from ..base.backends import Backend
from ..base.errors import AdapterProtocolError, InvalidRequestError
from ..base.http import post_json
from ..base.logging import LogContext
from ..base.models import CompletionRequest, CompletionResponse, TokenUsage
from ..base.utils.messages import MISSING_CONTENT_ERROR, split_system
from ..base.utils.params import compact, merge_extra, pick
from ..base.utils.responses import normalize_finish_reason
from ..config.provider_config import ProviderConfig

CHAT_PATH = "/chat"


class CohereAdapter(HttpAdapter):
    """Cohere chat adapter over plain HTTP."""

    BACKEND = Backend.COHERE

    def build_payload(self, request: CompletionRequest, config: ProviderConfig) -> Dict[str, Any]:
        preamble, turns = split_system(request, provider=self.BACKEND.value)
        if not turns:
            raise InvalidRequestError(message=MISSING_CONTENT_ERROR, provider=self.BACKEND.value)
        *history, last = turns
        payload = compact(
            {
                "model": config.model,
                "message": last.content,
                "preamble": preamble,
                "chat_history": [
                    {"role": "USER" if t.role == "user" else "CHATBOT", "message": t.content}
                    for t in history
                ]
                or None,
                "max_tokens": pick(request.max_tokens, config.max_tokens),
                "temperature": pick(request.temperature, config.temperature),
                "p": request.top_p,
                "stop_sequences": request.stop_sequences or None,
                "presence_penalty": request.presence_penalty,
                "frequency_penalty": request.frequency_penalty,
            }
        )
        return merge_extra(payload, config.extra, reserved=("message", "chat_history"))

    async def _invoke(self, request: CompletionRequest, config: ProviderConfig, ctx: LogContext) -> CompletionResponse:
        payload = self.build_payload(request, config)
        headers = {"Authorization": f"Bearer {config.api_key}", "Accept": "application/json"}
        data = await post_json(self._http(config), CHAT_PATH, payload, headers=headers)
        if not isinstance(data, dict) or "text" not in data:
            raise AdapterProtocolError(
                message="Cohere response is missing 'text'",
                provider=self.BACKEND.value,
                model=config.model,
            )
        billed = (data.get("meta") or {}).get("billed_units") or {}
        return CompletionResponse(
            text=data["text"] or "",
            provider=self.BACKEND.value,
            model=config.model,
            usage=TokenUsage.from_counts(billed.get("input_tokens"), billed.get("output_tokens")),
            finish_reason=normalize_finish_reason(data.get("finish_reason")),
        )


__all__ = ["CohereAdapter", "CHAT_PATH"]
