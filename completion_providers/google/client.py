"""Google Generative AI adapter.

Uses the ``google-generativeai`` SDK (``GenerativeModel.generate_content_async``).
The SDK has no system role here: the system instruction is prepended to the
first user turn separated by a blank line. Assistant turns are sent with the
``model`` role.

Notes:
    ``genai.configure`` sets process-wide state, so it is only called when
    the API key changes, under a lock.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

import google.generativeai as genai

from ..base.adapter import BaseAdapter
from ..base.backends import Backend
from ..base.errors import AdapterProtocolError
from ..base.logging import LogContext
from ..base.models import CompletionRequest, CompletionResponse, TokenUsage
from ..base.utils.messages import prepend_system_to_first_user
from ..base.utils.params import compact, merge_extra, pick
from ..base.utils.responses import normalize_finish_reason
from ..config.provider_config import ProviderConfig

_configure_lock = threading.Lock()
_configured_key: Optional[str] = None


def _ensure_configured(api_key: Optional[str]) -> None:
    global _configured_key  # noqa: PLW0603 - mirrors the SDK's global config
    with _configure_lock:
        if api_key and api_key != _configured_key:
            genai.configure(api_key=api_key)
            _configured_key = api_key


def _candidate_text(resp: Any) -> str:
    """Extract text from the first candidate without tripping ``resp.text``.

    ``resp.text`` raises when a candidate was blocked; walking the parts yields
    an empty string instead.
    """
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    return "".join(getattr(p, "text", "") or "" for p in parts)


class GoogleAdapter(BaseAdapter):
    """Gemini adapter built on ``google-generativeai``."""

    BACKEND = Backend.GOOGLE

    def build_contents(self, request: CompletionRequest) -> List[Dict[str, Any]]:
        turns = prepend_system_to_first_user(request, provider=self.BACKEND.value)
        return [
            {"role": "user" if t.role == "user" else "model", "parts": [t.content]}
            for t in turns
        ]

    def build_generation_config(self, request: CompletionRequest, config: ProviderConfig) -> Dict[str, Any]:
        generation_config = compact(
            {
                "max_output_tokens": pick(request.max_tokens, config.max_tokens),
                "temperature": pick(request.temperature, config.temperature),
                "top_p": request.top_p,
                "stop_sequences": request.stop_sequences or None,
                "presence_penalty": request.presence_penalty,
                "frequency_penalty": request.frequency_penalty,
            }
        )
        return merge_extra(generation_config, config.extra)

    async def _invoke(self, request: CompletionRequest, config: ProviderConfig, ctx: LogContext) -> CompletionResponse:
        contents = self.build_contents(request)
        _ensure_configured(config.api_key)
        gen_model = genai.GenerativeModel(
            model_name=config.model,
            generation_config=self.build_generation_config(request, config),
        )
        resp = await gen_model.generate_content_async(contents)
        candidates = getattr(resp, "candidates", None) or []
        block_reason = getattr(getattr(resp, "prompt_feedback", None), "block_reason", None)
        if not candidates and not block_reason:
            raise AdapterProtocolError(
                message="Google response contained no candidates",
                provider=self.BACKEND.value,
                model=config.model,
            )
        finish = getattr(candidates[0], "finish_reason", None) if candidates else "content_filter"
        usage = getattr(resp, "usage_metadata", None)
        return CompletionResponse(
            text=_candidate_text(resp),
            provider=self.BACKEND.value,
            model=config.model,
            usage=TokenUsage.from_counts(
                getattr(usage, "prompt_token_count", None),
                getattr(usage, "candidates_token_count", None),
                getattr(usage, "total_token_count", None),
            ),
            finish_reason=normalize_finish_reason(finish),
        )


__all__ = ["GoogleAdapter"]
