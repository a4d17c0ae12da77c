"""Response normalization helpers shared across adapters."""
from __future__ import annotations

from typing import Any, Dict

_FINISH_REASON_MAP: Dict[str, str] = {
    "stop": "stop",
    "end_turn": "stop",
    "stop_sequence": "stop",
    "complete": "stop",
    "eos": "stop",
    "length": "length",
    "max_tokens": "length",
    "tool_use": "tool_calls",
    "tool_calls": "tool_calls",
    "function_call": "tool_calls",
    "content_filter": "content_filter",
    "safety": "content_filter",
    "recitation": "content_filter",
    "error_toxic": "content_filter",
}


def normalize_finish_reason(value: Any) -> str:
    """Map a backend-native finish reason onto the unified vocabulary.

    Enum-like values are reduced to their ``name``. Unknown reasons are passed
    through lowercased; a missing reason is reported as ``"stop"``.
    """
    if value is None:
        return "stop"
    name = getattr(value, "name", value)
    text = str(name).strip().lower()
    if not text or text in ("finish_reason_unspecified", "unspecified"):
        return "stop"
    return _FINISH_REASON_MAP.get(text, text)


__all__ = ["normalize_finish_reason"]
