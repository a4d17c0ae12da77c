"""
CompletionResponse DTO representing normalized backend responses.

The contract guarantees every field exists; fidelity of ``usage`` and
``finish_reason`` depends on what the backend reports.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .token_usage import TokenUsage


@dataclass
class CompletionResponse:
    """Backend-agnostic response from a completion invocation.

    Attributes:
        text: Generated text (empty string when the backend produced none).
        usage: Normalized :class:`TokenUsage`; zero-filled when unreported.
        provider: Identifier of the backend that actually served the request.
        model: Identifier of the model that actually served the request.
        finish_reason: Normalized lowercase finish reason (``"stop"`` when the
            backend does not report one).
    """

    text: str
    provider: str
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    finish_reason: str = "stop"

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON shape served by the HTTP layer."""
        return {
            "text": self.text,
            "usage": self.usage.to_dict(),
            "provider": self.provider,
            "model": self.model,
            "finishReason": self.finish_reason,
        }


__all__ = [
    "CompletionResponse",
]
