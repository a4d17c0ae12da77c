"""
Token accounting DTO.

Backends report usage under different names (``prompt_tokens``,
``input_tokens``, ``prompt_eval_count``, billed units) or not at all. The
normalized shape always carries three integers; unknown values are zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _as_int(value: Any) -> int:
    try:
        return int(value) if value is not None else 0
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class TokenUsage:
    """Prompt/completion/total token counts (zero when not reported)."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_counts(
        cls,
        prompt: Any = None,
        completion: Any = None,
        total: Optional[Any] = None,
    ) -> "TokenUsage":
        """Build usage from loosely-typed counts; ``total`` defaults to the sum."""
        p = _as_int(prompt)
        c = _as_int(completion)
        t = _as_int(total) if total is not None else p + c
        return cls(prompt_tokens=p, completion_tokens=c, total_tokens=t)

    def to_dict(self) -> Dict[str, int]:
        return {
            "promptTokens": self.prompt_tokens,
            "completionTokens": self.completion_tokens,
            "totalTokens": self.total_tokens,
        }


__all__ = ["TokenUsage"]
