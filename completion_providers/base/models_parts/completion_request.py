"""
CompletionRequest DTO for backend-agnostic completion invocations.

Adapters map this normalized request shape onto their own wire format. Every
sampling parameter is optional; ``None`` means "use the backend's configured
default" and a parameter the backend does not understand is dropped.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .message import Message


@dataclass
class CompletionRequest:
    """Normalized completion request sent to backend adapters.

    Attributes:
        prompt: Single-shot prompt text, used when ``messages`` is empty.
        system: System instruction merged into the backend's system channel.
        messages: Ordered conversation turns.
        max_tokens: Upper bound on generated tokens.
        temperature: Sampling temperature.
        stop_sequences: Sequences that end generation.
        top_p: Nucleus sampling mass.
        presence_penalty: Presence penalty where the backend supports it.
        frequency_penalty: Frequency penalty where the backend supports it.
        context_id: Caller-supplied correlation id for multi-turn state; it is
            carried into logs but never sent to a backend.
        capabilities: Requested capability tags used for backend selection.
    """

    prompt: Optional[str] = None
    system: Optional[str] = None
    messages: List[Message] = field(default_factory=list)
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    stop_sequences: Optional[List[str]] = None
    top_p: Optional[float] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    context_id: Optional[str] = None
    capabilities: List[str] = field(default_factory=list)

    def has_content(self) -> bool:
        """Return True when the request carries a prompt or at least one turn."""
        return bool(self.prompt) or bool(self.messages)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "prompt": self.prompt,
            "system": self.system,
            "messages": [m.to_dict() for m in self.messages],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "stop_sequences": self.stop_sequences,
            "top_p": self.top_p,
            "presence_penalty": self.presence_penalty,
            "frequency_penalty": self.frequency_penalty,
            "context_id": self.context_id,
            "capabilities": list(self.capabilities),
        }


__all__ = [
    "CompletionRequest",
]
