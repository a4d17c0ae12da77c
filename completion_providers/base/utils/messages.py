"""Message assembly helpers shared across adapters.

Every adapter starts from :func:`conversation_turns`, which enforces the
unified contract (``prompt`` or non-empty ``messages``) and synthesizes a single
user turn from ``prompt`` when no turns were supplied. The remaining helpers
place the ``system`` instruction where each backend family expects it.

Helpers here are side-effect free and operate on DTOs only.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..errors import InvalidRequestError
from ..models import CompletionRequest, Message

MISSING_CONTENT_ERROR = "Either prompt or messages is required"


def conversation_turns(request: CompletionRequest, *, provider: str = "unknown") -> List[Message]:
    """Return the ordered turns for ``request``.

    Raises:
        InvalidRequestError: When the request has neither a prompt nor turns.
    """
    if request.messages:
        return [Message(role=m.role, content=m.content) for m in request.messages]
    if request.prompt:
        return [Message(role="user", content=request.prompt)]
    raise InvalidRequestError(message=MISSING_CONTENT_ERROR, provider=provider)


def with_system_turn(request: CompletionRequest, *, provider: str = "unknown") -> List[Message]:
    """Turns with ``system`` as a leading system turn (OpenAI-style backends).

    A system turn already present in ``messages`` wins over ``request.system``.
    """
    turns = conversation_turns(request, provider=provider)
    if request.system and not any(t.role == "system" for t in turns):
        turns.insert(0, Message(role="system", content=request.system))
    return turns


def split_system(request: CompletionRequest, *, provider: str = "unknown") -> Tuple[Optional[str], List[Message]]:
    """Separate the system instruction from conversational turns.

    Used by backends with a dedicated system/preamble field. ``request.system``
    and any system-role turns are joined with blank lines.
    """
    turns = conversation_turns(request, provider=provider)
    system_parts = [request.system] if request.system else []
    system_parts.extend(t.content for t in turns if t.role == "system")
    rest = [t for t in turns if t.role != "system"]
    system = "\n\n".join(p for p in system_parts if p) or None
    return system, rest


def prepend_system_to_first_user(request: CompletionRequest, *, provider: str = "unknown") -> List[Message]:
    """Fold the system instruction into the first user turn.

    Used by backends without a system role. When there is no user turn the
    instruction becomes a leading user turn of its own.
    """
    system, turns = split_system(request, provider=provider)
    if not system:
        return turns
    for idx, turn in enumerate(turns):
        if turn.role == "user":
            turns[idx] = Message(role="user", content=f"{system}\n\n{turn.content}")
            return turns
    return [Message(role="user", content=system), *turns]


def render_transcript(request: CompletionRequest, *, provider: str = "unknown") -> str:
    """Render the request as one plain-text prompt (local process runner).

    A single user turn renders as its bare content; longer conversations are
    rendered as ``Role: content`` paragraphs.
    """
    turns = prepend_system_to_first_user(request, provider=provider)
    if len(turns) == 1 and turns[0].role == "user":
        return turns[0].content
    return "\n\n".join(f"{t.role.capitalize()}: {t.content}" for t in turns)


__all__ = [
    "MISSING_CONTENT_ERROR",
    "conversation_turns",
    "with_system_turn",
    "split_system",
    "prepend_system_to_first_user",
    "render_transcript",
]
