"""Request body models for the HTTP service.

Field names are snake_case in Python and camelCase on the wire
(``maxTokens``, ``stopSequences`` ...); both spellings are accepted.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...base.backends import Backend
from ...base.models import CompletionRequest, Message


class MessageBody(BaseModel):
    """Single conversation turn."""

    role: str
    content: str


class CompletionBody(BaseModel):
    """Body of ``POST /completion``.

    Neither ``prompt`` nor ``messages`` is required by the schema itself; the
    endpoint rejects a body carrying neither with a 400.
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = None
    system: Optional[str] = None
    messages: Optional[List[MessageBody]] = None
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens", gt=0)
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    stop_sequences: Optional[List[str]] = Field(default=None, alias="stopSequences")
    top_p: Optional[float] = Field(default=None, alias="topP", ge=0, le=1)
    presence_penalty: Optional[float] = Field(default=None, alias="presencePenalty", ge=-2, le=2)
    frequency_penalty: Optional[float] = Field(default=None, alias="frequencyPenalty", ge=-2, le=2)
    context_id: Optional[str] = Field(default=None, alias="contextId")
    provider: Optional[Backend] = None
    capabilities: Optional[List[str]] = None

    def to_request(self) -> CompletionRequest:
        return CompletionRequest(
            prompt=self.prompt,
            system=self.system,
            messages=[Message(role=m.role, content=m.content) for m in self.messages or []],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            stop_sequences=self.stop_sequences,
            top_p=self.top_p,
            presence_penalty=self.presence_penalty,
            frequency_penalty=self.frequency_penalty,
            context_id=self.context_id,
            capabilities=list(self.capabilities or []),
        )


class EmbeddingBody(BaseModel):
    """Body of ``POST /embedding``."""

    text: str = Field(min_length=1)
    provider: Optional[Backend] = None


__all__ = ["MessageBody", "CompletionBody", "EmbeddingBody"]
