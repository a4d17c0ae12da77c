"""Unified request/response DTOs public surface.

Re-exports the one-class-per-file implementations under
``completion_providers.base.models_parts``.
"""

from .models_parts.message import Message, Role
from .models_parts.completion_request import CompletionRequest
from .models_parts.completion_response import CompletionResponse
from .models_parts.token_usage import TokenUsage

__all__ = [
    "Message",
    "Role",
    "CompletionRequest",
    "CompletionResponse",
    "TokenUsage",
]
