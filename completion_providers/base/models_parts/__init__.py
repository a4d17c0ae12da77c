"""Model DTO parts (one class per file)."""

from .message import Message, Role
from .completion_request import CompletionRequest
from .completion_response import CompletionResponse
from .token_usage import TokenUsage

__all__ = ["Message", "Role", "CompletionRequest", "CompletionResponse", "TokenUsage"]
