"""completion_providers package

Provider abstraction and completion routing for text-generation backends.

Purpose:
    Normalize seven backends (OpenAI, Anthropic, Google, Cohere, LM Studio,
    Ollama and a local model-runner process) behind one request/response
    contract, pick a backend by requested capability, and fall back to other
    configured backends when the selected one fails.

Public API (re-exported):
    - Version: ``__version__``
    - DTOs: :class:`CompletionRequest`, :class:`CompletionResponse`,
      :class:`Message`, :class:`TokenUsage`
    - Configuration: :class:`ProviderConfigStore`, :class:`ProviderConfig`
    - Routing: :class:`CompletionRouter`, :class:`CapabilityCatalog`,
      :class:`EmbeddingService`
    - Composition: :class:`ProvidersContainer`
    - Errors: :class:`ProviderError`, :class:`ErrorCode` and subclasses

Example:
    >>> container = ProvidersContainer()
    >>> await container.router().complete(CompletionRequest(prompt="Hello"))
"""

from .base import (
    Backend,
    Capability,
    CapabilityCatalog,
    CompletionRequest,
    CompletionResponse,
    ConfigurationError,
    ErrorCode,
    FallbackExhaustedError,
    InvalidRequestError,
    Message,
    ProviderError,
    TokenUsage,
)
from .config import ProviderConfig, ProviderConfigStore
from .base.routing import CompletionRouter
from .embedding import EmbeddingService
from .di import ProvidersContainer

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Backend",
    "Capability",
    "CapabilityCatalog",
    "CompletionRequest",
    "CompletionResponse",
    "Message",
    "TokenUsage",
    "ProviderConfig",
    "ProviderConfigStore",
    "CompletionRouter",
    "EmbeddingService",
    "ProvidersContainer",
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "InvalidRequestError",
    "FallbackExhaustedError",
]
