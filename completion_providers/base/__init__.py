"""
Completion Base Package

Exports backend-agnostic contracts, DTOs, the error taxonomy, the capability
catalog and the adapter factory.

Modules that need configuration objects (``adapter``, ``routing``) are not
imported here; import them from their own modules.
"""

from .backends import CLOUD_BACKENDS, LOCAL_BACKENDS, Backend
from .capabilities import Capability, CapabilityCatalog
from .errors import (
    AdapterProtocolError,
    AdapterTransportError,
    ConfigurationError,
    EmbeddingUnsupportedError,
    ErrorCode,
    FallbackExhaustedError,
    InvalidRequestError,
    LocalProcessError,
    ProviderError,
    classify_exception,
)
from .factory import AdapterFactory, UnknownBackendError
from .interfaces import CompletionAdapter, SupportsEmbeddings
from .models import CompletionRequest, CompletionResponse, Message, TokenUsage
from .processes import ProcessRegistry
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "Backend",
    "CLOUD_BACKENDS",
    "LOCAL_BACKENDS",
    "Capability",
    "CapabilityCatalog",
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "InvalidRequestError",
    "AdapterTransportError",
    "AdapterProtocolError",
    "LocalProcessError",
    "EmbeddingUnsupportedError",
    "FallbackExhaustedError",
    "classify_exception",
    "AdapterFactory",
    "UnknownBackendError",
    "CompletionAdapter",
    "SupportsEmbeddings",
    "CompletionRequest",
    "CompletionResponse",
    "Message",
    "TokenUsage",
    "ProcessRegistry",
    "TimeoutConfig",
    "get_timeout_config",
]
