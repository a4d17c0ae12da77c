"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `completion_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    AdapterProtocolError,
    AdapterTransportError,
    ConfigurationError,
    EmbeddingUnsupportedError,
    FallbackExhaustedError,
    InvalidRequestError,
    LocalProcessError,
    ProviderError,
)
from .classification import classify_exception, to_adapter_error

__all__ = [
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
    "to_adapter_error",
]
