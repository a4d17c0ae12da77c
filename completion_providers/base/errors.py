"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``completion_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    AdapterProtocolError,
    AdapterTransportError,
    ConfigurationError,
    EmbeddingUnsupportedError,
    FallbackExhaustedError,
    InvalidRequestError,
    LocalProcessError,
    ProviderError,
)
from .errors_parts.classification import classify_exception, to_adapter_error

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
