"""
Structured provider error exception types.

Wraps backend-specific failures with a normalized `ErrorCode` and sorts them
into the routing taxonomy: configuration and request errors are fatal, adapter
transport/protocol/process errors are eligible for fallback.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        message: Human-readable error message; this is the only detail the
            HTTP layer surfaces to clients.
        provider: Backend identifier where the error originated (e.g. ``"openai"``).
        code: Normalized :class:`ErrorCode` classification for the failure.
        model: Optional model name associated with the failure.
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    message: str
    provider: str = "unknown"
    code: ErrorCode = ErrorCode.UNKNOWN
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    # Whether the router may try another backend after this error.
    fallback_eligible = True

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


@dataclass(eq=False)
class ConfigurationError(ProviderError):
    """Requested backend is not configured (or nothing is configured at all)."""

    code: ErrorCode = ErrorCode.CONFIGURATION
    fallback_eligible = False


@dataclass(eq=False)
class InvalidRequestError(ProviderError):
    """Request carries neither a prompt nor any message turns."""

    code: ErrorCode = ErrorCode.VALIDATION
    fallback_eligible = False


@dataclass(eq=False)
class AdapterTransportError(ProviderError):
    """Network or HTTP failure while calling a backend."""

    code: ErrorCode = ErrorCode.TRANSIENT


@dataclass(eq=False)
class AdapterProtocolError(ProviderError):
    """Backend answered with a malformed or unexpected payload."""

    code: ErrorCode = ErrorCode.PROTOCOL


@dataclass(eq=False)
class LocalProcessError(ProviderError):
    """Local model runner failed to spawn, exited non-zero, or produced no output."""

    code: ErrorCode = ErrorCode.PROCESS
    exit_code: Optional[int] = None


@dataclass(eq=False)
class EmbeddingUnsupportedError(ProviderError):
    """Embedding requested from a backend that does not implement it."""

    code: ErrorCode = ErrorCode.UNSUPPORTED
    fallback_eligible = False


@dataclass(eq=False)
class FallbackExhaustedError(ProviderError):
    """Every fallback backend failed after the selected backend failed.

    ``message``, ``provider``, ``model`` and ``code`` mirror the last fallback
    attempt. ``first_error`` is the failure of the originally selected backend
    and ``attempts`` lists every failure in the order the backends were tried.
    """

    first_error: Optional[ProviderError] = None
    attempts: List[ProviderError] = field(default_factory=list)
    fallback_eligible = False


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "InvalidRequestError",
    "AdapterTransportError",
    "AdapterProtocolError",
    "LocalProcessError",
    "EmbeddingUnsupportedError",
    "FallbackExhaustedError",
]
