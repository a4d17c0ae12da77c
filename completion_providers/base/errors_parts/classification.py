"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, and message-based
heuristics as a fallback to cope with the different SDK and httpx exception
shapes. ``to_adapter_error`` turns any adapter-side exception into the routing
taxonomy (transport vs protocol).
"""
from __future__ import annotations

import asyncio
import json
from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import AdapterProtocolError, AdapterTransportError, ProviderError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_RETRYABLE = (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for non-HTTP exceptions."""
    pattern_groups = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.AUTH, ("auth", "api key", "unauthorized", "forbidden")),
        (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
        (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
        (ErrorCode.UNAVAILABLE, ("unavailable", "connection refused")),
        (ErrorCode.VALIDATION, ("validation", "invalid", "malformed")),
        (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
    )
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (asyncio/builtin/httpx).
        3. HTTP status mapping.
        4. httpx transport errors.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.UNAVAILABLE
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def _is_protocol_failure(exc: BaseException) -> bool:
    """Return True when ``exc`` signals an unexpected payload shape."""
    return isinstance(exc, (KeyError, IndexError, TypeError, AttributeError, json.JSONDecodeError))


def to_adapter_error(exc: BaseException, *, provider: str, model: Optional[str]) -> ProviderError:
    """Wrap an arbitrary adapter-side exception into the routing taxonomy.

    ``ProviderError`` instances pass through untouched. Payload-shape failures
    (missing keys, wrong types, undecodable JSON) become
    :class:`AdapterProtocolError`; everything else is treated as a transport
    failure.
    """
    if isinstance(exc, ProviderError):
        return exc
    if _is_protocol_failure(exc):
        return AdapterProtocolError(
            message=f"Malformed response from {provider}: {exc}",
            provider=provider,
            model=model,
            raw=exc,
        )
    code = classify_exception(exc)
    return AdapterTransportError(
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        code=code if code is not ErrorCode.UNKNOWN else ErrorCode.TRANSIENT,
        model=model,
        retryable=code in _RETRYABLE,
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "to_adapter_error",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
