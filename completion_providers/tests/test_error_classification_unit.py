from __future__ import annotations

import asyncio
import json
import types

import httpx

from completion_providers.base.errors import (
    AdapterProtocolError,
    AdapterTransportError,
    ConfigurationError,
    ErrorCode,
    FallbackExhaustedError,
    InvalidRequestError,
    LocalProcessError,
    ProviderError,
    classify_exception,
    to_adapter_error,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101
    e3 = types.SimpleNamespace(status=429)
    assert classify_exception(e3) is ErrorCode.RATE_LIMIT  # nosec B101


def test_classify_timeouts_and_transport():
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.UNAVAILABLE  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("unsupported parameter")) is ErrorCode.UNSUPPORTED  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_to_adapter_error_protocol_vs_transport():
    proto = to_adapter_error(KeyError("choices"), provider="openai", model="gpt-4o")
    assert isinstance(proto, AdapterProtocolError)  # nosec B101
    assert proto.code is ErrorCode.PROTOCOL  # nosec B101
    assert proto.provider == "openai" and proto.model == "gpt-4o"  # nosec B101

    decode = to_adapter_error(json.JSONDecodeError("bad", "x", 0), provider="ollama", model=None)
    assert isinstance(decode, AdapterProtocolError)  # nosec B101

    transport = to_adapter_error(RuntimeError("boom"), provider="cohere", model="command")
    assert isinstance(transport, AdapterTransportError)  # nosec B101
    assert transport.code is ErrorCode.TRANSIENT  # nosec B101
    assert transport.message == "boom"  # nosec B101

    limited = to_adapter_error(types.SimpleNamespace(status_code=429), provider="openai", model=None)
    assert limited.code is ErrorCode.RATE_LIMIT and limited.retryable  # nosec B101


def test_to_adapter_error_keeps_provider_errors():
    original = LocalProcessError(message="exit 1", provider="direct", exit_code=1)
    assert to_adapter_error(original, provider="direct", model=None) is original  # nosec B101


def test_fallback_eligibility_flags():
    assert not ConfigurationError(message="x").fallback_eligible  # nosec B101
    assert not InvalidRequestError(message="x").fallback_eligible  # nosec B101
    assert not FallbackExhaustedError(message="x").fallback_eligible  # nosec B101
    assert AdapterTransportError(message="x").fallback_eligible  # nosec B101
    assert AdapterProtocolError(message="x").fallback_eligible  # nosec B101
    assert LocalProcessError(message="x").fallback_eligible  # nosec B101


def test_errors_are_hashable_and_render():
    err = AdapterTransportError(message="down", provider="anthropic", model="claude")
    assert {err}  # nosec B101
    assert str(err) == "anthropic:claude transient: down"  # nosec B101
