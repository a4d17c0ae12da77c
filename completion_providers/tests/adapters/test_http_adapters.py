"""Cohere, LM Studio and Ollama adapters against ``httpx.MockTransport``."""
from __future__ import annotations

import json

import httpx
import pytest

from completion_providers.base.backends import Backend
from completion_providers.base.errors import AdapterProtocolError, AdapterTransportError, ErrorCode
from completion_providers.base.models import CompletionRequest, Message
from completion_providers.cohere import CohereAdapter
from completion_providers.lmstudio import LMStudioAdapter
from completion_providers.ollama import OllamaAdapter
from completion_providers.tests.utils import make_config


def _mock_client(base_url, payload, *, status=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if isinstance(payload, (dict, list)):
            return httpx.Response(status, json=payload)
        return httpx.Response(status, text=payload)

    return httpx.AsyncClient(base_url=base_url, transport=httpx.MockTransport(handler))


def _body(request: httpx.Request) -> dict:
    return json.loads(request.content)


# ---- Cohere ----


@pytest.mark.asyncio
async def test_cohere_prompt_only_round_trip():
    seen: list[httpx.Request] = []
    reply = {"text": "Salut", "finish_reason": "COMPLETE", "meta": {"billed_units": {"input_tokens": 6, "output_tokens": 2}}}
    client = _mock_client("https://api.cohere.ai/v1", reply, seen=seen)
    config = make_config(Backend.COHERE, base_url="https://api.cohere.ai/v1", api_key="co-key")

    resp = await CohereAdapter(client=client).complete(CompletionRequest(prompt="X"), config)

    request = seen[0]
    assert str(request.url) == "https://api.cohere.ai/v1/chat"  # nosec B101
    assert request.headers["Authorization"] == "Bearer co-key"  # nosec B101
    body = _body(request)
    assert body["message"] == "X" and "chat_history" not in body and "preamble" not in body  # nosec B101
    assert body["model"] == "command" and body["max_tokens"] == 4096  # nosec B101
    assert resp.text == "Salut" and resp.finish_reason == "stop"  # nosec B101
    assert resp.usage.to_dict() == {"promptTokens": 6, "completionTokens": 2, "totalTokens": 8}  # nosec B101


@pytest.mark.asyncio
async def test_cohere_history_preamble_and_params():
    seen: list[httpx.Request] = []
    client = _mock_client("https://api.cohere.ai/v1", {"text": "ok", "finish_reason": "MAX_TOKENS"}, seen=seen)
    req = CompletionRequest(
        system="S",
        messages=[Message(role="user", content="a"), Message(role="assistant", content="b"), Message(role="user", content="c")],
        top_p=0.8,
        temperature=0,
    )
    resp = await CohereAdapter(client=client).complete(req, make_config(Backend.COHERE))
    body = _body(seen[0])
    assert body["preamble"] == "S" and body["message"] == "c"  # nosec B101
    assert body["chat_history"] == [{"role": "USER", "message": "a"}, {"role": "CHATBOT", "message": "b"}]  # nosec B101
    assert body["p"] == 0.8 and body["temperature"] == 0  # nosec B101
    assert resp.finish_reason == "length" and resp.usage.total_tokens == 0  # nosec B101


@pytest.mark.asyncio
async def test_cohere_http_error_maps_status():
    client = _mock_client("https://api.cohere.ai/v1", {"message": "invalid api token"}, status=401)
    with pytest.raises(AdapterTransportError) as exc:
        await CohereAdapter(client=client).complete(CompletionRequest(prompt="X"), make_config(Backend.COHERE))
    assert exc.value.code is ErrorCode.AUTH  # nosec B101


@pytest.mark.asyncio
async def test_cohere_malformed_payload():
    client = _mock_client("https://api.cohere.ai/v1", {"generation_id": "g"})
    with pytest.raises(AdapterProtocolError):
        await CohereAdapter(client=client).complete(CompletionRequest(prompt="X"), make_config(Backend.COHERE))


# ---- LM Studio ----


@pytest.mark.asyncio
async def test_lmstudio_prompt_only_round_trip():
    seen: list[httpx.Request] = []
    reply = {
        "model": "local-model",
        "choices": [{"message": {"role": "assistant", "content": "Hey"}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 4, "completion_tokens": 1, "total_tokens": 5},
    }
    client = _mock_client("http://localhost:1234/v1", reply, seen=seen)
    config = make_config(Backend.LMSTUDIO, base_url="http://localhost:1234/v1")
    resp = await LMStudioAdapter(client=client).complete(CompletionRequest(prompt="X", system="S"), config)

    assert str(seen[0].url) == "http://localhost:1234/v1/chat/completions"  # nosec B101
    body = _body(seen[0])
    assert body["messages"] == [{"role": "system", "content": "S"}, {"role": "user", "content": "X"}]  # nosec B101
    assert body["stream"] is False  # nosec B101
    assert resp.text == "Hey" and resp.usage.total_tokens == 5 and resp.provider == "lmstudio"  # nosec B101


@pytest.mark.asyncio
async def test_lmstudio_missing_usage_and_bad_json():
    reply = {"choices": [{"message": {"content": "Hey"}}]}
    client = _mock_client("http://localhost:1234/v1", reply)
    resp = await LMStudioAdapter(client=client).complete(CompletionRequest(prompt="X"), make_config(Backend.LMSTUDIO))
    assert resp.usage.to_dict() == {"promptTokens": 0, "completionTokens": 0, "totalTokens": 0}  # nosec B101
    assert resp.finish_reason == "stop" and resp.model == "local-model"  # nosec B101

    broken = _mock_client("http://localhost:1234/v1", "<html>oops</html>")
    with pytest.raises(AdapterProtocolError):
        await LMStudioAdapter(client=broken).complete(CompletionRequest(prompt="X"), make_config(Backend.LMSTUDIO))


@pytest.mark.asyncio
async def test_lmstudio_connection_refused_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.AsyncClient(base_url="http://localhost:1234/v1", transport=httpx.MockTransport(handler))
    with pytest.raises(AdapterTransportError) as exc:
        await LMStudioAdapter(client=client).complete(CompletionRequest(prompt="X"), make_config(Backend.LMSTUDIO))
    assert exc.value.code is ErrorCode.UNAVAILABLE  # nosec B101


# ---- Ollama ----


@pytest.mark.asyncio
async def test_ollama_prompt_only_round_trip():
    seen: list[httpx.Request] = []
    reply = {
        "model": "llama3",
        "message": {"role": "assistant", "content": "Yo"},
        "done": True,
        "done_reason": "stop",
        "prompt_eval_count": 7,
        "eval_count": 3,
    }
    client = _mock_client("http://localhost:11434", reply, seen=seen)
    config = make_config(Backend.OLLAMA, base_url="http://localhost:11434", extra={"keep_alive": "5m", "options": {"num_ctx": 8192}})
    resp = await OllamaAdapter(client=client).complete(CompletionRequest(prompt="X", temperature=0, max_tokens=32), config)

    assert str(seen[0].url) == "http://localhost:11434/api/chat"  # nosec B101
    body = _body(seen[0])
    assert body["messages"] == [{"role": "user", "content": "X"}]  # nosec B101
    assert body["stream"] is False and body["keep_alive"] == "5m"  # nosec B101
    assert body["options"] == {"num_predict": 32, "temperature": 0, "num_ctx": 8192}  # nosec B101
    assert resp.text == "Yo" and resp.usage.to_dict() == {"promptTokens": 7, "completionTokens": 3, "totalTokens": 10}  # nosec B101


@pytest.mark.asyncio
async def test_ollama_missing_counts_and_message():
    client = _mock_client("http://localhost:11434", {"model": "llama3", "message": {"content": "Yo"}, "done": True})
    resp = await OllamaAdapter(client=client).complete(CompletionRequest(prompt="X"), make_config(Backend.OLLAMA))
    assert resp.usage.total_tokens == 0 and resp.finish_reason == "stop"  # nosec B101

    broken = _mock_client("http://localhost:11434", {"error": "model not loaded"})
    with pytest.raises(AdapterProtocolError):
        await OllamaAdapter(client=broken).complete(CompletionRequest(prompt="X"), make_config(Backend.OLLAMA))


@pytest.mark.asyncio
async def test_pooled_client_used_without_injection(monkeypatch):
    seen: list[httpx.Request] = []
    mock = _mock_client("http://localhost:11434", {"message": {"content": "pooled"}}, seen=seen)
    requested: list[tuple] = []

    def _fake_pool(base_url, purpose, headers=None):
        requested.append((base_url, purpose))
        return mock

    monkeypatch.setattr("completion_providers.base.adapter.get_async_client", _fake_pool)
    config = make_config(Backend.OLLAMA, base_url="http://localhost:11434")
    resp = await OllamaAdapter().complete(CompletionRequest(prompt="X"), config)
    assert resp.text == "pooled"  # nosec B101
    assert requested == [("http://localhost:11434", "ollama.chat")]  # nosec B101
