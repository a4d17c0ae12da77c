"""Tests for ProviderConfigStore construction from environment-style input."""
from __future__ import annotations

import json
import sys

import pytest

from completion_providers.base.backends import Backend
from completion_providers.config import ProviderConfigStore
from completion_providers.config import store as store_mod
from completion_providers.config.env import is_placeholder, read_flag, read_float, read_int
from completion_providers.direct import DirectProcessAdapter
from completion_providers.tests.utils import make_config


def test_empty_environment_configures_nothing():
    store = ProviderConfigStore.from_env({})
    assert store.configured() == ()  # nosec B101
    assert store.default is None  # nosec B101
    assert not store.fallback_enabled  # nosec B101


def test_gate_variables_enable_backends_in_declaration_order():
    env = {
        "OLLAMA_HOST": "http://localhost:11434",
        "ANTHROPIC_API_KEY": "sk-ant-real",
        "OPENAI_API_KEY": "sk-real",
    }
    store = ProviderConfigStore.from_env(env)
    assert store.configured() == (Backend.OPENAI, Backend.ANTHROPIC, Backend.OLLAMA)  # nosec B101
    assert store.is_configured("openai") and store.is_configured(Backend.OLLAMA)  # nosec B101
    assert not store.is_configured("google")  # nosec B101
    assert store.get("cohere") is None  # nosec B101


def test_defaults_applied_per_backend():
    store = ProviderConfigStore.from_env(
        {"OPENAI_API_KEY": "sk-real", "GOOGLE_AI_API_KEY": "g-real", "COHERE_API_KEY": "co-real"}
    )
    openai_cfg = store.get(Backend.OPENAI)
    assert openai_cfg.model == "gpt-4o"  # nosec B101
    assert openai_cfg.max_tokens == 4096 and openai_cfg.temperature == 0.7  # nosec B101
    assert openai_cfg.api_key == "sk-real"  # nosec B101
    assert store.get(Backend.GOOGLE).model == "gemini-pro"  # nosec B101
    assert store.get(Backend.COHERE).base_url == "https://api.cohere.ai/v1"  # nosec B101


def test_overrides_and_malformed_numbers():
    store = ProviderConfigStore.from_env(
        {
            "ANTHROPIC_API_KEY": "sk-ant-real",
            "ANTHROPIC_DEFAULT_MODEL": "claude-3-haiku-20240307",
            "ANTHROPIC_MAX_TOKENS": "not-a-number",
            "ANTHROPIC_TEMPERATURE": "0",
        }
    )
    cfg = store.get(Backend.ANTHROPIC)
    assert cfg.model == "claude-3-haiku-20240307"  # nosec B101
    assert cfg.max_tokens == 4096  # nosec B101
    assert cfg.temperature == 0.0  # nosec B101


def test_placeholder_credentials_count_as_absent():
    store = ProviderConfigStore.from_env({"OPENAI_API_KEY": "changeme", "COHERE_API_KEY": "placeholder"})
    assert store.configured() == ()  # nosec B101


def test_local_backends_use_host_as_base_url():
    store = ProviderConfigStore.from_env(
        {"LMSTUDIO_HOST": "http://localhost:1234/v1", "OLLAMA_HOST": "http://gpu-box:11434"}
    )
    assert store.get(Backend.LMSTUDIO).base_url == "http://localhost:1234/v1"  # nosec B101
    assert store.get(Backend.LMSTUDIO).api_key is None  # nosec B101
    assert store.get(Backend.OLLAMA).base_url == "http://gpu-box:11434"  # nosec B101
    assert store.get(Backend.OLLAMA).model == "llama3"  # nosec B101


def test_direct_backend_runner_command(tmp_path):
    default_store = ProviderConfigStore.from_env({"LOCAL_MODELS_DIR": str(tmp_path)})
    cfg = default_store.get(Backend.DIRECT)
    assert cfg.base_url == str(tmp_path)  # nosec B101
    assert cfg.model == "llama-3-8b-q4"  # nosec B101
    assert cfg.extra["runner_command"] == (sys.executable, str(tmp_path / "run_local_model.py"))  # nosec B101

    custom = ProviderConfigStore.from_env(
        {"LOCAL_MODELS_DIR": str(tmp_path), "LOCAL_RUNNER_COMMAND": "llama-runner --threads 4"}
    )
    assert custom.get(Backend.DIRECT).extra["runner_command"] == ("llama-runner", "--threads", "4")  # nosec B101


def test_runner_command_from_config_file_and_env_precedence(tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"direct": {"extra": {"runner_command": "from-file --gpu 0"}}}), encoding="utf-8")
    env = {"LOCAL_MODELS_DIR": str(tmp_path), "PROVIDERS_CONFIG_FILE": str(path)}

    from_file = ProviderConfigStore.from_env(env).get(Backend.DIRECT)
    assert from_file.extra["runner_command"] == ("from-file", "--gpu", "0")  # nosec B101
    assert DirectProcessAdapter().runner_command(from_file) == ["from-file", "--gpu", "0"]  # nosec B101

    env["LOCAL_RUNNER_COMMAND"] = "from-env --flag"
    from_env = ProviderConfigStore.from_env(env).get(Backend.DIRECT)
    assert from_env.extra["runner_command"] == ("from-env", "--flag")  # nosec B101


def test_config_extra_is_read_only():
    store = ProviderConfigStore.from_env({"OLLAMA_HOST": "http://localhost:11434"})
    with pytest.raises(TypeError):
        store.get(Backend.OLLAMA).extra["injected"] = 1
    assert store.get(Backend.OLLAMA).extra == {}  # nosec B101

    source = {"keep_alive": "5m"}
    cfg = make_config(Backend.OLLAMA, extra=source)
    source["keep_alive"] = "1h"
    assert cfg.extra == {"keep_alive": "5m"}  # nosec B101



def test_default_provider_honoured_only_when_configured():
    env = {"OPENAI_API_KEY": "sk-real", "ANTHROPIC_API_KEY": "sk-ant-real", "DEFAULT_LLM_PROVIDER": "anthropic"}
    assert ProviderConfigStore.from_env(env).default is Backend.ANTHROPIC  # nosec B101

    env["DEFAULT_LLM_PROVIDER"] = "google"
    assert ProviderConfigStore.from_env(env).default is Backend.OPENAI  # nosec B101

    only_local = {"OLLAMA_HOST": "http://localhost:11434"}
    assert ProviderConfigStore.from_env(only_local).default is Backend.OLLAMA  # nosec B101


@pytest.mark.parametrize("raw, expected", [("true", True), ("TRUE", True), ("1", False), ("yes", False), ("", False)])
def test_fallback_flag(raw, expected):
    store = ProviderConfigStore.from_env({"OPENAI_API_KEY": "sk-real", "ENABLE_LLM_FALLBACK": raw})
    assert store.fallback_enabled is expected  # nosec B101


def test_config_file_extra_json(tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"ollama": {"extra": {"keep_alive": "5m"}}}), encoding="utf-8")
    store = ProviderConfigStore.from_env({"OLLAMA_HOST": "http://localhost:11434", "PROVIDERS_CONFIG_FILE": str(path)})
    assert store.get(Backend.OLLAMA).extra == {"keep_alive": "5m"}  # nosec B101


def test_config_file_extra_yaml(tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text("openai:\n  extra:\n    user: svc-42\n", encoding="utf-8")
    store = ProviderConfigStore.from_env({"OPENAI_API_KEY": "sk-real", "PROVIDERS_CONFIG_FILE": str(path)})
    assert store.get(Backend.OPENAI).extra == {"user": "svc-42"}  # nosec B101


def test_missing_config_file_is_ignored(tmp_path):
    store = ProviderConfigStore.from_env(
        {"OPENAI_API_KEY": "sk-real", "PROVIDERS_CONFIG_FILE": str(tmp_path / "nope.yaml")}
    )
    assert store.get(Backend.OPENAI).extra == {}  # nosec B101


def test_dotenv_loaded_once_for_process_environment(tmp_path, monkeypatch):
    dotenv = tmp_path / ".env"
    dotenv.write_text("# local dev\nCOHERE_API_KEY='co-from-dotenv'\n\nOPENAI_API_KEY=sk-from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-shell")
    monkeypatch.setattr(store_mod, "_DOTENV_LOADED", False)
    # A placeholder is replaced by the .env value; monkeypatch restores it afterwards.
    monkeypatch.setenv("COHERE_API_KEY", "placeholder")

    store = ProviderConfigStore.from_env()

    assert store.get(Backend.COHERE).api_key == "co-from-dotenv"  # nosec B101
    assert store.get(Backend.OPENAI).api_key == "sk-from-shell"  # nosec B101


def test_env_helpers():
    assert is_placeholder("test_token") and is_placeholder("example-key")  # nosec B101
    assert not is_placeholder("sk-real") and not is_placeholder(None)  # nosec B101
    assert read_int({"N": " 12 "}, "N", 1) == 12  # nosec B101
    assert read_float({"F": "x"}, "F", 0.5) == 0.5  # nosec B101
    assert read_flag({"B": "True"}, "B")  # nosec B101
