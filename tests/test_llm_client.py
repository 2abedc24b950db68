import json

import httpx
import pytest

from ideaforge.backend.errors import (
    AuthError,
    ConfigError,
    GenerationTimeoutError,
    MalformedResponseError,
    NetworkError,
    QuotaError,
    RateLimitError,
    RemoteServiceError,
)
from ideaforge.backend.llm_client import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    ChatGenerationClient,
    GenerationOptions,
    LLMSettings,
    build_generation_client,
    load_llm_settings,
)


SETTINGS = LLMSettings(api_key="sk-test", base_url="https://llm.test/v1", model="deepseek-chat")


def _completion(content):
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "deepseek-chat",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def _client(handler) -> ChatGenerationClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return ChatGenerationClient(SETTINGS, http_client=http_client)


def test_successful_completion_sends_two_messages():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion('  {"name": "x"}  '))

    text = _client(handler).generate(
        "system text",
        "user text",
        GenerationOptions(temperature=0.7, max_tokens=4000, json_mode=True, timeout_seconds=60.0),
    )

    assert text == '{"name": "x"}'
    assert seen["url"] == "https://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    body = seen["body"]
    assert body["model"] == "deepseek-chat"
    assert body["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 4000
    assert body["response_format"] == {"type": "json_object"}


def test_plain_text_mode_omits_response_format():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("plain"))

    _client(handler).generate("s", "u", GenerationOptions(max_tokens=1200, model="other-model"))

    assert "response_format" not in seen["body"]
    assert seen["body"]["max_tokens"] == 1200
    assert seen["body"]["model"] == "other-model"


@pytest.mark.parametrize(
    "status, expected",
    [
        (401, AuthError),
        (402, QuotaError),
        (429, RateLimitError),
        (500, RemoteServiceError),
        (503, RemoteServiceError),
    ],
)
def test_status_codes_map_to_error_kinds(status, expected):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(status, json={"error": {"message": "provider said no"}})

    with pytest.raises(expected):
        _client(handler).generate("s", "u", GenerationOptions())
    assert len(calls) == 1


def test_timeout_maps_to_timeout_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(GenerationTimeoutError) as excinfo:
        _client(handler).generate("s", "u", GenerationOptions(timeout_seconds=30.0))
    assert "30 seconds" in excinfo.value.message


def test_connection_failure_maps_to_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        _client(handler).generate("s", "u", GenerationOptions())


def test_missing_choices_is_malformed():
    def handler(request: httpx.Request) -> httpx.Response:
        payload = _completion("x")
        payload["choices"] = []
        return httpx.Response(200, json=payload)

    with pytest.raises(MalformedResponseError):
        _client(handler).generate("s", "u", GenerationOptions())


def test_empty_content_is_malformed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_completion("   "))

    with pytest.raises(MalformedResponseError):
        _client(handler).generate("s", "u", GenerationOptions())


def test_unconfigured_settings_raise_config_error():
    with pytest.raises(ConfigError):
        ChatGenerationClient(LLMSettings())


def test_build_generation_client_without_key_returns_none():
    assert build_generation_client(LLMSettings()) is None


def test_load_settings_defaults(monkeypatch):
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    monkeypatch.delenv("DEEPSEEK_BASE_URL", raising=False)
    monkeypatch.delenv("DEEPSEEK_MODEL", raising=False)
    settings = load_llm_settings()
    assert not settings.is_configured
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.model == DEFAULT_MODEL


def test_placeholder_key_counts_as_unconfigured(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", "your-deepseek-api-key-here")
    assert not load_llm_settings().is_configured


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", " sk-live ")
    monkeypatch.setenv("DEEPSEEK_BASE_URL", "https://proxy.test/v1")
    monkeypatch.setenv("DEEPSEEK_MODEL", "deepseek-reasoner")
    settings = load_llm_settings()
    assert settings.api_key == "sk-live"
    assert settings.base_url == "https://proxy.test/v1"
    assert settings.model == "deepseek-reasoner"
