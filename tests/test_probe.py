# tests/test_probe.py
import json

import httpx
import pytest
import respx

from promptgen.core import config
from promptgen.providers.base import ProviderError
from promptgen.schemas.enums import Provider
from promptgen.services.probe import ConnectivityProbe


@pytest.mark.asyncio
@respx.mock
async def test_401_yields_failure_result():
    respx.post(config.OPENAI_CHAT_URL).mock(
        return_value=httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})
    )
    result = await ConnectivityProbe().test(Provider.OPENAI, "sk-bad", "gpt-4o-mini")
    assert result.success is False
    assert result.error_message == "Incorrect API key provided"


@pytest.mark.asyncio
@respx.mock
async def test_401_without_body_still_has_message():
    respx.post(config.ANTHROPIC_MESSAGES_URL).mock(return_value=httpx.Response(401))
    result = await ConnectivityProbe().test(Provider.ANTHROPIC, "bad")
    assert result.success is False
    assert result.error_message


@pytest.mark.asyncio
@respx.mock
async def test_anthropic_success_is_cheap():
    route = respx.post(config.ANTHROPIC_MESSAGES_URL).mock(
        return_value=httpx.Response(200, json={"content": [{"type": "text", "text": "h"}]})
    )
    result = await ConnectivityProbe().test(Provider.ANTHROPIC, "ak-test", "claude-3-5-haiku-latest")
    assert result.success is True
    assert result.error_message is None
    body = json.loads(route.calls.last.request.content)
    assert body["max_tokens"] == 1
    assert body["model"] == "claude-3-5-haiku-latest"


@pytest.mark.asyncio
@respx.mock
async def test_compatible_without_endpoint():
    result = await ConnectivityProbe().test(Provider.OPENAI_COMPATIBLE, "key")
    assert result.success is False
    assert "Base URL" in result.error_message
    assert respx.calls.call_count == 0


@pytest.mark.asyncio
@respx.mock
async def test_compatible_with_endpoint():
    route = respx.post("http://gateway.local/v1/chat/completions").mock(
        return_value=httpx.Response(200, json={"choices": []})
    )
    result = await ConnectivityProbe().test(
        Provider.OPENAI_COMPATIBLE, "key", "llama3", "http://gateway.local/v1/"
    )
    assert result.success is True
    assert route.called


@pytest.mark.asyncio
async def test_unsupported_provider_never_raises():
    result = await ConnectivityProbe().test("Mistral", "key")
    assert result.success is False
    assert "Unsupported" in result.error_message


@pytest.mark.asyncio
async def test_unexpected_exception_is_captured(stub_adapter):
    probe = ConnectivityProbe({Provider.GEMINI: stub_adapter(error=ValueError())})
    result = await probe.test(Provider.GEMINI, "key")
    assert result.success is False
    assert result.error_message == "Connection test failed"


@pytest.mark.asyncio
async def test_success_with_stub(stub_adapter):
    adapter = stub_adapter()
    probe = ConnectivityProbe({Provider.GEMINI: adapter})
    result = await probe.test(Provider.GEMINI, "key", None)
    assert result.success is True
    assert adapter.test_calls == [{"credential": "key", "model": None, "endpoint": None}]
