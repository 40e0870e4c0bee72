# tests/test_providers_anthropic.py
import json

import httpx
import pytest
import respx

from promptgen.core import config
from promptgen.providers.anthropic import AnthropicAdapter
from promptgen.providers.base import ErrorKind, ProviderError

URL = config.ANTHROPIC_MESSAGES_URL
KW = dict(description="a todo cli", system_prompt="SYS", credential="ak-test", model="claude-3-5-sonnet-latest")


@pytest.mark.asyncio
@respx.mock
async def test_single_user_message_and_token_cap():
    # System instruction and request are merged into one user-role message.
    route = respx.post(URL).mock(
        return_value=httpx.Response(200, json={"content": [{"type": "text", "text": "expanded"}]})
    )
    out = await AnthropicAdapter().call(**KW)
    assert out == "expanded"
    sent = route.calls.last.request
    assert sent.headers["X-API-Key"] == "ak-test"
    body = json.loads(sent.content)
    assert body["max_tokens"] == 1000
    assert body["messages"] == [{"role": "user", "content": "SYS\n\nUser Request: a todo cli"}]
    assert "stream" not in body


@pytest.mark.asyncio
@respx.mock
async def test_on_partial_receives_one_full_snapshot():
    respx.post(URL).mock(
        return_value=httpx.Response(200, json={"content": [{"type": "text", "text": "whole"}]})
    )
    seen = []
    out = await AnthropicAdapter().call(**KW, on_partial=seen.append)
    assert seen == ["whole"]
    assert out == "whole"


@pytest.mark.asyncio
@respx.mock
async def test_malformed_response():
    respx.post(URL).mock(return_value=httpx.Response(200, json={"content": []}))
    with pytest.raises(ProviderError) as exc:
        await AnthropicAdapter().call(**KW)
    assert exc.value.kind is ErrorKind.MALFORMED_RESPONSE


@pytest.mark.asyncio
@respx.mock
async def test_provider_error_body():
    respx.post(URL).mock(
        return_value=httpx.Response(
            401,
            json={"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}},
        )
    )
    with pytest.raises(ProviderError) as exc:
        await AnthropicAdapter().call(**KW)
    assert exc.value.kind is ErrorKind.PROVIDER_REPORTED
    assert exc.value.provider_message == "invalid x-api-key"


@pytest.mark.asyncio
@respx.mock
async def test_undecodable_body_is_malformed():
    respx.post(URL).mock(return_value=httpx.Response(200, content=b"\xff\xfe{"))
    with pytest.raises(ProviderError) as exc:
        await AnthropicAdapter().call(**KW)
    assert exc.value.kind is ErrorKind.MALFORMED_RESPONSE
