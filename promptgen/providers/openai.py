import httpx
from typing import Any, Dict, Optional

from promptgen.core import config
from promptgen.providers.base import (
    ErrorKind,
    OnPartial,
    ProviderAdapter,
    ProviderError,
    emit,
    error_from_response,
    http_timeout,
)
from promptgen.providers.sse import SseDecoder


def _headers(credential: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {credential}",
        "Content-Type": "application/json",
    }


def _extract_content(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise ProviderError(
            "Unexpected response shape: missing choices[0].message.content",
            kind=ErrorKind.MALFORMED_RESPONSE,
        )
    if not isinstance(content, str):
        raise ProviderError(
            "Unexpected response type: message content is not text",
            kind=ErrorKind.MALFORMED_RESPONSE,
        )
    return content


class OpenAIAdapter(ProviderAdapter):
    """Chat-completions adapter for api.openai.com."""

    name = "OpenAI"

    def resolve_url(self, endpoint: Optional[str]) -> str:
        return config.OPENAI_CHAT_URL

    async def call(
        self,
        *,
        description: str,
        system_prompt: str,
        credential: str,
        model: str,
        endpoint: Optional[str] = None,
        on_partial: Optional[OnPartial] = None,
    ) -> str:
        url = self.resolve_url(endpoint)
        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": description},
            ],
            "stream": on_partial is not None,
        }
        try:
            async with httpx.AsyncClient(timeout=http_timeout()) as client:
                if on_partial is None:
                    r = await client.post(url, json=payload, headers=_headers(credential))
                    if r.is_error:
                        raise error_from_response(r, self.name)
                    try:
                        data = r.json()
                    except ValueError as e:
                        raise ProviderError(
                            f"{self.name} returned invalid JSON",
                            kind=ErrorKind.MALFORMED_RESPONSE,
                        ) from e
                    return _extract_content(data)
                return await self._stream(client, url, payload, credential, on_partial)
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} HTTP error: {e}") from e

    async def _stream(
        self,
        client: httpx.AsyncClient,
        url: str,
        payload: Dict[str, Any],
        credential: str,
        on_partial: OnPartial,
    ) -> str:
        decoder = SseDecoder()
        async with client.stream("POST", url, json=payload, headers=_headers(credential)) as r:
            if r.is_error:
                await r.aread()
                raise error_from_response(r, self.name)
            async for chunk in r.aiter_bytes():
                for snapshot in decoder.feed(chunk):
                    await emit(on_partial, snapshot)
                if decoder.done:
                    break
        for snapshot in decoder.close():
            await emit(on_partial, snapshot)
        if decoder.frames == 0:
            raise ProviderError(
                f"{self.name} stream ended without any data frames",
                kind=ErrorKind.MALFORMED_RESPONSE,
            )
        return decoder.text

    async def test_call(
        self,
        *,
        credential: str,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        url = self.resolve_url(endpoint)
        payload = {
            "model": model or config.OPENAI_DEFAULT_MODEL,
            "messages": [{"role": "user", "content": config.PROBE_PROMPT}],
            "max_tokens": 1,
        }
        try:
            async with httpx.AsyncClient(timeout=http_timeout()) as client:
                r = await client.post(url, json=payload, headers=_headers(credential))
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} HTTP error: {e}") from e
        if r.is_error:
            raise error_from_response(r, self.name)


class OpenAICompatibleAdapter(OpenAIAdapter):
    """Same wire protocol, caller-supplied base URL (self-hosted gateways, proxies)."""

    name = "OpenAI Compatible"

    def resolve_url(self, endpoint: Optional[str]) -> str:
        base = (endpoint or "").strip()
        if not base:
            raise ProviderError(
                "Base URL is required for OpenAI Compatible providers",
                kind=ErrorKind.CONFIGURATION,
            )
        return f"{base.rstrip('/')}/chat/completions"
