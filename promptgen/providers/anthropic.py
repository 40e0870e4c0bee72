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
from promptgen.services.prompt import compose_user_message


def _headers(credential: str) -> Dict[str, str]:
    return {
        "X-API-Key": credential,
        "anthropic-version": config.ANTHROPIC_VERSION,
        "Content-Type": "application/json",
    }


def _extract_text(data: Any) -> str:
    try:
        text = data["content"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise ProviderError(
            "Unexpected response shape: missing content[0].text",
            kind=ErrorKind.MALFORMED_RESPONSE,
        )
    if not isinstance(text, str):
        raise ProviderError(
            "Unexpected response type: content text is not a string",
            kind=ErrorKind.MALFORMED_RESPONSE,
        )
    return text


class AnthropicAdapter(ProviderAdapter):
    """Messages API adapter; single round trip, no streaming."""

    name = "Anthropic"

    async def _post(self, payload: Dict[str, Any], credential: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=http_timeout()) as client:
                r = await client.post(
                    config.ANTHROPIC_MESSAGES_URL, json=payload, headers=_headers(credential)
                )
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} HTTP error: {e}") from e
        if r.is_error:
            raise error_from_response(r, self.name)
        return r

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
        # no system slot: instruction and request travel in one user message
        payload = {
            "model": model,
            "messages": [
                {"role": "user", "content": compose_user_message(system_prompt, description)},
            ],
            "max_tokens": config.ANTHROPIC_MAX_TOKENS,
        }
        r = await self._post(payload, credential)
        try:
            data = r.json()
        except ValueError as e:
            raise ProviderError(
                f"{self.name} returned invalid JSON", kind=ErrorKind.MALFORMED_RESPONSE
            ) from e
        text = _extract_text(data)
        # callers asking for a stream still get one snapshot of the full text
        await emit(on_partial, text)
        return text

    async def test_call(
        self,
        *,
        credential: str,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        payload = {
            "model": model or config.ANTHROPIC_DEFAULT_MODEL,
            "messages": [{"role": "user", "content": config.PROBE_PROMPT}],
            "max_tokens": 1,
        }
        await self._post(payload, credential)
