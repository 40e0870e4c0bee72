"""Gemini adapter built on the google-genai SDK rather than raw HTTP."""

from typing import Any, Callable, Optional

from google import genai
from google.genai import errors, types

from promptgen.core import config
from promptgen.providers.base import (
    ErrorKind,
    OnPartial,
    ProviderAdapter,
    ProviderError,
    emit,
)
from promptgen.services.prompt import compose_user_message

ClientFactory = Callable[[str], Any]


def _default_client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def _sdk_error(name: str, e: errors.APIError) -> ProviderError:
    message = getattr(e, "message", None) or str(e)
    return ProviderError(
        f"{name} error: {message}",
        kind=ErrorKind.PROVIDER_REPORTED,
        status_code=getattr(e, "code", None),
        provider_message=message,
    )


class GeminiAdapter(ProviderAdapter):
    name = "Google Gemini"

    def __init__(self, client_factory: Optional[ClientFactory] = None) -> None:
        self._client_factory = client_factory or _default_client

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
        models = self._client_factory(credential).aio.models
        model = model or config.GEMINI_DEFAULT_MODEL
        prompt = compose_user_message(system_prompt, description)
        try:
            if on_partial is None:
                response = await models.generate_content(model=model, contents=prompt)
                return response.text or ""
            parts: list[str] = []
            async for chunk in await models.generate_content_stream(model=model, contents=prompt):
                fragment = chunk.text
                if not fragment:
                    continue
                parts.append(fragment)
                await emit(on_partial, "".join(parts))
            return "".join(parts)
        except errors.APIError as e:
            raise _sdk_error(self.name, e) from e

    async def test_call(
        self,
        *,
        credential: str,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        models = self._client_factory(credential).aio.models
        try:
            await models.generate_content(
                model=model or config.GEMINI_DEFAULT_MODEL,
                contents=config.PROBE_PROMPT,
                config=types.GenerateContentConfig(max_output_tokens=1),
            )
        except errors.APIError as e:
            raise _sdk_error(self.name, e) from e
