import json
import logging
from typing import Optional

import httpx

from promptgen.providers.base import (
    ErrorKind,
    OnPartial,
    ProviderError,
    extract_error_message,
)
from promptgen.providers.factory import AdapterMap, default_adapters, get_adapter
from promptgen.schemas.generation import GenerationRequest
from promptgen.services.prompt import build_system_prompt

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed to generate prompt"


def _structured_message(exc: BaseException) -> Optional[str]:
    if isinstance(exc, ProviderError):
        return exc.provider_message
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            return extract_error_message(exc.response.json())
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError, httpx.ResponseNotRead):
            return None
    # SDK errors (google-genai APIError) expose the provider's text as .message
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    return None


def describe_error(exc: BaseException, fallback: str = GENERIC_ERROR_MESSAGE) -> str:
    """
    Ordered fallback chain for a human-readable error message:
    1. the provider's own structured error body
    2. the underlying exception text
    3. a generic message
    """
    structured = _structured_message(exc)
    if structured:
        return structured
    text = str(exc).strip()
    if text:
        return text
    return fallback


def normalize_error(exc: BaseException) -> ProviderError:
    kind = exc.kind if isinstance(exc, ProviderError) else ErrorKind.TRANSPORT
    status = exc.status_code if isinstance(exc, ProviderError) else None
    return ProviderError(describe_error(exc), kind=kind, status_code=status)


class GenerationClient:
    """Entry point: picks the adapter, builds the system prompt, normalizes failures."""

    def __init__(self, adapters: Optional[AdapterMap] = None) -> None:
        self._adapters = adapters if adapters is not None else default_adapters()

    async def generate(self, request: GenerationRequest, on_partial: Optional[OnPartial] = None) -> str:
        try:
            adapter = get_adapter(request.provider, self._adapters)
            system_prompt = build_system_prompt(request.app_category, request.verbosity)
            return await adapter.call(
                description=request.description,
                system_prompt=system_prompt,
                credential=request.credential,
                model=request.model,
                endpoint=request.endpoint,
                on_partial=on_partial,
            )
        except Exception as e:
            logger.exception("error generating prompt (provider=%s)", request.provider)
            raise normalize_error(e) from e
