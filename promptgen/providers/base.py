# declares the adapter contract (call / test_call) that every provider implements
# and the single error type adapters raise

import inspect
import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from promptgen.core import config


class ErrorKind(str, Enum):
    CONFIGURATION = "ConfigurationError"
    UNSUPPORTED_PROVIDER = "UnsupportedProvider"
    TRANSPORT = "TransportError"
    MALFORMED_RESPONSE = "MalformedResponse"
    PROVIDER_REPORTED = "ProviderReportedError"


class ProviderError(Exception):
    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind = ErrorKind.TRANSPORT,
        status_code: Optional[int] = None,
        provider_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        # message taken verbatim from the provider's own error body, if any
        self.provider_message = provider_message


# receives the full text generated so far, never just the newest fragment
OnPartial = Callable[[str], Union[None, Awaitable[None]]]


async def emit(on_partial: Optional[OnPartial], snapshot: str) -> None:
    if on_partial is None:
        return
    result = on_partial(snapshot)
    if inspect.isawaitable(result):
        await result


def http_timeout() -> httpx.Timeout:
    return httpx.Timeout(config.REQUEST_TIMEOUT_SECONDS)


def extract_error_message(payload: Any) -> Optional[str]:
    """Pull ``error.message`` out of a decoded provider error body."""
    if not isinstance(payload, dict):
        return None
    err = payload.get("error")
    if isinstance(err, dict):
        msg = err.get("message")
        if isinstance(msg, str) and msg:
            return msg
    if isinstance(err, str) and err:
        return err
    return None


def error_from_response(response: httpx.Response, provider: str) -> ProviderError:
    """Build a ProviderError for a non-2xx response whose body has been read."""
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        payload = None
    provider_message = extract_error_message(payload)
    if provider_message:
        return ProviderError(
            f"{provider} error: {provider_message}",
            kind=ErrorKind.PROVIDER_REPORTED,
            status_code=response.status_code,
            provider_message=provider_message,
        )
    return ProviderError(
        f"{provider} HTTP error: status {response.status_code}",
        kind=ErrorKind.TRANSPORT,
        status_code=response.status_code,
    )


class ProviderAdapter(ABC):
    name: str = "provider"

    @abstractmethod
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
        """Run one generation and return the complete text.

        When ``on_partial`` is given it is called with the accumulated text
        after every decoded fragment.
        """
        raise NotImplementedError

    @abstractmethod
    async def test_call(
        self,
        *,
        credential: str,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        """Issue the cheapest real request the provider accepts; raise on failure."""
        raise NotImplementedError
