from typing import Dict, Mapping, Optional, Union

from promptgen.providers.anthropic import AnthropicAdapter
from promptgen.providers.base import ErrorKind, ProviderAdapter, ProviderError
from promptgen.providers.gemini import GeminiAdapter
from promptgen.providers.openai import OpenAIAdapter, OpenAICompatibleAdapter
from promptgen.schemas.enums import Provider

AdapterMap = Mapping[Provider, ProviderAdapter]


def default_adapters() -> Dict[Provider, ProviderAdapter]:
    # adding a provider means adding one entry here, nothing else branches on it
    return {
        Provider.OPENAI: OpenAIAdapter(),
        Provider.OPENAI_COMPATIBLE: OpenAICompatibleAdapter(),
        Provider.ANTHROPIC: AnthropicAdapter(),
        Provider.GEMINI: GeminiAdapter(),
    }


def get_adapter(provider: Union[Provider, str], adapters: Optional[AdapterMap] = None) -> ProviderAdapter:
    registry = adapters if adapters is not None else default_adapters()
    try:
        key = Provider(provider)
    except ValueError:
        key = None
    adapter = registry.get(key) if key is not None else None
    if adapter is None:
        raise ProviderError(
            f"Unsupported LLM provider: {provider}", kind=ErrorKind.UNSUPPORTED_PROVIDER
        )
    return adapter
