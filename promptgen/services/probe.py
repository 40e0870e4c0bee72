import logging
from typing import Optional, Union

from promptgen.providers.factory import AdapterMap, default_adapters, get_adapter
from promptgen.schemas.enums import Provider
from promptgen.schemas.generation import ProbeResult
from promptgen.services.generation import describe_error

logger = logging.getLogger(__name__)


class ConnectivityProbe:
    """Validates credentials/endpoint with one minimal real request; never raises."""

    def __init__(self, adapters: Optional[AdapterMap] = None) -> None:
        self._adapters = adapters if adapters is not None else default_adapters()

    async def test(
        self,
        provider: Union[Provider, str],
        credential: str,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
    ) -> ProbeResult:
        try:
            adapter = get_adapter(provider, self._adapters)
            await adapter.test_call(credential=credential, model=model, endpoint=endpoint)
        except Exception as e:
            message = describe_error(e, fallback="Connection test failed")
            logger.info("connection test failed (provider=%s): %s", provider, message)
            return ProbeResult.failed(message)
        return ProbeResult.ok()
