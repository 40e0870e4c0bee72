import asyncio
import json
import logging
from typing import Any, AsyncIterator, Dict, Optional, Set

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from promptgen.api.deps import get_generation_client, get_history_store, get_probe
from promptgen.core import config
from promptgen.providers.base import ErrorKind, ProviderError
from promptgen.schemas.generation import (
    GenerateBody,
    GenerationRequest,
    GenerationResponse,
    ProbeRequest,
    ProbeResult,
)
from promptgen.services.generation import GenerationClient
from promptgen.services.history import HistoryStore
from promptgen.services.probe import ConnectivityProbe

router = APIRouter(tags=["generate"])
logger = logging.getLogger(__name__)

# generations whose stream consumer went away keep running until the provider finishes
_pending: Set[asyncio.Task] = set()


def _status_for(error: ProviderError) -> int:
    if error.kind in (ErrorKind.CONFIGURATION, ErrorKind.UNSUPPORTED_PROVIDER):
        return 400
    return 502


async def _record(history: HistoryStore, request: GenerationRequest, text: str) -> Optional[str]:
    if not config.ENABLE_HISTORY:
        return None
    try:
        entry = await history.save(request, text)
    except Exception:
        logger.exception("failed to save generation to history")
        return None
    return entry.id


def _line(item: Dict[str, Any]) -> bytes:
    return (json.dumps(item, ensure_ascii=False) + "\n").encode("utf-8")


@router.post("/generate", response_model=GenerationResponse)
async def generate(
    body: GenerateBody,
    client: GenerationClient = Depends(get_generation_client),
    history: HistoryStore = Depends(get_history_store),
):
    request = GenerationRequest.model_validate(body.model_dump(exclude={"stream"}))

    # Non-stream path
    if not body.stream:
        try:
            text = await client.generate(request)
        except ProviderError as e:
            raise HTTPException(status_code=_status_for(e), detail=str(e))
        return GenerationResponse(
            text=text,
            provider=request.provider,
            model=request.model,
            history_id=await _record(history, request, text),
        )

    # Stream path: one NDJSON line per growing snapshot, then a final done/error line
    queue: "asyncio.Queue[Optional[Dict[str, Any]]]" = asyncio.Queue()

    async def on_partial(snapshot: str) -> None:
        await queue.put({"text": snapshot})

    async def run() -> None:
        try:
            text = await client.generate(request, on_partial=on_partial)
        except ProviderError as e:
            await queue.put({"error": str(e)})
        else:
            history_id = await _record(history, request, text)
            await queue.put({"done": True, "text": text, "history_id": history_id})
        finally:
            await queue.put(None)

    task = asyncio.create_task(run())
    _pending.add(task)
    task.add_done_callback(_pending.discard)

    async def streamer() -> AsyncIterator[bytes]:
        while True:
            item = await queue.get()
            if item is None:
                break
            yield _line(item)

    return StreamingResponse(streamer(), media_type="application/x-ndjson")


@router.post("/test-connection", response_model=ProbeResult)
async def test_connection(req: ProbeRequest, probe: ConnectivityProbe = Depends(get_probe)):
    return await probe.test(req.provider, req.credential, req.model, req.endpoint)
