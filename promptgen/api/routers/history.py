from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from promptgen.api.deps import get_history_store
from promptgen.schemas.enums import AppCategory, Provider
from promptgen.schemas.history import HistoryEntry, HistoryList, HistoryUpdate
from promptgen.services.history import HistoryStore

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=HistoryList)
async def list_history(
    app_category: Optional[AppCategory] = None,
    provider: Optional[Provider] = None,
    folder: Optional[str] = None,
    q: Optional[str] = None,
    history: HistoryStore = Depends(get_history_store),
):
    entries = await history.list_entries(
        app_category=app_category, provider=provider, folder=folder, query=q
    )
    return HistoryList(entries=entries)


@router.get("/folders")
async def list_folders(history: HistoryStore = Depends(get_history_store)) -> dict:
    return {"folders": await history.folders()}


@router.get("/export")
async def export_history(history: HistoryStore = Depends(get_history_store)):
    return JSONResponse(
        content=await history.export(),
        headers={"Content-Disposition": 'attachment; filename="prompts-export.json"'},
    )


@router.get("/{entry_id}", response_model=HistoryEntry)
async def get_entry(entry_id: str, history: HistoryStore = Depends(get_history_store)):
    entry = await history.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="history entry not found")
    return entry


@router.patch("/{entry_id}", response_model=HistoryEntry)
async def move_entry(
    entry_id: str, body: HistoryUpdate, history: HistoryStore = Depends(get_history_store)
):
    entry = await history.move(entry_id, body.folder)
    if entry is None:
        raise HTTPException(status_code=404, detail="history entry not found")
    return entry


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(entry_id: str, history: HistoryStore = Depends(get_history_store)):
    if not await history.delete(entry_id):
        raise HTTPException(status_code=404, detail="history entry not found")
    return Response(status_code=204)
