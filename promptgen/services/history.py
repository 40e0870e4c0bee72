# in-memory record of past generations (description, settings, result)
# stands in for the UI's local store; the generation core never depends on it

from __future__ import annotations
from collections import OrderedDict
from typing import Dict, List, Optional
import asyncio
import time
from uuid import uuid4

from promptgen.schemas.enums import AppCategory, Provider
from promptgen.schemas.generation import GenerationRequest
from promptgen.schemas.history import HistoryEntry


class HistoryStore:
    def __init__(self, *, max_entries: int = 500) -> None:
        """
        self._entries: insertion-ordered map of entry id -> HistoryEntry, oldest first.
        Once more than max_entries are held, the oldest entry is evicted.
        """
        self._entries: "OrderedDict[str, HistoryEntry]" = OrderedDict()
        self._lock = asyncio.Lock()
        self._max_entries = max(1, max_entries)

    async def save(self, request: GenerationRequest, result_text: str) -> HistoryEntry:
        # the credential is never stored
        now = time.time()
        async with self._lock:
            entry = HistoryEntry(
                id=uuid4().hex,
                timestamp=now,
                description=request.description,
                app_category=request.app_category,
                verbosity=request.verbosity,
                provider=request.provider,
                model=request.model,
                endpoint=request.endpoint,
                result_text=result_text,
            )
            self._entries[entry.id] = entry
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
            return entry

    async def get(self, entry_id: str) -> Optional[HistoryEntry]:
        async with self._lock:
            return self._entries.get(entry_id)

    async def list_entries(
        self,
        *,
        app_category: Optional[AppCategory] = None,
        provider: Optional[Provider] = None,
        folder: Optional[str] = None,
        query: Optional[str] = None,
    ) -> List[HistoryEntry]:
        """Newest first, optionally filtered; ``query`` matches description or result text."""
        async with self._lock:
            entries = list(reversed(self._entries.values()))
        if app_category is not None:
            entries = [e for e in entries if e.app_category == app_category]
        if provider is not None:
            entries = [e for e in entries if e.provider == provider]
        if folder is not None:
            entries = [e for e in entries if e.folder == folder]
        if query:
            needle = query.lower()
            entries = [
                e for e in entries
                if needle in e.description.lower() or needle in e.result_text.lower()
            ]
        return entries

    async def move(self, entry_id: str, folder: Optional[str]) -> Optional[HistoryEntry]:
        async with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                return None
            updated = entry.model_copy(update={"folder": (folder or "").strip() or None})
            self._entries[entry_id] = updated
            return updated

    async def delete(self, entry_id: str) -> bool:
        async with self._lock:
            return self._entries.pop(entry_id, None) is not None

    async def folders(self) -> List[str]:
        async with self._lock:
            names = {e.folder for e in self._entries.values() if e.folder}
        return sorted(names)

    async def export(self) -> List[Dict]:
        return [e.model_dump(mode="json") for e in await self.list_entries()]
