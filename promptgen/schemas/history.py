from pydantic import BaseModel, Field
from typing import List, Optional

from promptgen.schemas.enums import AppCategory, Provider, Verbosity


class HistoryEntry(BaseModel):
    id: str
    timestamp: float
    description: str
    app_category: AppCategory
    verbosity: Verbosity
    provider: Provider
    model: str
    endpoint: Optional[str] = None
    result_text: str
    folder: Optional[str] = None


class HistoryUpdate(BaseModel):
    # null moves the entry back out of any folder
    folder: Optional[str] = Field(default=None, max_length=200)


class HistoryList(BaseModel):
    entries: List[HistoryEntry]
