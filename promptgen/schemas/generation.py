from pydantic import BaseModel, Field, field_validator
from typing import Optional

from promptgen.schemas.enums import AppCategory, Provider, Verbosity


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class GenerationRequest(BaseModel):
    description: str = Field(min_length=1, max_length=8000)
    app_category: AppCategory = Field(default=AppCategory.HTML_GAMES)
    verbosity: Verbosity = Field(default=Verbosity.STANDARD)
    provider: Provider
    credential: str = Field(min_length=1)
    model: str = Field(min_length=1)
    # only meaningful for the OpenAI-compatible provider, ignored otherwise
    endpoint: Optional[str] = None

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description must not be blank")
        return v

    @field_validator("endpoint")
    @classmethod
    def _normalize_endpoint(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class GenerateBody(GenerationRequest):
    stream: bool = Field(default=False)


class GenerationResponse(BaseModel):
    text: str
    provider: Provider
    model: str
    history_id: Optional[str] = None


class ProbeRequest(BaseModel):
    provider: Provider
    credential: str = Field(min_length=1)
    model: Optional[str] = None
    endpoint: Optional[str] = None

    @field_validator("model", "endpoint")
    @classmethod
    def _normalize_optional(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v)


class ProbeResult(BaseModel):
    success: bool
    error_message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ProbeResult":
        return cls(success=True)

    @classmethod
    def failed(cls, message: str) -> "ProbeResult":
        return cls(success=False, error_message=message)
