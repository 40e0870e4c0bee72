# tests/conftest.py
import os
import logging
from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Ensure test-friendly env
os.environ.setdefault("ENABLE_HISTORY", "true")
os.environ.setdefault("HISTORY_MAX_ENTRIES", "50")

# IMPORTANT: import the app after envs are set
from promptgen import main as main_module
from promptgen.providers.base import OnPartial, ProviderAdapter, emit
from promptgen.schemas.enums import AppCategory, Provider, Verbosity
from promptgen.schemas.generation import GenerationRequest


class StubAdapter(ProviderAdapter):
    """Deterministic adapter: replays fixed fragments as growing snapshots."""

    name = "stub"

    def __init__(self, fragments: List[str], error: Optional[Exception] = None) -> None:
        self.fragments = fragments
        self.error = error
        self.calls: List[dict] = []
        self.test_calls: List[dict] = []

    async def call(self, *, description, system_prompt, credential, model, endpoint=None,
                   on_partial: Optional[OnPartial] = None) -> str:
        self.calls.append({
            "description": description,
            "system_prompt": system_prompt,
            "credential": credential,
            "model": model,
            "endpoint": endpoint,
        })
        if self.error is not None:
            raise self.error
        acc = ""
        for fragment in self.fragments:
            acc += fragment
            await emit(on_partial, acc)
        return acc

    async def test_call(self, *, credential, model=None, endpoint=None) -> None:
        self.test_calls.append({"credential": credential, "model": model, "endpoint": endpoint})
        if self.error is not None:
            raise self.error


@pytest.fixture
def stub_adapter():
    def make(fragments=("Hello", " world"), error=None) -> StubAdapter:
        return StubAdapter(list(fragments), error=error)
    return make


@pytest.fixture
def make_request():
    def make(**overrides) -> GenerationRequest:
        fields = {
            "description": "A snake game with power-ups",
            "app_category": AppCategory.HTML_GAMES,
            "verbosity": Verbosity.STANDARD,
            "provider": Provider.OPENAI,
            "credential": "sk-test",
            "model": "gpt-4o-mini",
        }
        fields.update(overrides)
        return GenerationRequest(**fields)
    return make


@pytest_asyncio.fixture
async def app():
    # fresh app per test so history does not leak between tests
    return main_module.create_app()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO)
    return caplog


@pytest.fixture
def caplog_debug(caplog):
    caplog.set_level(logging.DEBUG)
    return caplog
