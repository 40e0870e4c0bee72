# promptgen/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from promptgen.core import config
from promptgen.api.routers.health import router as health_router
from promptgen.api.routers.generate import router as generate_router
from promptgen.api.routers.history import router as history_router
from promptgen.providers.factory import default_adapters
from promptgen.services.generation import GenerationClient
from promptgen.services.history import HistoryStore
from promptgen.services.probe import ConnectivityProbe


def create_app() -> FastAPI:
    logging.basicConfig(level=config.LOG_LEVEL)

    app = FastAPI(title="Prompt Generator", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # shared, stateless across requests; each call owns its own buffers
    adapters = default_adapters()
    app.state.generation_client = GenerationClient(adapters)
    app.state.probe = ConnectivityProbe(adapters)
    app.state.history_store = HistoryStore(max_entries=config.HISTORY_MAX_ENTRIES)

    # Routers
    app.include_router(health_router)
    app.include_router(generate_router)
    app.include_router(history_router)

    return app


app = create_app()
