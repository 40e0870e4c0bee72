from fastapi import Request
from promptgen.services.generation import GenerationClient
from promptgen.services.history import HistoryStore
from promptgen.services.probe import ConnectivityProbe


def get_generation_client(request: Request) -> GenerationClient:
    return request.app.state.generation_client


def get_probe(request: Request) -> ConnectivityProbe:
    return request.app.state.probe


def get_history_store(request: Request) -> HistoryStore:
    return request.app.state.history_store
