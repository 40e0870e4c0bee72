# tests/test_config.py
from importlib import reload

import pytest

import promptgen.core.config as cfg_mod


@pytest.fixture
def reload_config(monkeypatch):
    yield monkeypatch
    # restore module state from the untouched environment
    monkeypatch.undo()
    reload(cfg_mod)


def test_defaults_present(reload_config):
    reload_config.delenv("REQUEST_TIMEOUT_SECONDS", raising=False)
    reload_config.delenv("GEMINI_DEFAULT_MODEL", raising=False)
    reload(cfg_mod)
    assert cfg_mod.OPENAI_CHAT_URL.endswith("/chat/completions")
    assert cfg_mod.ANTHROPIC_MAX_TOKENS == 1000
    assert cfg_mod.GEMINI_DEFAULT_MODEL == "gemini-2.5-flash"
    assert cfg_mod.REQUEST_TIMEOUT_SECONDS is None


def test_bool_and_float_parsing(reload_config):
    reload_config.setenv("ENABLE_HISTORY", "No")
    reload_config.setenv("REQUEST_TIMEOUT_SECONDS", "30")
    reload(cfg_mod)
    assert cfg_mod.ENABLE_HISTORY is False
    assert cfg_mod.REQUEST_TIMEOUT_SECONDS == 30.0
    assert isinstance(cfg_mod.REQUEST_TIMEOUT_SECONDS, float)
    reload_config.setenv("ENABLE_HISTORY", "Yes")
    reload(cfg_mod)
    assert cfg_mod.ENABLE_HISTORY is True


def test_cors_origins_split(reload_config):
    reload_config.setenv("CORS_ORIGINS", "http://localhost:5173, http://127.0.0.1:5173")
    reload(cfg_mod)
    assert cfg_mod.CORS_ORIGINS == ["http://localhost:5173", "http://127.0.0.1:5173"]
