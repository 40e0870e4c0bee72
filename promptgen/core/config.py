# centralized configuration loader
# runs load_dotenv() to read .env
# endpoints, defaults and limits can be swapped per deployment without code change

import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


# Provider endpoints
OPENAI_CHAT_URL = os.getenv("OPENAI_CHAT_URL", "https://api.openai.com/v1/chat/completions")
ANTHROPIC_MESSAGES_URL = os.getenv("ANTHROPIC_MESSAGES_URL", "https://api.anthropic.com/v1/messages")
ANTHROPIC_VERSION = os.getenv("ANTHROPIC_VERSION", "2023-06-01")

# Generation caps
ANTHROPIC_MAX_TOKENS = int(os.getenv("ANTHROPIC_MAX_TOKENS", "1000"))

# Fallback models, only used when the caller leaves the model empty
OPENAI_DEFAULT_MODEL = os.getenv("OPENAI_DEFAULT_MODEL", "gpt-4o-mini")
ANTHROPIC_DEFAULT_MODEL = os.getenv("ANTHROPIC_DEFAULT_MODEL", "claude-3-5-haiku-latest")
GEMINI_DEFAULT_MODEL = os.getenv("GEMINI_DEFAULT_MODEL", "gemini-2.5-flash")

# Connectivity probe
PROBE_PROMPT = os.getenv("PROBE_PROMPT", "test")

# unset means no timeout; a call waits until the transport resolves or errors
REQUEST_TIMEOUT_SECONDS = _env_optional_float("REQUEST_TIMEOUT_SECONDS")

# History
ENABLE_HISTORY = _env_bool("ENABLE_HISTORY", "true")
HISTORY_MAX_ENTRIES = int(os.getenv("HISTORY_MAX_ENTRIES", "500"))

# Server
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
