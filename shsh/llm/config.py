"""
Configuration for shsh LLM services.

Loads API keys and model settings from .env file,
with optional overrides from ~/.config/shsh/config.toml.
"""

import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from .. import config_file

logger = logging.getLogger(__name__)

# Load .env from project root (shsh/llm/config.py -> shsh/ -> project root)
_env_paths = [
    Path(__file__).parent.parent.parent / ".env",  # project_root/.env
    Path.cwd() / ".env",
]

_env_loaded = False
for _env_path in _env_paths:
    if _env_path.exists():
        load_dotenv(dotenv_path=_env_path)
        logger.debug(f"Loaded .env from {_env_path}")
        _env_loaded = True
        break

if not _env_loaded:
    logger.debug(".env not found; using environment variables if set.")

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

# Model defaults, overridable from the environment
GROQ_MODEL = os.getenv("SHSH_GROQ_MODEL", "llama-3.3-70b-versatile")
OPENAI_MODEL = os.getenv("SHSH_OPENAI_MODEL", "gpt-4o-mini")

# Timeouts (fast for CLI use)
DEFAULT_TIMEOUT = 30


def timeout_from_env(value: Optional[str] = None) -> int:
    """HTTP timeout in seconds from SHSH_TIMEOUT; an invalid value warns and falls back."""
    value = os.getenv("SHSH_TIMEOUT") if value is None else value
    if value is None:
        return DEFAULT_TIMEOUT
    timeout = config_file._validate_int(value, "SHSH_TIMEOUT")
    return DEFAULT_TIMEOUT if timeout is None else timeout


HTTP_TIMEOUT = timeout_from_env()


def primary_provider() -> str:
    """Provider name from config.toml (groq or openai)."""
    return config_file.get("provider")


def model_for(provider: str) -> str:
    """Model for ``provider``: config.toml overrides env vars, which override defaults."""
    cfg_model: Optional[str] = config_file.get("model")
    if cfg_model:
        return cfg_model
    return OPENAI_MODEL if provider == "openai" else GROQ_MODEL


def api_key_for(provider: str) -> Optional[str]:
    return OPENAI_API_KEY if provider == "openai" else GROQ_API_KEY
