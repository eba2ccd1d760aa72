"""LLM Provider modules for shsh."""

from .base_provider import BaseProvider
from .openai_compat_provider import OpenAICompatibleProvider
from .groq_provider import GroqProvider
from .openai_provider import OpenAIProvider

__all__ = ["BaseProvider", "OpenAICompatibleProvider", "GroqProvider", "OpenAIProvider"]
