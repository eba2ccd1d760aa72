"""
Groq Provider Implementation.

Default provider for shsh due to fast inference.
"""

from .openai_compat_provider import OpenAICompatibleProvider


class GroqProvider(OpenAICompatibleProvider):
    """
    Groq provider using their OpenAI-compatible API.

    Primary model: llama-3.3-70b-versatile
    """

    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
    DEFAULT_MODEL = "llama-3.3-70b-versatile"
    CLEAR_PROXY_ENV = True
