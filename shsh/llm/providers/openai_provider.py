"""OpenAI Provider Implementation."""

from .openai_compat_provider import OpenAICompatibleProvider


class OpenAIProvider(OpenAICompatibleProvider):
    """Provider for api.openai.com (or OPENAI_BASE_URL, which the SDK honours)."""

    DEFAULT_MODEL = "gpt-4o-mini"
