"""
Provider Factory for shsh.

Creates LLM provider instances based on configuration.
"""

import logging
from enum import Enum
from typing import Optional, Dict, Any

from .providers.base_provider import BaseProvider
from .providers.groq_provider import GroqProvider
from .providers.openai_provider import OpenAIProvider
from . import config
from ..errors import GenerationError

logger = logging.getLogger(__name__)


class LLMType(str, Enum):
    """Available LLM provider types."""
    GROQ = "groq"
    OPENAI = "openai"


_PROVIDER_CLASSES = {
    LLMType.GROQ: GroqProvider,
    LLMType.OPENAI: OpenAIProvider,
}

_API_KEY_NAMES = {
    LLMType.GROQ: "GROQ_API_KEY",
    LLMType.OPENAI: "OPENAI_API_KEY",
}


class ProviderFactory:
    """Factory for creating LLM provider instances."""

    @staticmethod
    def create_provider(
        llm_type: LLMType,
        api_key: str,
        model: str,
        provider_config: Optional[Dict[str, Any]] = None,
    ) -> BaseProvider:
        """
        Create an LLM provider instance.

        Args:
            llm_type: Which provider to create
            api_key: API key for the provider
            model: Model name to use
            provider_config: Additional provider configuration

        Returns:
            Configured provider instance
        """
        provider_config = provider_config or {}

        try:
            provider_cls = _PROVIDER_CLASSES[LLMType(llm_type)]
        except (KeyError, ValueError):
            raise ValueError(f"Unknown LLM type: {llm_type}")

        return provider_cls(
            api_key=api_key,
            model=model,
            timeout=provider_config.get("timeout", config.HTTP_TIMEOUT),
            **{k: v for k, v in provider_config.items() if k != "timeout"},
        )

    @staticmethod
    def create_default_provider() -> BaseProvider:
        """
        Create the configured provider (Groq unless config.toml says otherwise).

        Raises:
            GenerationError: If the provider's API key is not configured
        """
        llm_type = LLMType(config.primary_provider())
        api_key = config.api_key_for(llm_type.value)
        if not api_key:
            raise GenerationError(
                f"{_API_KEY_NAMES[llm_type]} not set. Configure it in .env or the environment."
            )

        return ProviderFactory.create_provider(
            llm_type,
            api_key,
            config.model_for(llm_type.value),
        )
