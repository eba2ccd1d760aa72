"""
OpenAI-compatible chat completion provider.

Both Groq and OpenAI speak the ChatCompletion API, so they share this
implementation and differ only in base URL and default model.
"""

import logging
import os
from typing import Dict, List, Optional, Any
from openai import AsyncOpenAI

from .base_provider import BaseProvider
from ..utils import convert_to_standard_messages

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(BaseProvider):
    """Provider for any endpoint implementing the OpenAI ChatCompletion API."""

    DEFAULT_BASE_URL: Optional[str] = None
    DEFAULT_MODEL = ""
    CLEAR_PROXY_ENV = False

    def __init__(self, api_key: str, model: Optional[str] = None,
                 timeout: float = 30.0, **kwargs):
        super().__init__(api_key, model or self.DEFAULT_MODEL, timeout, **kwargs)
        self.base_url = kwargs.get("base_url", self.DEFAULT_BASE_URL)

    async def initialize(self) -> bool:
        """Initialize the AsyncOpenAI client."""
        if self.CLEAR_PROXY_ENV:
            # httpx doesn't support SOCKS without socksio, and local HTTP
            # proxies may be down. Short-lived CLI process.
            for k in ["ALL_PROXY", "all_proxy", "HTTP_PROXY", "http_proxy",
                      "HTTPS_PROXY", "https_proxy"]:
                os.environ.pop(k, None)

        try:
            self.client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
            )
        except Exception as e:
            logger.error(f"Failed to initialize {self}: {e}")
            return False
        logger.debug(f"Initialized {self} at {self.base_url or 'default endpoint'}")
        return True

    def format_messages(
        self,
        messages: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Convert standard messages to ChatCompletion format."""
        formatted = []
        for msg in convert_to_standard_messages(messages, system_prompt):
            role = msg.get("role")
            content = msg.get("content")

            if role == "system":
                formatted.append({"role": "system", "content": str(content)})
            elif role in ("user", "assistant"):
                formatted.append({"role": role, "content": str(content)})
            else:
                logger.warning(f"Dropping message with unsupported role: {role}")

        return formatted

    async def generate(
        self,
        messages: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
        model_id: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: float = 0.2,
        **kwargs,
    ) -> str:
        """
        Generate a response with a single chat completion request.

        Returns:
            The first choice's text content.
        """
        if not self.client:
            raise RuntimeError(f"{self} not initialized. Call initialize() first.")

        model_name = model_id or self.model
        chat_params = {
            "model": model_name,
            "messages": self.format_messages(messages, system_prompt),
            "max_tokens": max_tokens,
            "temperature": temperature,
            **kwargs,
        }

        logger.debug(f"Chat request: model={model_name}, max_tokens={max_tokens}")

        response = await self.client.chat.completions.create(**chat_params)

        if response.choices and response.choices[0].message:
            return response.choices[0].message.content or ""

        raise ValueError(f"No content in {self.__class__.__name__} response")

    async def cleanup(self):
        """Close the HTTP client."""
        if self.client:
            await self.client.close()
        self.client = None
