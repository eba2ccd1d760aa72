"""
LLM Manager for shsh.

Owns the provider for one run and performs the single request/response
exchange used to turn a prompt into a command.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional, List

from .provider_factory import ProviderFactory
from .providers.base_provider import BaseProvider
from .. import config_file
from ..errors import GenerationError

logger = logging.getLogger(__name__)

# Debug log directory
_DEBUG_LOG_DIR = Path.home() / ".local" / "share" / "shsh"
_DEBUG_LOG_FILE = _DEBUG_LOG_DIR / "debug.log"


def _debug_enabled() -> bool:
    return bool(config_file.get("debug"))


def _debug_log(label: str, data: Any) -> None:
    """Append a timestamped entry to the debug log file."""
    if not _debug_enabled():
        return
    try:
        _DEBUG_LOG_DIR.mkdir(parents=True, exist_ok=True)
        with open(_DEBUG_LOG_FILE, "a") as f:
            ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            f.write(f"\n{'='*72}\n")
            f.write(f"[{ts}] {label}\n")
            f.write(f"{'='*72}\n")
            if isinstance(data, (dict, list)):
                f.write(json.dumps(data, indent=2, default=str))
            else:
                f.write(str(data))
            f.write("\n")
    except OSError as e:
        logger.debug(f"Could not write debug log: {e}")


class LLMManager:
    """
    Manages the LLM provider lifecycle for a run.

    The provider is created and initialized lazily on the first call to
    generate(), so a run that never reaches generation needs no API key.
    """

    def __init__(self, provider: Optional[BaseProvider] = None):
        self.provider = provider
        self._initialized = False

    async def initialize(self):
        """Create (if needed) and initialize the provider client."""
        if self.provider is None:
            self.provider = ProviderFactory.create_default_provider()
            logger.debug(f"Created provider: {self.provider}")
        if not self._initialized:
            if not await self.provider.initialize():
                raise GenerationError(f"Failed to initialize {self.provider}")
            self._initialized = True

    async def generate(
        self,
        messages: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
        model_id: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs,
    ) -> str:
        """
        Send one request and return the response text.

        Args:
            messages: Conversation messages (a single user turn for shsh)
            system_prompt: System prompt
            model_id: Override model
            max_tokens: Response size bound (config default when None)
            temperature: Temperature (config default when None)
            **kwargs: Extra provider params

        Raises:
            GenerationError: The provider call failed. The message is the
                underlying error's message.
        """
        await self.initialize()

        if max_tokens is None:
            max_tokens = config_file.get("max_tokens")
        if temperature is None:
            temperature = config_file.get("temperature")

        _debug_log("REQUEST", {
            "provider": str(self.provider),
            "system_prompt": system_prompt,
            "messages": messages,
            "max_tokens": max_tokens,
        })

        try:
            response = await self.provider.generate(
                messages=messages,
                system_prompt=system_prompt,
                model_id=model_id,
                max_tokens=max_tokens,
                temperature=temperature,
                **kwargs,
            )
        except Exception as e:
            _debug_log("ERROR", str(e))
            logger.debug(f"LLM generate error: {e}")
            raise GenerationError(str(e)) from e

        _debug_log("RESPONSE", response)
        return response

    async def cleanup(self):
        """Clean up the provider."""
        if self.provider is None or not self._initialized:
            return
        try:
            await self.provider.cleanup()
        except Exception as e:
            logger.error(f"Cleanup error: {e}")
        self._initialized = False
