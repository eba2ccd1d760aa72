"""
Command synthesis for shsh.

Builds the prompts, sends one request to the LLM and returns the reply as
the literal command string.
"""

import logging
from typing import Optional

from .errors import GenerationError
from .llm.manager import LLMManager
from .prompts import build_system_prompt, build_user_prompt
from .stdin_capture import StdinContext
from .summarize import summarize_stdin

logger = logging.getLogger(__name__)


async def generate_command(
    request: str,
    stdin: Optional[StdinContext] = None,
    is_retry: bool = False,
    manager: Optional[LLMManager] = None,
    cwd: Optional[str] = None,
) -> str:
    """
    Turn a natural language request into a shell command.

    Args:
        request: The user's original request text
        stdin: Captured piped input, if any
        is_retry: Append the retry clause to the request
        manager: LLM manager to use (a fresh one is created and cleaned
            up when omitted)
        cwd: Working directory named in the system prompt

    Returns:
        The generated command, stripped of surrounding whitespace

    Raises:
        GenerationError: The LLM call failed or returned nothing
    """
    context = summarize_stdin(stdin.text) if stdin is not None else None
    system_prompt = build_system_prompt(cwd=cwd, context=context)
    messages = [{"role": "user", "content": build_user_prompt(request, is_retry)}]

    owns_manager = manager is None
    if owns_manager:
        manager = LLMManager()

    try:
        result = await manager.generate(messages=messages, system_prompt=system_prompt)
    finally:
        if owns_manager:
            await manager.cleanup()

    command = result.strip()
    if not command:
        raise GenerationError("The model returned an empty command")

    logger.debug(f"Generated command (retry={is_retry}): {command}")
    return command
