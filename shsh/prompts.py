"""
Prompt templates for shsh.
"""

import os
import sys
from typing import Optional

SYSTEM_PROMPT = """You are a shell command generator for {os} systems.
Generate only the shell command needed to accomplish the user's request."""

STDIN_CONTEXT = """

The user has piped the following data as input:
---
{context}
---

Generate a command that works with this piped data."""

OUTPUT_RULES = """
Output ONLY the command itself, with no explanations, markdown formatting, or additional text.
The command will be executed in: {cwd}"""

RETRY_CLAUSE = (
    "\nThe previous command suggestion didn't work or wasn't what I needed. "
    "Please provide an alternative approach."
)


def host_os() -> str:
    """Platform name as sys.platform spells it (linux, darwin, win32)."""
    return sys.platform


def build_system_prompt(
    cwd: Optional[str] = None,
    context: Optional[str] = None,
    os_info: Optional[str] = None,
) -> str:
    """Build the system prompt, embedding the stdin summary when there is one."""
    prompt = SYSTEM_PROMPT.format(os=os_info or host_os())
    if context:
        prompt += STDIN_CONTEXT.format(context=context)
    prompt += OUTPUT_RULES.format(cwd=cwd or os.getcwd())
    return prompt


def build_user_prompt(request: str, is_retry: bool = False) -> str:
    """The user's request, with the retry clause appended on regeneration."""
    return request + RETRY_CLAUSE if is_retry else request
