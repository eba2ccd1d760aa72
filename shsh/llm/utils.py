"""
Utility functions for LLM providers.

Message conversion to the ChatCompletion message list.
"""

import logging
from typing import Dict, Any, Optional, List

logger = logging.getLogger(__name__)


def convert_to_standard_messages(
    messages: List[Dict[str, Any]], system_prompt: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Prepend ``system_prompt`` unless ``messages`` already carry a system message.

    Standard format:
    [
        {"role": "system", "content": "..."},
        {"role": "user", "content": "..."}
    ]
    """
    result = []
    has_system = any(msg.get("role") == "system" for msg in messages)
    if system_prompt and not has_system:
        result.append({"role": "system", "content": system_prompt})
    result.extend(messages)
    return result
