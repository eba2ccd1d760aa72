"""Execution mode selection."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ExecutionMode(str, Enum):
    """How a generated command is handled."""
    PRINT_ONLY = "print-only"
    AUTO_EXECUTE = "auto-execute"
    INTERACTIVE = "interactive"


def resolve_mode(print_only: bool, auto_confirm: bool, is_piped: bool) -> ExecutionMode:
    """
    Pick the execution mode for a run.

    The order of the checks matters: ``--print`` always wins, and piped
    input is never executed unless ``--yes`` was given, since nobody is at
    the terminal to confirm it.
    """
    if print_only:
        mode = ExecutionMode.PRINT_ONLY
    elif is_piped and not auto_confirm:
        mode = ExecutionMode.PRINT_ONLY
    elif auto_confirm:
        mode = ExecutionMode.AUTO_EXECUTE
    else:
        mode = ExecutionMode.INTERACTIVE

    logger.debug(
        f"Mode {mode.value} (print={print_only}, yes={auto_confirm}, piped={is_piped})"
    )
    return mode
