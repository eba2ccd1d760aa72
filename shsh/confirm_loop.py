"""
Interactive confirm/retry loop.

    SYNTHESIZE -> DISPLAY -> AWAIT_DECISION -> EXECUTE | RETRY | ABORT
    RETRY -> SYNTHESIZE

Every synthesis starts from the original request text. A retry only adds
the fixed retry clause; the rejected command is never fed back.
"""

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, TextIO

from .prompts import build_user_prompt
from .stdin_capture import StdinContext
from .terminal import read_line

logger = logging.getLogger(__name__)

Synthesizer = Callable[[str, Optional[StdinContext], bool], Awaitable[str]]
Runner = Callable[[str, Optional[StdinContext]], Awaitable[int]]
Asker = Callable[[str], Awaitable[str]]

CONFIRM_PROMPT = "Execute? (y/n/r): "
YES_ANSWERS = {"y", "yes"}
RETRY_ANSWERS = {"r", "retry"}


class LoopState(str, Enum):
    SYNTHESIZE = "synthesize"
    DISPLAY = "display"
    AWAIT_DECISION = "await_decision"
    EXECUTE = "execute"
    RETRY = "retry"
    ABORT = "abort"
    DONE = "done"


@dataclass(frozen=True)
class GenerationAttempt:
    """One synthesized command. Replaced, never accumulated, on retry."""

    prompt_text: str
    is_retry: bool
    command: str


@dataclass(frozen=True)
class LoopResult:
    """How the loop ended."""

    executed: bool
    attempts: int
    command: Optional[str] = None


async def ask(question: str) -> str:
    """
    Read one answer from the terminal. End of input reads as empty.

    The read blocks the event loop; nothing else runs while the user decides.
    """
    try:
        return read_line(question)
    except EOFError:
        return ""


class ConfirmRetryLoop:
    """
    State machine for interactive mode.

    Each state has a handler returning the next state. The loop runs until
    DONE; execution errors raised by the runner propagate unchanged.
    """

    def __init__(
        self,
        request: str,
        stdin: Optional[StdinContext],
        synthesize: Synthesizer,
        run: Runner,
        ask: Asker = ask,
        out: Optional[TextIO] = None,
        retry: bool = False,
    ):
        self.request = request
        self.stdin = stdin
        self._synthesize = synthesize
        self._run = run
        self._ask = ask
        self._out = out
        self.state = LoopState.SYNTHESIZE
        self.attempt: Optional[GenerationAttempt] = None
        self.attempts = 0
        self._is_retry = retry
        self._executed = False
        self._handlers = {
            LoopState.SYNTHESIZE: self._on_synthesize,
            LoopState.DISPLAY: self._on_display,
            LoopState.AWAIT_DECISION: self._on_await_decision,
            LoopState.EXECUTE: self._on_execute,
            LoopState.RETRY: self._on_retry,
            LoopState.ABORT: self._on_abort,
        }

    def _print(self, *args):
        print(*args, file=self._out if self._out is not None else sys.stdout)

    async def run(self) -> LoopResult:
        while self.state is not LoopState.DONE:
            logger.debug(f"Confirm loop state: {self.state.value}")
            self.state = await self._handlers[self.state]()
        return LoopResult(
            executed=self._executed,
            attempts=self.attempts,
            command=self.attempt.command if self.attempt else None,
        )

    async def _on_synthesize(self) -> LoopState:
        command = await self._synthesize(self.request, self.stdin, self._is_retry)
        self.attempt = GenerationAttempt(
            prompt_text=build_user_prompt(self.request, self._is_retry),
            is_retry=self._is_retry,
            command=command,
        )
        self.attempts += 1
        return LoopState.DISPLAY

    async def _on_display(self) -> LoopState:
        self._print(f"Generated command:\n{self.attempt.command}\n")
        return LoopState.AWAIT_DECISION

    async def _on_await_decision(self) -> LoopState:
        answer = (await self._ask(CONFIRM_PROMPT)).strip().lower()
        return decide(answer)

    async def _on_execute(self) -> LoopState:
        self._print("")
        await self._run(self.attempt.command, self.stdin)
        self._executed = True
        return LoopState.DONE

    async def _on_retry(self) -> LoopState:
        self._is_retry = True
        self.attempt = None
        return LoopState.SYNTHESIZE

    async def _on_abort(self) -> LoopState:
        self._print("Aborted.")
        return LoopState.DONE


def decide(answer: str) -> LoopState:
    """Map a (normalized) confirmation answer to the next state."""
    if answer in YES_ANSWERS:
        return LoopState.EXECUTE
    if answer in RETRY_ANSWERS:
        return LoopState.RETRY
    return LoopState.ABORT
