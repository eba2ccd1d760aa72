"""Tests for the interactive confirm/retry state machine."""

import asyncio
import io

import pytest

from shsh.confirm_loop import ConfirmRetryLoop, LoopState, ask, decide
from shsh.errors import ExecutionError
from shsh.prompts import RETRY_CLAUSE
from shsh.stdin_capture import StdinContext


class FakeSynthesizer:
    """Returns numbered commands and records every call."""

    def __init__(self):
        self.calls = []

    async def __call__(self, request, stdin, is_retry):
        self.calls.append((request, stdin, is_retry))
        return f"cmd-{len(self.calls)}"


class FakeRunner:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    async def __call__(self, command, stdin):
        self.calls.append((command, stdin))
        if self.error:
            raise self.error
        return 0


def answers(*values):
    remaining = list(values)
    asked = []

    async def _ask(question):
        asked.append(question)
        return remaining.pop(0)

    _ask.asked = asked
    return _ask


def run_loop(request="list files", stdin=None, replies=("y",), runner=None, retry=False):
    synth = FakeSynthesizer()
    runner = runner or FakeRunner()
    out = io.StringIO()
    loop = ConfirmRetryLoop(
        request, stdin, synth, runner, ask=answers(*replies), out=out, retry=retry,
    )
    result = asyncio.run(loop.run())
    return result, synth, runner, out.getvalue(), loop


class TestDecide:

    @pytest.mark.parametrize("answer", ["y", "yes"])
    def test_yes(self, answer):
        assert decide(answer) is LoopState.EXECUTE

    @pytest.mark.parametrize("answer", ["r", "retry"])
    def test_retry(self, answer):
        assert decide(answer) is LoopState.RETRY

    @pytest.mark.parametrize("answer", ["", "n", "no", "q", "yess", "rr"])
    def test_anything_else_aborts(self, answer):
        assert decide(answer) is LoopState.ABORT


class TestExecute:

    def test_yes_runs_command(self):
        result, synth, runner, out, loop = run_loop(replies=["y"])

        assert result.executed is True
        assert result.attempts == 1
        assert runner.calls == [("cmd-1", None)]
        assert "Generated command:\ncmd-1\n" in out
        assert loop.state is LoopState.DONE

    def test_answer_is_case_insensitive_and_trimmed(self):
        result, _, runner, _, _ = run_loop(replies=["  YES \n"])
        assert result.executed is True
        assert runner.calls[0][0] == "cmd-1"

    def test_stdin_is_passed_to_runner(self):
        ctx = StdinContext(text="a\nb", size_bytes=3)
        _, synth, runner, _, _ = run_loop(stdin=ctx, replies=["y"])

        assert synth.calls == [("list files", ctx, False)]
        assert runner.calls == [("cmd-1", ctx)]

    def test_execution_failure_propagates_without_retry_offer(self):
        synth = FakeSynthesizer()
        runner = FakeRunner(error=ExecutionError("Command exited with code 2", returncode=2))
        ask_fn = answers("y")
        loop = ConfirmRetryLoop("list files", None, synth, runner, ask=ask_fn, out=io.StringIO())

        with pytest.raises(ExecutionError) as exc_info:
            asyncio.run(loop.run())

        assert exc_info.value.returncode == 2
        assert len(ask_fn.asked) == 1
        assert len(synth.calls) == 1


class TestRetry:

    def test_retry_uses_original_request(self):
        result, synth, runner, out, loop = run_loop(replies=["r", "retry", "y"])

        assert synth.calls == [
            ("list files", None, False),
            ("list files", None, True),
            ("list files", None, True),
        ]
        assert runner.calls == [("cmd-3", None)]
        assert result.attempts == 3
        assert out.count("Generated command:") == 3

    def test_retry_discards_previous_attempt(self):
        _, _, _, _, loop = run_loop(replies=["r", "y"])

        assert loop.attempt.command == "cmd-2"
        assert loop.attempt.is_retry is True
        assert loop.attempt.prompt_text == "list files" + RETRY_CLAUSE
        assert "cmd-1" not in loop.attempt.prompt_text

    def test_retry_keeps_stdin_context(self):
        ctx = StdinContext(text="data", size_bytes=4)
        _, synth, _, _, _ = run_loop(stdin=ctx, replies=["r", "n"])
        assert [call[1] for call in synth.calls] == [ctx, ctx]

    def test_no_retry_cap(self):
        result, synth, _, _, _ = run_loop(replies=["r"] * 25 + ["y"])
        assert result.attempts == 26
        assert len(synth.calls) == 26

    def test_starts_as_retry(self):
        _, synth, _, _, _ = run_loop(replies=["y"], retry=True)
        assert synth.calls == [("list files", None, True)]


class TestAbort:

    def test_no_aborts(self):
        result, synth, runner, out, _ = run_loop(replies=["n"])

        assert result.executed is False
        assert result.command == "cmd-1"
        assert runner.calls == []
        assert out.rstrip().endswith("Aborted.")

    def test_empty_answer_aborts(self):
        result, _, runner, out, _ = run_loop(replies=[""])
        assert result.executed is False
        assert runner.calls == []
        assert "Aborted." in out

    def test_prompt_text(self):
        synth = FakeSynthesizer()
        ask_fn = answers("n")
        loop = ConfirmRetryLoop("x", None, synth, FakeRunner(), ask=ask_fn, out=io.StringIO())
        asyncio.run(loop.run())
        assert ask_fn.asked == ["Execute? (y/n/r): "]


class TestAsk:

    def test_eof_reads_as_empty(self, monkeypatch):
        def raise_eof(prompt):
            raise EOFError

        monkeypatch.setattr("builtins.input", raise_eof)
        assert asyncio.run(ask("Execute? ")) == ""

    def test_returns_line(self, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: "y")
        assert asyncio.run(ask("Execute? ")) == "y"
