"""
shsh entrypoint.

Turns the words on the command line into a shell command, then prints,
runs, or confirms it depending on flags and whether stdin is piped.
"""

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from . import config_file
from .confirm_loop import Asker, ConfirmRetryLoop, ask as ask_terminal
from .errors import InputError, ShshError
from .integration import detect_shell, generate_integration
from .llm.manager import LLMManager
from .modes import ExecutionMode, resolve_mode
from .runner import run_command
from .stdin_capture import StdinContext, read_stdin, stdin_is_piped
from .synthesizer import generate_command
from .tip_store import FileTipStore, TipStore, show_tip_once

logger = logging.getLogger(__name__)

USAGE = """Usage: shsh [options] "<natural language description>"

Options:
  --yes, -y          Auto-execute without confirmation
  --print, -p        Print command only, do not execute
  --init [shell]     Print shell integration script (zsh or bash)
  --help, -h         Show this help

Examples:
  shsh "find all jpeg images"
  shsh "find all jpeg images" | shsh "count output lines"
  echo "file1\\nfile2" | shsh --yes "delete these files"

Shell Integration:
  Add to ~/.zshrc or ~/.bashrc to record executed commands in your history:
    eval "$(shsh --init zsh)"
    eval "$(shsh --init bash)"
"""


@dataclass(frozen=True)
class Request:
    """What the user asked for. Built once from argv."""

    text: str
    auto_confirm: bool = False
    print_only: bool = False
    retry: bool = False


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise InputError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="shsh", add_help=False, allow_abbrev=False)
    parser.add_argument("-y", "--yes", dest="auto_confirm", action="store_true")
    parser.add_argument("-p", "--print", dest="print_only", action="store_true")
    parser.add_argument("-h", "--help", dest="help", action="store_true")
    parser.add_argument("--init", nargs="?", const="", default=None, metavar="SHELL")
    # Passed by the shell integration when the user asks for another suggestion.
    parser.add_argument("--retry", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("words", nargs="*")
    return parser


OPTION_STRINGS = {"-y", "--yes", "-p", "--print", "-h", "--help", "--init", "--retry"}


def _is_unknown_option(token: str) -> bool:
    return token.startswith("-") and token.split("=", 1)[0] not in OPTION_STRINGS


def parse_args(argv: List[str]) -> argparse.Namespace:
    """Parse argv. Dash-prefixed tokens that are not shsh options are dropped."""
    unknown = [token for token in argv if _is_unknown_option(token)]
    if unknown:
        logger.debug(f"Ignoring unknown arguments: {unknown}")
    return build_parser().parse_intermixed_args(
        [token for token in argv if not _is_unknown_option(token)]
    )


def _configure_logging():
    debug = bool(config_file.get("debug")) or os.getenv("SHSH_DEBUG", "").lower() in {
        "1", "true", "yes", "on",
    }
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="shsh: %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def run(
    request: Request,
    is_piped: bool,
    tip_store: Optional[TipStore] = None,
    stdin_stream=None,
    manager: Optional[LLMManager] = None,
    ask: Optional[Asker] = None,
) -> int:
    """
    Carry out one request.

    Stdin is captured completely before the first generation call; each
    phase finishes before the next one starts.
    """
    stdin: Optional[StdinContext] = None
    if is_piped:
        stdin = read_stdin(stdin_stream)

    mode = resolve_mode(request.print_only, request.auto_confirm, is_piped)
    manager = manager or LLMManager()

    async def synthesize(text: str, context: Optional[StdinContext], is_retry: bool) -> str:
        return await generate_command(text, context, is_retry, manager=manager)

    executed = False
    try:
        if mode is ExecutionMode.PRINT_ONLY:
            print(await synthesize(request.text, stdin, request.retry))
        elif mode is ExecutionMode.AUTO_EXECUTE:
            command = await synthesize(request.text, stdin, request.retry)
            print(command)
            sys.stdout.flush()
            await run_command(command, stdin)
            executed = True
        else:
            loop = ConfirmRetryLoop(
                request.text, stdin, synthesize, run_command,
                ask=ask or ask_terminal, retry=request.retry,
            )
            executed = (await loop.run()).executed
    finally:
        await manager.cleanup()

    if executed:
        show_tip_once(tip_store or FileTipStore(), detect_shell(), sys.stderr)
    return 0


def cli(argv: Optional[List[str]] = None, tip_store: Optional[TipStore] = None) -> int:
    """Run shsh with ``argv`` and return the process exit code."""
    argv = sys.argv[1:] if argv is None else argv

    try:
        args = parse_args(argv)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, end="", file=sys.stderr)
        return 1

    if args.help:
        print(USAGE, end="")
        return 0

    if args.init is not None:
        try:
            script = generate_integration(args.init or detect_shell())
        except ShshError as e:
            print(f"Error: {e}", file=sys.stderr)
            return e.exit_code
        print(script, end="")
        return 0

    request = Request(
        text=" ".join(args.words).strip(),
        auto_confirm=args.auto_confirm,
        print_only=args.print_only,
        retry=args.retry,
    )
    if not request.text:
        print(USAGE, end="", file=sys.stderr)
        return 1

    _configure_logging()

    try:
        return asyncio.run(run(request, stdin_is_piped(), tip_store=tip_store))
    except ShshError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        return 130


def main():
    """Console script entry point."""
    sys.exit(cli())


if __name__ == "__main__":
    main()
