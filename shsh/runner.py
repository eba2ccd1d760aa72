"""
Direct execution of generated commands.

Runs the command as a child of this process. Side effects on the calling
shell (cd, export, history) are impossible this way; that is what the
shell integration wrapper in integration.py is for.
"""

import asyncio
import logging
import os
from typing import Optional

from .errors import ExecutionError
from .stdin_capture import StdinContext

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"


def resolve_shell(env=None) -> str:
    """The user's $SHELL, or /bin/sh when unset."""
    env = os.environ if env is None else env
    return env.get("SHELL") or DEFAULT_SHELL


async def run_command(
    command: str,
    stdin: Optional[StdinContext] = None,
    shell: Optional[str] = None,
    cwd: Optional[str] = None,
) -> int:
    """
    Run ``command`` with ``<shell> -c`` and wait for it to exit.

    With captured stdin the child reads it from a pipe; stdout and stderr
    always go straight to the terminal. Without captured stdin the child
    inherits all three streams, so commands that prompt still work.

    Returns:
        0 when the command succeeded

    Raises:
        ExecutionError: Non-zero exit status, or the shell could not be started
    """
    shell = shell or resolve_shell()
    cwd = cwd or os.getcwd()
    logger.debug(f"Running with {shell} in {cwd}: {command}")

    try:
        process = await asyncio.create_subprocess_exec(
            shell, "-c", command,
            stdin=asyncio.subprocess.PIPE if stdin is not None else None,
            cwd=cwd,
        )
    except OSError as e:
        raise ExecutionError(f"Failed to start {shell}: {e}") from e

    if stdin is not None:
        try:
            process.stdin.write(stdin.raw)
            await process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError):
            # The command exited without reading all of its input.
            logger.debug("Child closed stdin before reading all input")
        finally:
            process.stdin.close()

    returncode = await process.wait()
    logger.debug(f"Command exited with code {returncode}")

    if returncode != 0:
        raise ExecutionError(f"Command exited with code {returncode}", returncode=returncode)
    return returncode
