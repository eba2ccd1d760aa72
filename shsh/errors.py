"""Exceptions raised by shsh. Every one of them ends the run with exit code 1."""

from typing import Iterable


class ShshError(Exception):
    """Base exception for shsh."""

    exit_code = 1


class InputError(ShshError):
    """Raised when the command line does not describe a usable request."""
    pass


class UnsupportedShellError(InputError):
    """Raised when shell integration is requested for an unknown shell."""

    def __init__(self, shell: str, supported: Iterable[str]):
        self.shell = shell
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported shell: {shell}. Supported shells: {', '.join(self.supported)}"
        )


class CaptureError(ShshError):
    """Raised when piped stdin cannot be captured."""
    pass


class StdinTooLargeError(CaptureError):
    """Raised when piped stdin exceeds the capture ceiling."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"Stdin exceeds {limit // (1024 * 1024)}MB limit. "
            f'For large data, redirect from file: shsh "command" < file.txt'
        )


class GenerationError(ShshError):
    """Raised when the text generator fails to produce a command."""
    pass


class ExecutionError(ShshError):
    """Raised when the generated command fails or cannot be launched."""

    def __init__(self, message: str, returncode: int = -1):
        super().__init__(message)
        self.returncode = returncode
