"""
Piped stdin capture.

Reads the whole of a non-interactive stdin before anything else happens,
refusing to buffer more than MAX_STDIN_BYTES.
"""

import codecs
import logging
import sys
from dataclasses import dataclass
from typing import BinaryIO, Optional

from .errors import StdinTooLargeError
from .terminal import read_chunk

logger = logging.getLogger(__name__)

MAX_STDIN_BYTES = 500 * 1024 * 1024  # 500MB
CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class StdinContext:
    """Captured piped input."""

    text: str
    size_bytes: int

    @property
    def raw(self) -> bytes:
        """The captured text as it is written to a child process."""
        return self.text.encode("utf-8")


def stdin_is_piped(stream=None) -> bool:
    """True when stdin is not an interactive terminal."""
    stream = stream if stream is not None else sys.stdin
    try:
        return not stream.isatty()
    except (AttributeError, ValueError):
        return True


def read_stdin(
    stream: Optional[BinaryIO] = None,
    limit: int = MAX_STDIN_BYTES,
    chunk_size: int = CHUNK_SIZE,
) -> StdinContext:
    """
    Read ``stream`` (default: the binary stdin) to end of file.

    Raises:
        StdinTooLargeError: as soon as more than ``limit`` bytes were read.
            Nothing more is read from the stream after that.
    """
    if stream is None:
        stream = sys.stdin.buffer

    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    parts = []
    size = 0

    while True:
        chunk = read_chunk(stream, chunk_size)
        if not chunk:
            break
        size += len(chunk)
        if size > limit:
            logger.debug(f"Stdin capture aborted after {size} bytes (limit {limit})")
            raise StdinTooLargeError(limit)
        parts.append(decoder.decode(chunk))

    parts.append(decoder.decode(b"", final=True))
    logger.debug(f"Captured {size} bytes from stdin")
    return StdinContext(text="".join(parts).strip(), size_bytes=size)
