"""
Blocking terminal and pipe reads.

``asyncio.run`` replaces the SIGINT handler with one that only cancels the
main task. A read blocked in the main thread never sees that cancellation,
so Ctrl-C would be ignored until the read returns. The reads below restore
Python's default handler while they block, which raises KeyboardInterrupt
straight out of the read.
"""

import signal
import threading
from contextlib import contextmanager
from typing import BinaryIO


@contextmanager
def default_sigint():
    """Raise KeyboardInterrupt on SIGINT for the duration of the block."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.default_int_handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def read_line(prompt: str) -> str:
    """``input(prompt)`` that Ctrl-C interrupts."""
    with default_sigint():
        return input(prompt)


def read_chunk(stream: BinaryIO, size: int) -> bytes:
    """``stream.read(size)`` that Ctrl-C interrupts."""
    with default_sigint():
        return stream.read(size)
