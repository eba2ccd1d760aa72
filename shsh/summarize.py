"""
Piped stdin summarization.

Large piped input is never sent to the generator as-is. Small buffers go
through unchanged, medium buffers keep their head and tail, and large
buffers are reduced to a short sample plus line count and size.
"""

SMALL_THRESHOLD = 5 * 1024
MEDIUM_THRESHOLD = 50 * 1024

HEAD_LINES = 30
TAIL_LINES = 30
SAMPLE_LINES = 15


def summarize_stdin(text: str) -> str:
    """Return a bounded view of ``text`` suitable for the system prompt."""
    if len(text) <= SMALL_THRESHOLD:
        return text

    lines = text.split("\n")
    line_count = len(lines)

    if len(text) <= MEDIUM_THRESHOLD:
        omitted = line_count - HEAD_LINES - TAIL_LINES
        if omitted <= 0:
            return text
        return (
            "\n".join(lines[:HEAD_LINES])
            + f"\n\n... ({omitted} lines omitted) ...\n\n"
            + "\n".join(lines[-TAIL_LINES:])
        )

    size_kb = len(text) / 1024
    head = "\n".join(lines[:SAMPLE_LINES])
    tail = "\n".join(lines[-SAMPLE_LINES:])
    return (
        f"[Stdin contains {line_count} lines, {size_kb:.1f}KB]\n\n"
        f"First {SAMPLE_LINES} lines:\n{head}\n\n"
        f"Last {SAMPLE_LINES} lines:\n{tail}\n\n"
        f"[Provide a command that processes all {line_count} lines from stdin]"
    )
