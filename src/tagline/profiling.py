"""tagline FormatAccumulator — opt-in timing and counters for formatting runs.

This module provides accumulated metrics during formatting:
- Total elapsed time
- Characters read from input
- Tags processed and lines written

Zero overhead when disabled (get_format_accumulator() returns None).

Example:
    from tagline import format_string
    from tagline.profiling import profiled_format

    with profiled_format() as metrics:
        format_string("<a><b/></a>")

    print(metrics.summary())
    # {"total_ms": 0.1, "documents": 1, "chars_read": 11, "tags": 3, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class FormatAccumulator:
    """Accumulated metrics across formatting runs.

    Attributes:
        start_time: Profiling start timestamp.
        documents: Number of completed formatting runs.
        chars_read: Characters read from all inputs.
        tags: Tag tokens processed.
        lines_written: Output lines written.

    """

    start_time: float = field(default_factory=perf_counter)
    documents: int = 0
    chars_read: int = 0
    tags: int = 0
    lines_written: int = 0

    def record_format(self, chars_read: int, tags: int, lines_written: int) -> None:
        """Record one completed formatting run."""
        self.documents += 1
        self.chars_read += chars_read
        self.tags += tags
        self.lines_written += lines_written

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of format metrics.

        Returns:
            Dict with total_ms, documents, chars_read, tags, lines_written.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "documents": self.documents,
            "chars_read": self.chars_read,
            "tags": self.tags,
            "lines_written": self.lines_written,
        }


_accumulator: ContextVar[FormatAccumulator | None] = ContextVar(
    "format_accumulator",
    default=None,
)


def get_format_accumulator() -> FormatAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_format() -> Iterator[FormatAccumulator]:
    """Context manager for profiled formatting.

    Creates a FormatAccumulator and makes it available via
    get_format_accumulator() for the duration of the with block.

    Yields:
        FormatAccumulator that will be populated by formatter runs.

    """
    acc = FormatAccumulator()
    token: Token[FormatAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
