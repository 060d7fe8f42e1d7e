"""Shared fixtures for tagline tests."""

from __future__ import annotations

import io
from collections.abc import Callable

import pytest


class TrickleReader(io.StringIO):
    """StringIO that never returns more than ``max_read`` characters per read.

    Simulates pipes and sockets that deliver short reads before end of stream.
    """

    def __init__(self, text: str, max_read: int) -> None:
        super().__init__(text)
        self.max_read = max_read
        self.reads = 0

    def read(self, size: int | None = -1) -> str:
        self.reads += 1
        if size is None or size < 0 or size > self.max_read:
            size = self.max_read
        return super().read(size)


class FailingReader(io.StringIO):
    """StringIO whose reads fail after ``ok_reads`` successful reads."""

    def __init__(self, text: str, ok_reads: int = 0) -> None:
        super().__init__(text)
        self.ok_reads = ok_reads

    def read(self, size: int | None = -1) -> str:
        if self.ok_reads <= 0:
            raise OSError("device not ready")
        self.ok_reads -= 1
        return super().read(size)


class FailingWriter(io.StringIO):
    """StringIO whose writes always fail."""

    def write(self, s: str) -> int:
        raise OSError("disk full")


@pytest.fixture
def trickle() -> Callable[[str, int], TrickleReader]:
    """Factory for streams with artificially small reads."""
    return TrickleReader


@pytest.fixture
def failing_reader() -> Callable[..., FailingReader]:
    return FailingReader


@pytest.fixture
def failing_writer() -> FailingWriter:
    return FailingWriter()
