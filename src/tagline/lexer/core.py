"""Chunked character lexer with a one-character lookahead window.

Reads the input in fixed-size chunks and presents it as one forward-only
character sequence. All state that must survive a chunk boundary lives in
the token accumulator, never in chunk indices, so nothing ever has to be
re-read.

Thread Safety:
Lexer instances are single-use. Create one per input stream.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from typing import TextIO

from tagline.config import DEFAULT_CHUNK_SIZE
from tagline.errors import MalformedDocumentError, StreamError
from tagline.stringbuilder import StringBuilder


class ChunkedLexer:
    """Forward-only lexer over a chunked text stream.

    Usage:
            >>> from io import StringIO
            >>> lexer = ChunkedLexer(StringIO("<a>\\n  <b/>"))
            >>> lexer.scan_to(">")
            >>> lexer.advance(skip_whitespace=True)
            >>> lexer.take_token()
            '<a>'
            >>> lexer.peek()
            '<'

    Line breaks passed over by ``scan_to`` are dropped from tokens, and
    whitespace skipped by ``advance(skip_whitespace=True)`` is dropped too.

    """

    __slots__ = (
        "_source",
        "_chunk_size",
        "_chunk",  # Current chunk, None once the stream is exhausted
        "_idx",  # Cursor into _chunk
        "_token",  # Characters scanned but not yet taken
        "_token_len",
        "_first_break",  # Token offset of the first dropped line break
        "_lineno",
        "_after_cr",  # Last character counted was \r
        "_chars_read",
        "_source_file",
    )

    def __init__(
        self,
        source: TextIO,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        source_file: str | None = None,
    ) -> None:
        """Initialize lexer and read the first chunk.

        Args:
            source: Readable text stream
            chunk_size: Characters requested per read
            source_file: Optional source file path for error messages

        Raises:
            ValueError: If chunk_size is less than 1.
            StreamError: If the first read fails.
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._source = source
        self._chunk_size = chunk_size
        self._chunk: str | None = None
        self._idx = 0
        self._token = StringBuilder()
        self._token_len = 0
        self._first_break: int | None = None
        self._lineno = 1
        self._after_cr = False
        self._chars_read = 0
        self._source_file = source_file
        self._read_next()

    @property
    def lineno(self) -> int:
        """Line number of the cursor (1-indexed)."""
        return self._lineno

    @property
    def first_break(self) -> int | None:
        """Offset in the current token where the first line break was dropped."""
        return self._first_break

    @property
    def chars_read(self) -> int:
        """Total characters delivered by the underlying stream so far."""
        return self._chars_read

    def at_end(self) -> bool:
        """Return True once every character of the stream was consumed."""
        return self._chunk is None

    def peek(self) -> str:
        """Return the current character without advancing.

        Returns:
            Current character or empty string at end of input.
        """
        if self._chunk is None:
            return ""
        return self._chunk[self._idx]

    def advance(self, skip_whitespace: bool = False) -> None:
        """Move past the current character, adding it to the token.

        Args:
            skip_whitespace: Also move past any whitespace that follows,
                refilling across chunk boundaries. Skipped characters are
                not added to the token.
        """
        if self._chunk is None:
            return

        char = self._chunk[self._idx]
        self._token.append(char)
        self._token_len += 1
        self._track(char)
        self._step()

        while skip_whitespace and self._chunk is not None:
            char = self._chunk[self._idx]
            if not char.isspace():
                break
            self._track(char)
            self._step()

    def scan_to(self, target: str) -> None:
        """Accumulate characters until ``target`` is under the cursor.

        ``\\n`` and ``\\r`` are consumed without being accumulated. The
        token offset of the first one is kept in :attr:`first_break`.

        Raises:
            MalformedDocumentError: If the input ends before ``target``.
        """
        while True:
            chunk = self._chunk
            if chunk is None:
                raise MalformedDocumentError(
                    f"Unexpected end of input while looking for {target!r}",
                    lineno=self._lineno,
                    source_file=self._source_file,
                )

            pos = chunk.find(target, self._idx)
            end = pos if pos != -1 else len(chunk)
            segment = chunk[self._idx : end]
            self._track(segment)
            if "\n" in segment or "\r" in segment:
                if self._first_break is None:
                    breaks = [i for i in (segment.find("\n"), segment.find("\r")) if i != -1]
                    self._first_break = self._token_len + min(breaks)
                segment = segment.replace("\r", "").replace("\n", "")
            self._token.append(segment)
            self._token_len += len(segment)

            if pos != -1:
                self._idx = pos
                return
            self._read_next()

    def take_token(self) -> str:
        """Return the accumulated token text and clear the accumulator."""
        text = self._token.build()
        self._token.clear()
        self._token_len = 0
        self._first_break = None
        return text

    def _track(self, text: str) -> None:
        """Count the line breaks in ``text``.

        ``\\n``, ``\\r\\n`` and a bare ``\\r`` each end one line, including
        a ``\\r\\n`` pair split across two calls.
        """
        if not text:
            return
        count = text.count("\n") + text.count("\r") - text.count("\r\n")
        if self._after_cr and text[0] == "\n":
            count -= 1
        self._lineno += count
        self._after_cr = text[-1] == "\r"

    def _step(self) -> None:
        """Move the cursor forward one character, refilling at chunk end."""
        self._idx += 1
        if self._chunk is not None and self._idx >= len(self._chunk):
            self._read_next()

    def _read_next(self) -> None:
        """Replace the current chunk with the next one from the stream.

        An empty read marks the end of the stream.
        """
        try:
            chunk = self._source.read(self._chunk_size)
        except (OSError, UnicodeError) as exc:
            raise StreamError(f"Failed to read input: {exc}") from exc

        self._idx = 0
        if not chunk:
            self._chunk = None
            return
        self._chars_read += len(chunk)
        self._chunk = chunk
