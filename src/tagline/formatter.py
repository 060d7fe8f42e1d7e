"""Single-pass tag formatter with empty-element fusion.

Pulls one tag at a time from a ChunkedLexer, tracks nesting with a stack
of open tags and writes one tag per line, indented by depth. An open tag
directly followed by another tag is held back as the pending line: if the
very next tag is its close tag the pair is written as ``<tag/>``,
otherwise the pending line is written unchanged.

Thread Safety:
TagFormatter instances are single-use. Create one per document.
The stack, pending line and lexer are instance-local.

"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import TextIO

from tagline.config import FormatConfig, get_format_config
from tagline.errors import MalformedDocumentError, StreamError, TagMismatchError
from tagline.lexer import ChunkedLexer
from tagline.profiling import get_format_accumulator
from tagline.stringbuilder import StringBuilder
from tagline.tokens import Tag, TagKind, names_match
from tagline.utils.logger import get_logger
from tagline.utils.text import indent_prefix, unescape_text

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PendingLine:
    """An open tag line held back until the next tag is known.

    Attributes:
        tag: The open tag
        depth: Nesting depth the line is rendered at

    """

    tag: Tag
    depth: int

    def render(self, indent: str) -> str:
        """Render the line as written when no fusion happens."""
        return indent_prefix(indent, self.depth) + self.tag.text

    def render_fused(self, indent: str) -> str:
        """Render the line as a self-closing tag: ``<a x="1">`` -> ``<a x="1"/>``."""
        return indent_prefix(indent, self.depth) + self.tag.text[:-1] + "/>"


def fuse(pending: PendingLine | None, close: Tag, indent: str) -> str | None:
    """Fuse a pending open tag with the close tag that follows it.

    Args:
        pending: Line held back on the previous iteration, if any
        close: The close tag that was just read
        indent: Indent unit

    Returns:
        The self-closing line, or None if the two tags do not pair up.
    """
    if pending is None or close.kind is not TagKind.CLOSE:
        return None
    if not names_match(pending.tag, close):
        return None
    return pending.render_fused(indent)


class TagFormatter:
    """Re-indent one XML document from ``source`` into ``dest``.

    Usage:
            >>> from io import StringIO
            >>> out = StringIO()
            >>> TagFormatter(StringIO("<a><b></b><c>hi</c></a>"), out).run()
            >>> print(out.getvalue(), end="")
            <a>
              <b/>
              <c>hi</c>
            </a>

    """

    __slots__ = (
        "_lexer",
        "_dest",
        "_config",
        "_source_file",
        "_stack",  # Open tags, innermost last
        "_pending",  # PendingLine or None
        "_out",  # Output of the current iteration
        "_tags",
        "_lines",
    )

    def __init__(
        self,
        source: TextIO,
        dest: TextIO,
        config: FormatConfig | None = None,
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize formatter.

        Args:
            source: Readable text stream holding one XML document
            dest: Writable text stream receiving the formatted document
            config: Format configuration (defaults to the active context config)
            source_file: Optional source file path for error messages
        """
        self._config = config if config is not None else get_format_config()
        self._lexer = ChunkedLexer(source, self._config.chunk_size, source_file)
        self._dest = dest
        self._source_file = source_file
        self._stack: list[Tag] = []
        self._pending: PendingLine | None = None
        self._out = StringBuilder()
        self._tags = 0
        self._lines = 0

    @property
    def depth(self) -> int:
        """Current nesting depth (number of open tags on the stack)."""
        return len(self._stack)

    @property
    def tags_processed(self) -> int:
        return self._tags

    @property
    def lines_written(self) -> int:
        return self._lines

    def run(self) -> None:
        """Format the whole document.

        Raises:
            TagMismatchError: If a close tag does not match its open tag.
            MalformedDocumentError: If the document is truncated, has stray
                close tags or contains mixed content.
            StreamError: If reading or writing fails.
        """
        logger.debug("Formatting %s", self._source_file or "<stream>")
        start = perf_counter()

        lexer = self._lexer
        while not lexer.at_end():
            tag = self._next_tag()
            if tag.kind is TagKind.CLOSE:
                self._close(tag)
            elif tag.is_standalone:
                self._standalone(tag)
            else:
                self._open(tag)

        if self._stack:
            unclosed = " ".join(t.text for t in self._stack)
            raise MalformedDocumentError(
                f"Unexpected end of input, unclosed tags: {unclosed}",
                lineno=lexer.lineno,
                source_file=self._source_file,
            )

        elapsed = perf_counter() - start
        logger.debug(
            "Formatted %d tags into %d lines in %.3fs",
            self._tags,
            self._lines,
            elapsed,
        )
        acc = get_format_accumulator()
        if acc is not None:
            acc.record_format(
                chars_read=lexer.chars_read,
                tags=self._tags,
                lines_written=self._lines,
            )

    def _next_tag(self) -> Tag:
        """Skip to the next ``<`` and read through its ``>``."""
        self._lexer.scan_to("<")
        self._lexer.take_token()  # Inter-tag whitespace
        return self._read_tag()

    def _read_tag(self) -> Tag:
        """Read from the ``<`` under the cursor through the next ``>``."""
        lexer = self._lexer
        lexer.scan_to(">")
        lineno = lexer.lineno
        lexer.advance(skip_whitespace=True)
        self._tags += 1
        break_at = lexer.first_break
        return Tag.from_text(lexer.take_token(), lineno, self._source_file, break_at)

    def _close(self, tag: Tag) -> None:
        if not self._stack:
            raise MalformedDocumentError(
                f"Close tag {tag.text} has no matching open tag",
                lineno=tag.lineno,
                source_file=self._source_file,
            )
        open_tag = self._stack.pop()
        if not names_match(open_tag, tag):
            raise TagMismatchError(
                open_tag.text,
                tag.text,
                lineno=tag.lineno,
                source_file=self._source_file,
            )

        pending = self._pending
        self._pending = None
        fused = fuse(pending, tag, self._config.indent)
        if fused is not None:
            self._line(fused)
        else:
            self._write_pending(pending)
            self._line(indent_prefix(self._config.indent, self.depth) + tag.text)
        self._flush()

    def _standalone(self, tag: Tag) -> None:
        self._write_pending(self._pending)
        self._pending = None
        self._line(indent_prefix(self._config.indent, self.depth) + tag.text)
        self._flush()

    def _open(self, tag: Tag) -> None:
        self._write_pending(self._pending)
        self._pending = None

        depth = self.depth
        self._stack.append(tag)
        if self._lexer.peek() != "<":
            self._inline(tag, depth)
        else:
            # Nesting point; fusion is decided on the next tag
            self._pending = PendingLine(tag, depth)
        self._flush()

    def _inline(self, tag: Tag, depth: int) -> None:
        """Render a leaf element whose content is a single text run."""
        lexer = self._lexer
        lexer.scan_to("<")
        text = lexer.take_token().strip()
        if self._config.unescape_entities:
            text = unescape_text(text)

        close = self._read_tag()
        if close.kind is not TagKind.CLOSE:
            raise MalformedDocumentError(
                f"Mixed content is not supported: text followed by {close.text} inside {tag.text}",
                lineno=close.lineno,
                source_file=self._source_file,
            )
        if not names_match(tag, close):
            raise TagMismatchError(
                tag.text,
                close.text,
                lineno=close.lineno,
                source_file=self._source_file,
            )
        self._stack.pop()
        self._line(indent_prefix(self._config.indent, depth) + tag.text + text + close.text)

    def _write_pending(self, pending: PendingLine | None) -> None:
        if pending is not None:
            self._line(pending.render(self._config.indent))

    def _line(self, line: str) -> None:
        self._out.append_line(line)
        self._lines += 1

    def _flush(self) -> None:
        """Write this iteration's lines to the destination."""
        if not self._out:
            return
        try:
            self._dest.write(self._out.build())
        except (OSError, UnicodeError) as exc:
            raise StreamError(f"Failed to write output: {exc}") from exc
        self._out.clear()
