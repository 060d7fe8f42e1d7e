"""
tagline — streaming one-tag-per-line XML re-indenter

Reformats an XML document into canonically indented markup, one tag per
line, in a single forward pass over chunked input. No parser, no DOM: the
document never has to fit in memory.

Quick Start:
    >>> from tagline import format_string
    >>> print(format_string("<a><b></b><c> x &amp; y </c></a>"), end="")
    <a>
      <b/>
      <c>x & y</c>
    </a>

    >>> # Files, with the output path derived from the input
    >>> from tagline import format_file
    >>> format_file("feed.xml")
    PosixPath('feed_formatted.xml')

Command line:
    tagline -i feed.xml [-o out.xml]
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import TextIO

from tagline.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from tagline.errors import (
    FormatError,
    MalformedDocumentError,
    StreamError,
    TaglineError,
    TagMismatchError,
)
from tagline.formatter import PendingLine, TagFormatter, fuse
from tagline.lexer import ChunkedLexer
from tagline.profiling import FormatAccumulator, get_format_accumulator, profiled_format
from tagline.tokens import Tag, TagKind

__version__ = "0.1.0"


def format_stream(
    source: TextIO,
    dest: TextIO,
    *,
    config: FormatConfig | None = None,
    source_file: str | None = None,
) -> None:
    """Format the XML document read from ``source`` into ``dest``.

    The caller owns both streams; neither is closed here.

    Args:
        source: Readable text stream
        dest: Writable text stream
        config: Format configuration (defaults to the active context config)
        source_file: Optional source file path for error messages
    """
    TagFormatter(source, dest, config, source_file=source_file).run()


def format_string(source: str, *, config: FormatConfig | None = None) -> str:
    """Format an XML document held in memory.

    Example:
        >>> format_string("<r><x>1</x></r>")
        '<r>\\n  <x>1</x>\\n</r>\\n'
    """
    dest = io.StringIO()
    format_stream(io.StringIO(source), dest, config=config)
    return dest.getvalue()


def default_output_path(path: str | Path) -> Path:
    """Derive the output path for an input file.

    Examples:
        >>> default_output_path("data/feed.xml")
        PosixPath('data/feed_formatted.xml')
        >>> default_output_path("feed")
        PosixPath('feed_formatted')
    """
    path = Path(path)
    return path.with_name(f"{path.stem}_formatted{path.suffix}")


def format_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    encoding: str = "utf-8",
    config: FormatConfig | None = None,
) -> Path:
    """Format an XML file into another file.

    Both files are closed on every exit path, including failures.

    Args:
        input_path: File to read
        output_path: File to write (default: derived with default_output_path)
        encoding: Text encoding of both files
        config: Format configuration (defaults to the active context config)

    Returns:
        Path of the written file

    Raises:
        StreamError: If either file cannot be opened, read or written.
    """
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path is not None else default_output_path(input_path)

    try:
        with (
            input_path.open("r", encoding=encoding, newline="") as source,
            output_path.open("w", encoding=encoding, newline="\n") as dest,
        ):
            format_stream(source, dest, config=config, source_file=str(input_path))
    except OSError as exc:
        raise StreamError(f"{exc.filename or input_path}: {exc.strerror or exc}") from exc
    return output_path


__all__ = [
    "ChunkedLexer",
    "FormatAccumulator",
    "FormatConfig",
    "FormatError",
    "MalformedDocumentError",
    "PendingLine",
    "StreamError",
    "Tag",
    "TagFormatter",
    "TagKind",
    "TagMismatchError",
    "TaglineError",
    "__version__",
    "default_output_path",
    "format_config_context",
    "format_file",
    "format_stream",
    "format_string",
    "fuse",
    "get_format_accumulator",
    "get_format_config",
    "profiled_format",
    "reset_format_config",
    "set_format_config",
]
