"""Chunked lexer for the tagline formatter.

The lexer never holds more than one chunk of input. Tokens that straddle a
chunk boundary are stitched together in its accumulator, so callers see a
single logically infinite character sequence.

Architecture:
lexer/
├── __init__.py          # Re-exports ChunkedLexer
└── core.py              # ChunkedLexer (refill, peek, advance, scan_to)

Usage:
    >>> from io import StringIO
    >>> from tagline.lexer import ChunkedLexer
    >>> lexer = ChunkedLexer(StringIO("<a>text</a>"), chunk_size=2)
    >>> lexer.scan_to(">")
    >>> lexer.advance()
    >>> lexer.take_token()
    '<a>'

"""

from tagline.lexer.core import ChunkedLexer

__all__ = ["ChunkedLexer"]
