"""Exception classes for tagline.

Every failure is fatal: a single-pass formatter cannot recover once the
tag stack disagrees with the input, so errors propagate to the caller.
"""

from __future__ import annotations


class TaglineError(Exception):
    """Base exception for all tagline errors.

    Subclass this for specific error categories.
    """

    pass


class FormatError(TaglineError):
    """Error in the structure of the document being formatted.

    Raised when the formatter encounters input it cannot re-indent.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize format error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class TagMismatchError(FormatError):
    """A close tag does not match the open tag on top of the stack.

    Both tag texts are kept for diagnostics.
    """

    def __init__(
        self,
        open_tag: str,
        close_tag: str,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize tag mismatch error.

        Args:
            open_tag: Literal text of the open tag, e.g. ``<b>``
            close_tag: Literal text of the offending close tag, e.g. ``</c>``
            lineno: Line number of the close tag (optional)
            source_file: Path to source file (optional)
        """
        self.open_tag = open_tag
        self.close_tag = close_tag
        super().__init__(
            f"Start and end tags do not match: {open_tag} vs. {close_tag}",
            lineno=lineno,
            source_file=source_file,
        )


class MalformedDocumentError(FormatError):
    """The document is truncated or outside the supported grammar.

    Covers unclosed tags at end of input, close tags without an open tag,
    text followed by a child element (mixed content) and broken tag tokens.
    """

    pass


class StreamError(TaglineError):
    """Reading the input or writing the output failed.

    The underlying exception is chained as ``__cause__``.
    """

    pass
