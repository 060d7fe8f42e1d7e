"""Tag and TagKind definitions for the tagline lexer.

The formatter pulls one tag token at a time from the lexer and classifies
it here. A Tag keeps the literal text (line breaks already removed by the
lexer) so that rendering reproduces the input byte for byte.

Thread Safety:
Tag is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from tagline.errors import MalformedDocumentError

# Characters that end a tag name
_NAME_DELIMITERS = frozenset(" \t\n\r\f\v/>")


class TagKind(Enum):
    """Shapes of tag the formatter distinguishes."""

    OPEN = auto()  # <name ...>
    CLOSE = auto()  # </name>
    SELF_CLOSING = auto()  # <name .../>
    DECLARATION = auto()  # <?xml ...?>


def tag_name(text: str) -> str:
    """Extract the element name from a tag token.

    The name starts after ``<`` (or ``</``) and runs up to the first
    whitespace, ``/`` or ``>``.

    Examples:
        >>> tag_name('<item id="3">')
        'item'
        >>> tag_name("</item >")
        'item'
    """
    start = 2 if text.startswith("</") else 1
    end = start
    text_len = len(text)
    while end < text_len and text[end] not in _NAME_DELIMITERS:
        end += 1
    return text[start:end]


@dataclass(frozen=True, slots=True)
class Tag:
    """A single tag token.

    Attributes:
        text: Literal tag text from ``<`` to ``>`` inclusive
        kind: Classified shape of the tag
        name: Element name (empty for declarations without one)
        lineno: Line the tag ended on, when known

    """

    text: str
    kind: TagKind
    name: str
    lineno: int | None = None

    @classmethod
    def from_text(
        cls,
        text: str,
        lineno: int | None = None,
        source_file: str | None = None,
        break_at: int | None = None,
    ) -> Tag:
        """Classify a raw tag token.

        ``break_at`` is the offset of a line break the lexer removed from
        ``text``. A break inside the name ends the name there, and a space
        is put back so the rendered tag keeps its attributes apart.

        Raises:
            MalformedDocumentError: If the token is not a ``<...>`` run
                of at least three characters.
        """
        if len(text) < 3 or text[0] != "<" or text[-1] != ">":
            raise MalformedDocumentError(
                f"Malformed tag {text!r}", lineno=lineno, source_file=source_file
            )
        if break_at is not None:
            text = _split_name(text, break_at)

        second = text[1]
        if second == "/":
            kind = TagKind.CLOSE
        elif second == "?":
            kind = TagKind.DECLARATION
        elif text[-2] == "/":
            kind = TagKind.SELF_CLOSING
        else:
            kind = TagKind.OPEN
        return cls(text=text, kind=kind, name=tag_name(text), lineno=lineno)

    @property
    def is_standalone(self) -> bool:
        """True for tags rendered alone with no stack interaction."""
        return self.kind in (TagKind.SELF_CLOSING, TagKind.DECLARATION)

    def __repr__(self) -> str:
        return f"Tag({self.kind.name}, {self.text!r})"


def names_match(open_tag: Tag, close_tag: Tag) -> bool:
    """Return True if ``close_tag`` closes ``open_tag``.

    Names are compared for exact equality, so ``</foobar>`` never closes
    ``<foo>``.
    """
    return open_tag.name == close_tag.name


def _split_name(text: str, break_at: int) -> str:
    start = 2 if text.startswith("</") else 1
    if start < break_at < start + len(tag_name(text)):
        return f"{text[:break_at]} {text[break_at:]}"
    return text
