"""Text helpers for rendering formatted lines.

Example:
    >>> from tagline.utils.text import unescape_text
    >>> unescape_text("fish &amp; chips")
    'fish & chips'
"""

from __future__ import annotations

import html as html_module


def unescape_text(text: str) -> str:
    """Resolve entity references in inline element text.

    Handles the predefined XML entities along with numeric references
    (``&#60;``, ``&#x3C;``) and the HTML5 named set.

    Args:
        text: Raw text taken from between an open and a close tag

    Returns:
        Text with every recognised reference replaced by its character
    """
    if "&" not in text:
        return text
    return html_module.unescape(text)


def indent_prefix(indent: str, depth: int) -> str:
    """Return the prefix for a line nested ``depth`` levels deep."""
    return indent * depth
