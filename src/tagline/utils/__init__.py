"""Utility modules for tagline.

Provides:
- text: unescape_text, indent_prefix for rendering lines
- logger: get_logger, configure_cli_logging
"""

from tagline.utils.logger import configure_cli_logging, get_logger
from tagline.utils.text import indent_prefix, unescape_text

__all__ = [
    "configure_cli_logging",
    "get_logger",
    "indent_prefix",
    "unescape_text",
]
