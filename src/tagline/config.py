"""ContextVar-based format configuration for tagline.

Provides thread-local configuration using Python's ContextVars (PEP 567).
An explicit config passed to the formatter always wins; otherwise the
formatter reads whatever is active in the current context.

Usage:
    from tagline.config import FormatConfig, format_config_context

    with format_config_context(FormatConfig(indent="    ")):
        text = format_string("<a><b>x</b></a>")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

DEFAULT_INDENT = "  "
DEFAULT_CHUNK_SIZE = 4096


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Attributes:
        indent: String repeated once per nesting level
        chunk_size: Number of characters requested per read from the input
        unescape_entities: Resolve entity references in inline text

    """

    indent: str = DEFAULT_INDENT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    unescape_entities: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Only includes keys that are valid FormatConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> FormatConfig.from_dict({"indent": "\\t", "color": "red"}).indent
            '\\t'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (thread-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for current context.

    Args:
        config: FormatConfig instance to use for this context.

    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to the module-level default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Args:
        config: FormatConfig to use within the context.

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_INDENT",
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
]
