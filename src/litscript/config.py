"""ContextVar-based parse configuration for litscript.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The pipeline reads the active config once per parse; nothing else holds
configuration state.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from litscript import parse_script
    from litscript.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(defined_symbols=frozenset({"DOCS"}))):
        doc = parse_script(source)

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from litscript.links import LinkMergePolicy


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        defined_symbols: Preprocessor symbols treated as defined by the lexer
        link_merge_policy: Which definition wins when comment blocks
            define the same link label
        markdown_plugins: Patitas plugin names enabled for comment text
            (e.g. "table", "math")

    """

    defined_symbols: frozenset[str] = frozenset()
    link_merge_policy: LinkMergePolicy = LinkMergePolicy.LAST_WINS
    markdown_plugins: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> ParseConfig:
        """Create ParseConfig from dictionary.

        Unknown keys are silently ignored. Collections are coerced to the
        field types and the merge policy may be given by value
        ("first" or "last").

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "defined_symbols": ["DEBUG"],
            ...     "link_merge_policy": "first",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.link_merge_policy
            <LinkMergePolicy.FIRST_WINS: 'first'>

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}

        if "defined_symbols" in filtered:
            filtered["defined_symbols"] = frozenset(filtered["defined_symbols"])
        if "markdown_plugins" in filtered:
            filtered["markdown_plugins"] = tuple(filtered["markdown_plugins"])
        if "link_merge_policy" in filtered:
            filtered["link_merge_policy"] = LinkMergePolicy(filtered["link_merge_policy"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "litscript_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(markdown_plugins=("table",))):
        ...     get_parse_config().markdown_plugins
        ('table',)

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
