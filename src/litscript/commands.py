"""Inline directive grammar.

A directive is a single comment line of the form::

    (*** key1:value1, key2:value2 ***)

The envelope must appear exactly once. Pairs are separated by commas;
``=`` may be used instead of ``:``, a bare key has an empty value, and a
value wrapped in double quotes is unquoted. Anything else is simply not a
directive: parse_command returns None and the line is classified as
ordinary comment or code.

Which keys are *understood* is decided by the transformer, not here, so
that an unknown key is reported with the full directive.

Thread Safety:
All functions are pure.

"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from litscript.utils.text import strip_quotes

COMMAND_OPEN: Final = "(***"
COMMAND_CLOSE: Final = "***)"

INCLUDE: Final = "include"
HIDE: Final = "hide"
DEFINE: Final = "define"

KNOWN_COMMANDS: Final = frozenset({INCLUDE, HIDE, DEFINE})

_SEPARATORS: Final = (":", "=")


def parse_command(text: str) -> MappingProxyType[str, str] | None:
    """Decode a directive line.

    Args:
        text: Concatenated comment text of one line

    Returns:
        Read-only mapping of key to value, or None if text is not a directive

    Examples:
        >>> dict(parse_command("(*** define: intro ***)"))
        {'define': 'intro'}
        >>> dict(parse_command('(*** include:"intro", hide ***)'))
        {'include': 'intro', 'hide': ''}
        >>> parse_command("(** not a command *)") is None
        True
    """
    body = _envelope_body(text.strip())
    if body is None:
        return None
    return parse_options(body)


def parse_options(body: str) -> MappingProxyType[str, str] | None:
    """Parse a ``key:value, key:value`` list.

    Returns:
        Read-only mapping, or None if the body is empty, a key is empty or
        a key repeats
    """
    options: dict[str, str] = {}
    for item in body.split(","):
        key, value = _split_pair(item)
        if not key or key in options:
            return None
        options[key] = strip_quotes(value)
    if not options:
        return None
    return MappingProxyType(options)


def format_options(options: Mapping[str, str]) -> str:
    """Render options back into directive syntax.

    Example:
        >>> format_options({"define": "intro"})
        '(*** define:intro ***)'
    """
    body = ", ".join(f"{key}:{value}" if value else key for key, value in options.items())
    return f"{COMMAND_OPEN} {body} {COMMAND_CLOSE}"


def _envelope_body(text: str) -> str | None:
    if not (text.startswith(COMMAND_OPEN) and text.endswith(COMMAND_CLOSE)):
        return None
    if len(text) < len(COMMAND_OPEN) + len(COMMAND_CLOSE):
        return None
    body = text[len(COMMAND_OPEN) : -len(COMMAND_CLOSE)]
    if COMMAND_OPEN in body or COMMAND_CLOSE in body:
        return None
    if "\n" in body:
        return None
    return body


def _split_pair(item: str) -> tuple[str, str]:
    """Split at the first ':' or '=' (whichever comes first)."""
    positions = [item.find(sep) for sep in _SEPARATORS if sep in item]
    if not positions:
        return item.strip(), ""
    cut = min(positions)
    return item[:cut].strip(), item[cut + 1 :].strip()


__all__ = [
    "COMMAND_CLOSE",
    "COMMAND_OPEN",
    "DEFINE",
    "HIDE",
    "INCLUDE",
    "KNOWN_COMMANDS",
    "format_options",
    "parse_command",
    "parse_options",
]
